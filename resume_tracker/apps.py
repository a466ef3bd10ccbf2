import os
import sys
import logging
from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ResumeTrackerConfig(AppConfig):
    name = "resume_tracker"
    default_auto_field = "django.db.models.BigAutoField"
    verbose_name = "Resume Tracker"

    def ready(self):
        from .lib.db import init_sqlalchemy, ensure_sqlalchemy_schema

        # Environment flag for strict initialization
        strict_init = os.environ.get("SQLALCHEMY_INIT_STRICT", "True") == "True"

        try:
            init_sqlalchemy()

            # Optional auto-init schema (disabled by default)
            schema_commands = {"initsa", "collectstatic"}
            is_schema_command = any(arg in sys.argv for arg in schema_commands)
            auto_init_enabled = os.environ.get("AUTO_INIT_SQLALCHEMY", "False") == "True"
            if not is_schema_command and auto_init_enabled:
                logger.info("Auto-initializing SQLAlchemy schema")
                ensure_sqlalchemy_schema(with_advisory_lock=True)
        except Exception as e:
            if strict_init:
                logger.error(f"SQLAlchemy initialization failed: {e}")
                raise
            logger.warning(f"SQLAlchemy initialization failed, continuing: {e}")
