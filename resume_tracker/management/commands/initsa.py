from django.core.management.base import BaseCommand
from resume_tracker.lib.db import ensure_sqlalchemy_schema
from resume_tracker.lib.models.base import BaseModel


class Command(BaseCommand):
    help = "Initialize SQLAlchemy schema (create tables)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-lock",
            action="store_true",
            help="Skip PostgreSQL advisory lock during schema creation",
        )

    def handle(self, *args, **options):
        self.stdout.write("Initializing SQLAlchemy schema...")
        try:
            session = BaseModel.get_session()
            if session.bind is not None:
                self.stdout.write(
                    f"Target database: {session.bind.url.render_as_string(hide_password=True)}"
                )
            ensure_sqlalchemy_schema(with_advisory_lock=not options["no_lock"])
            self.stdout.write(f"Tables: {BaseModel.declared_tables()}")
        except Exception as e:
            self.stdout.write(self.style.ERROR(f"Failed to initialize SQLAlchemy schema: {e}"))
            raise
        self.stdout.write(
            self.style.SUCCESS("SQLAlchemy schema initialization completed successfully")
        )
