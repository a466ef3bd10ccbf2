import logging
from resume_tracker.lib.models.base import BaseModel

logger = logging.getLogger(__name__)


class SQLAlchemySessionMiddleware:
    """
    Scope one SQLAlchemy session to one request.

    - On exceptions escaping the view: roll back
    - Always: remove the scoped session so the next request starts clean
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            return self.get_response(request)
        except Exception:
            BaseModel.cleanup_session_on_exception()
            raise
        finally:
            try:
                BaseModel.clear_session()
                logger.debug("Scoped session removed at request end")
            except Exception as e:
                logger.warning(f"Failed to remove scoped session at request end: {e}")
