import logging
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True
    _session = None

    @classmethod
    def set_session(cls, session):
        cls._session = session

    @classmethod
    def get_session(cls):
        if cls._session is None:
            raise RuntimeError(
                "From models/base.py. Session has not been set. Call set_session() first."
            )
        return cls._session

    @classmethod
    def clear_session(cls):
        """Close and discard the current scoped session, if any."""
        session = cls._session
        if session is None:
            return
        if hasattr(session, "remove"):
            session.remove()
        else:
            session.close()

    @classmethod
    def cleanup_session_on_exception(cls):
        """Roll back whatever the current request left half-done."""
        session = cls._session
        if session is None:
            return
        try:
            session.rollback()
        except Exception as e:
            logger.warning(f"Rollback after exception failed: {e}")

    @classmethod
    def declared_tables(cls):
        return sorted(cls.metadata.tables.keys())

    @classmethod
    def first_or_create(cls, session=None, defaults=None, **kwargs):
        if session is None:
            session = cls.get_session()
        instance = session.query(cls).filter_by(**kwargs).first()
        if instance:
            return instance, False
        params = {**kwargs, **(defaults or {})}
        instance = cls(**params)
        session.add(instance)
        session.commit()
        return instance, True

    @classmethod
    def get(cls, id, session=None):
        """Find a single record by its ID."""
        if session is None:
            session = cls.get_session()
        return session.get(cls, id)

    @classmethod
    def count(cls, session=None):
        """Count the number of records in the table."""
        if session is None:
            session = cls.get_session()
        return session.query(cls).count()

