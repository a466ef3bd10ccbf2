from datetime import datetime
from django.conf import settings
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "app_user"
    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)
    ai_calls_limit = Column(Integer, nullable=False, default=50)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    # Relationships
    resumes = relationship("Resume", back_populates="user")

    @classmethod
    def anonymous(cls, session=None):
        """Return the configured single owner, creating it with a full AI quota on first use."""
        user, _ = cls.first_or_create(
            session=session,
            email=settings.ANONYMOUS_USER_EMAIL,
            defaults={
                "name": "Anonymous User",
                "ai_calls_limit": settings.AI_CALLS_LIMIT,
            },
        )
        return user

    def spend_ai_call(self, session=None) -> int:
        """Take one call off the stored quota in a single UPDATE and return what is left."""
        if session is None:
            session = self.get_session()
        try:
            session.query(User).filter(User.id == self.id).update(
                {User.ai_calls_limit: User.ai_calls_limit - 1},
                synchronize_session=False,
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        session.refresh(self)
        return self.ai_calls_limit
