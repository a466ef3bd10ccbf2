from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from .base import BaseModel


class OpenAiResponse(BaseModel):
    """Raw prompt/response pair kept for every successful refinement call."""

    __tablename__ = "open_ai_response"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="SET NULL"), nullable=True
    )
    prompt = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
