from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from .base import BaseModel


class AiRefinement(BaseModel):
    """Audit row for a committed refinement, holding the refinements as JSON text."""

    __tablename__ = "ai_refinement"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="SET NULL"), nullable=True
    )
    job_application_id = Column(
        Integer, ForeignKey("job_application.id", ondelete="SET NULL"), nullable=True
    )
    refinements = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
