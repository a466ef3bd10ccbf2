from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel

DEFAULT_STATUS = "Applied"


class JobApplication(BaseModel):
    __tablename__ = "job_application"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="SET NULL"), nullable=True
    )
    company = Column(String, nullable=False)
    position = Column(String, nullable=False)
    status = Column(String, nullable=False, default=DEFAULT_STATUS)
    applied_date = Column(DateTime, default=datetime.utcnow)
    job_url = Column(String, nullable=True)
    job_description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    resume = relationship("Resume", back_populates="job_applications")

    def to_snapshot(self, include_resume=True) -> dict:
        data = {
            "id": self.id,
            "resumeId": self.resume_id,
            "company": self.company,
            "position": self.position,
            "status": self.status,
            "appliedDate": self.applied_date.isoformat() if self.applied_date else None,
            "jobUrl": self.job_url,
            "jobDescription": self.job_description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_resume:
            data["resume"] = (
                {"id": self.resume.id, "title": self.resume.title}
                if self.resume is not None
                else None
            )
        return data
