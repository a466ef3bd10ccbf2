from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Education(BaseModel):
    __tablename__ = "education"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="CASCADE"), nullable=False
    )
    school = Column(String, nullable=True)
    degree = Column(String, nullable=True)
    # Free-form, e.g. "2016" or "Sep 2016"
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)
    resume = relationship("Resume", back_populates="education")

    def to_snapshot(self) -> dict:
        return {
            "id": self.id,
            "school": self.school,
            "degree": self.degree,
            "start": self.start_date,
            "end": self.end_date,
        }
