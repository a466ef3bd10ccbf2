from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Skill(BaseModel):
    __tablename__ = "skill"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String, nullable=False)
    resume = relationship("Resume", back_populates="skills")

    def to_snapshot(self) -> dict:
        return {"id": self.id, "name": self.name}
