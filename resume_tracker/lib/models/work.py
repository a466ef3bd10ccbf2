from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Work(BaseModel):
    __tablename__ = "work"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)
    company = Column(String, nullable=True)
    link = Column(String, nullable=True)
    title = Column(String, nullable=True)
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    # Relationships
    resume = relationship("Resume", back_populates="work")
    badges = relationship(
        "WorkBadge",
        back_populates="work",
        order_by="WorkBadge.id",
        cascade="all, delete-orphan",
    )
    tasks = relationship(
        "WorkTask",
        back_populates="work",
        order_by="WorkTask.id",
        cascade="all, delete-orphan",
    )

    def to_snapshot(self) -> dict:
        return {
            "id": self.id,
            "company": self.company,
            "link": self.link,
            "title": self.title,
            "start": self.start_date,
            "end": self.end_date,
            "description": self.description,
            "badges": [{"id": b.id, "name": b.name} for b in self.badges],
            "tasks": [{"id": t.id, "description": t.description} for t in self.tasks],
        }
