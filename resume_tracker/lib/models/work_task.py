from sqlalchemy import Column, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class WorkTask(BaseModel):
    __tablename__ = "work_task"
    id = Column(Integer, primary_key=True, autoincrement=True)
    work_id = Column(Integer, ForeignKey("work.id", ondelete="CASCADE"), nullable=False)
    description = Column(Text, nullable=False)
    work = relationship("Work", back_populates="tasks")
