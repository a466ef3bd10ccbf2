from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class WorkBadge(BaseModel):
    __tablename__ = "work_badge"
    id = Column(Integer, primary_key=True, autoincrement=True)
    work_id = Column(Integer, ForeignKey("work.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    work = relationship("Work", back_populates="badges")
