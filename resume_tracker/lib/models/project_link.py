from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class ProjectLink(BaseModel):
    __tablename__ = "project_link"
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    label = Column(String, nullable=False)
    href = Column(String, nullable=False)
    project = relationship("Project", back_populates="link")
