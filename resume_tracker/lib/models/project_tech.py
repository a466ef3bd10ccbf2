from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class ProjectTech(BaseModel):
    __tablename__ = "project_tech"
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String, nullable=False)
    project = relationship("Project", back_populates="tech_stack")
