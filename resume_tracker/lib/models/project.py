from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Project(BaseModel):
    __tablename__ = "project"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    # Relationships
    resume = relationship("Resume", back_populates="projects")
    tech_stack = relationship(
        "ProjectTech",
        back_populates="project",
        order_by="ProjectTech.id",
        cascade="all, delete-orphan",
    )
    link = relationship(
        "ProjectLink",
        back_populates="project",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def to_snapshot(self) -> dict:
        link = None
        if self.link is not None:
            link = {"id": self.link.id, "label": self.link.label, "href": self.link.href}
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "techStack": [{"id": t.id, "name": t.name} for t in self.tech_stack],
            "link": link,
        }
