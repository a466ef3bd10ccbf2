from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


def _iso(value):
    return value.isoformat() if value is not None else None


class Resume(BaseModel):
    __tablename__ = "resume"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("app_user.id"), nullable=True)
    name = Column(String, nullable=True)
    title = Column(String, nullable=True)
    initials = Column(String, nullable=True)
    location = Column(String, nullable=True)
    location_link = Column(String, nullable=True)
    about = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    personal_website_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    # Relationships
    user = relationship("User", back_populates="resumes")
    contact = relationship(
        "Contact",
        back_populates="resume",
        uselist=False,
        cascade="all, delete-orphan",
    )
    education = relationship(
        "Education",
        back_populates="resume",
        order_by="Education.id",
        cascade="all, delete-orphan",
    )
    work = relationship(
        "Work",
        back_populates="resume",
        order_by="[Work.position, Work.id]",
        cascade="all, delete-orphan",
    )
    skills = relationship(
        "Skill",
        back_populates="resume",
        order_by="Skill.id",
        cascade="all, delete-orphan",
    )
    projects = relationship(
        "Project",
        back_populates="resume",
        order_by="[Project.position, Project.id]",
        cascade="all, delete-orphan",
    )
    job_applications = relationship("JobApplication", back_populates="resume")

    # Wire name -> column attribute for the flat scalar fields
    SCALAR_FIELDS = {
        "name": "name",
        "title": "title",
        "initials": "initials",
        "location": "location",
        "locationLink": "location_link",
        "about": "about",
        "summary": "summary",
        "avatarUrl": "avatar_url",
        "personalWebsiteUrl": "personal_website_url",
    }

    def scalar_snapshot(self) -> dict:
        """Flat attributes only, without child collections."""
        data = {"id": self.id, "userId": self.user_id}
        for key, attr in self.SCALAR_FIELDS.items():
            data[key] = getattr(self, attr)
        data["createdAt"] = _iso(self.created_at)
        data["updatedAt"] = _iso(self.updated_at)
        return data

    def to_snapshot(self) -> dict:
        """Full nested document in current fetch order."""
        data = self.scalar_snapshot()
        data["contact"] = self.contact.to_snapshot() if self.contact else None
        data["education"] = [e.to_snapshot() for e in self.education]
        data["work"] = [w.to_snapshot() for w in self.work]
        data["skills"] = [s.to_snapshot() for s in self.skills]
        data["projects"] = [p.to_snapshot() for p in self.projects]
        return data
