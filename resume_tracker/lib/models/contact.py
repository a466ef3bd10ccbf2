from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Contact(BaseModel):
    __tablename__ = "contact"
    id = Column(Integer, primary_key=True, autoincrement=True)
    resume_id = Column(
        Integer, ForeignKey("resume.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    email = Column(String, nullable=True)
    tel = Column(String, nullable=True)
    # Relationships
    resume = relationship("Resume", back_populates="contact")
    social = relationship(
        "SocialLink",
        back_populates="contact",
        order_by="SocialLink.id",
        cascade="all, delete-orphan",
    )

    def to_snapshot(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "tel": self.tel,
            "social": [link.to_snapshot() for link in self.social],
        }
