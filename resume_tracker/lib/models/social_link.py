from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class SocialLink(BaseModel):
    __tablename__ = "social_link"
    id = Column(Integer, primary_key=True, autoincrement=True)
    contact_id = Column(
        Integer, ForeignKey("contact.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String, nullable=True)
    url = Column(String, nullable=True)
    contact = relationship("Contact", back_populates="social")

    def to_snapshot(self) -> dict:
        return {"id": self.id, "name": self.name, "url": self.url}
