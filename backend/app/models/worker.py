from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class Worker(Base):
    """Job-seeker profile attached to a WORKER user."""

    __tablename__ = "workers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    location = Column(String)
    experience = Column(Text)
    skills = Column(Text)  # free text, e.g. "JavaScript, React, Node.js"
    resume = Column(String)  # URL or path
    available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="worker")
    connection_requests = relationship(
        "ConnectionRequest", back_populates="worker", passive_deletes=True
    )
