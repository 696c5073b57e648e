from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow
from app.models.enums import RecruiterType


class Recruiter(Base):
    """Hiring-entity profile (company, group or individual) of a RECRUITER user."""

    __tablename__ = "recruiters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    company_name = Column(String)
    type = Column(
        Enum(RecruiterType, name="recruiter_type"),
        nullable=False,
        default=RecruiterType.INDIVIDUAL,
    )
    description = Column(Text)
    location = Column(String)
    website = Column(String)
    verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="recruiter")
    connection_requests = relationship(
        "ConnectionRequest", back_populates="recruiter", passive_deletes=True
    )
