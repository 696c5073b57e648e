from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow
from app.models.enums import Role


class User(Base):
    """User account; owns at most one worker or recruiter profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash, never serialized
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String)
    avatar = Column(String)
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.WORKER)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    worker = relationship(
        "Worker", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    recruiter = relationship(
        "Recruiter", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    jobs = relationship("Job", back_populates="recruiter", passive_deletes="all")
    applications = relationship("Application", back_populates="worker", passive_deletes="all")
    work_assignments = relationship(
        "WorkAssignment",
        back_populates="worker",
        foreign_keys="WorkAssignment.worker_id",
        passive_deletes="all",
    )
    recruiter_assignments = relationship(
        "WorkAssignment",
        back_populates="recruiter",
        foreign_keys="WorkAssignment.recruiter_id",
        passive_deletes="all",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
