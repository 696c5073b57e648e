from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow
from app.models.enums import SalaryType


class JobCategory(Base):
    """Category a job is filed under (e.g. "Teacher", "Nanny")."""

    __tablename__ = "job_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    jobs = relationship("Job", back_populates="category", passive_deletes="all")


class Job(Base):
    """Job posting created by a recruiter user."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String)

    salary = Column(Integer)
    salary_type = Column(
        Enum(SalaryType, name="salary_type"), nullable=False, default=SalaryType.MONTHLY
    )
    requirements = Column(Text)
    working_hours = Column(String)

    is_active = Column(Boolean, nullable=False, default=True)
    allow_multiple = Column(Boolean, nullable=False, default=True)
    urgent = Column(Boolean, nullable=False, default=False)
    skills = Column(JSON, default=list)  # ["Communication", "Teamwork"]

    category_id = Column(Integer, ForeignKey("job_categories.id"), nullable=False, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    category = relationship("JobCategory", back_populates="jobs")
    recruiter = relationship("User", back_populates="jobs")
    applications = relationship("Application", back_populates="job", passive_deletes="all")
    work_assignments = relationship(
        "WorkAssignment", back_populates="job", passive_deletes="all"
    )
