from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow
from app.models.enums import AssignmentStatus


class WorkAssignment(Base):
    """
    Confirmed, scheduled engagement between a worker and a job.

    One assignment per (job, worker, work_date); the unique constraint is the
    real enforcement, the service pre-check only gives a friendlier message.
    """

    __tablename__ = "work_assignments"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    worker_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    work_date = Column(DateTime, nullable=False, index=True)
    start_time = Column(DateTime)
    end_time = Column(DateTime)

    status = Column(
        Enum(AssignmentStatus, name="assignment_status"),
        nullable=False,
        default=AssignmentStatus.ACTIVE,
    )
    notes = Column(Text)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "job_id", "worker_id", "work_date", name="uq_work_assignments_job_worker_date"
        ),
    )

    # Relationships
    job = relationship("Job", back_populates="work_assignments")
    worker = relationship("User", back_populates="work_assignments", foreign_keys=[worker_id])
    recruiter = relationship(
        "User", back_populates="recruiter_assignments", foreign_keys=[recruiter_id]
    )
