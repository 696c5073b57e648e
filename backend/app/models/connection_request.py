from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow
from app.models.enums import ConnectionStatus


class ConnectionRequest(Base):
    """
    Admin-mediated introduction from a recruiter profile to a worker profile.

    At most one non-cancelled request per (recruiter, worker): enforced by a
    partial unique index on both SQLite and PostgreSQL.
    """

    __tablename__ = "connection_requests"

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(
        Integer, ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    worker_id = Column(
        Integer, ForeignKey("workers.id", ondelete="CASCADE"), nullable=False, index=True
    )

    status = Column(
        Enum(ConnectionStatus, name="connection_status"),
        nullable=False,
        default=ConnectionStatus.PENDING,
    )
    message = Column(Text)
    admin_notes = Column(Text)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index(
            "uq_connection_requests_open_pair",
            "recruiter_id",
            "worker_id",
            unique=True,
            sqlite_where=text("status != 'CANCELLED'"),
            postgresql_where=text("status != 'CANCELLED'"),
        ),
    )

    # Relationships
    recruiter = relationship("Recruiter", back_populates="connection_requests")
    worker = relationship("Worker", back_populates="connection_requests")
