from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel, UserSummary


class WorkerUpdate(CamelModel):
    """Profile fields, all optional."""

    location: Optional[str] = Field(default=None, max_length=100)
    experience: Optional[str] = Field(default=None, max_length=2000)
    skills: Optional[str] = Field(default=None, max_length=1000)
    resume: Optional[str] = None
    available: Optional[bool] = None


class WorkerCreate(WorkerUpdate):
    """
    Schema for creating a worker profile.

    ``userId`` lets an admin create the profile for another user; workers
    always create their own.
    """

    user_id: Optional[int] = None


class WorkerProfile(CamelModel):
    """Worker profile without its user (embedded inside a user)."""

    id: int
    user_id: int
    location: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    resume: Optional[str] = None
    available: bool
    created_at: datetime
    updated_at: datetime


class WorkerOut(WorkerProfile):
    user: UserSummary
