from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.enums import ApplicationStatus
from app.schemas.common import CamelModel, UserSummary
from app.schemas.job import JobOut


class ApplicationCreate(CamelModel):
    """
    Schema for applying to a job.

    ``workerId`` is the applying user's id; workers may only apply as
    themselves, admins may file on a worker's behalf.
    """

    job_id: int
    worker_id: Optional[int] = None
    message: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[ApplicationStatus] = None


class ApplicationUpdate(CamelModel):
    job_id: Optional[int] = None
    worker_id: Optional[int] = None
    message: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[ApplicationStatus] = None


class ApplicationOut(CamelModel):
    id: int
    job_id: int
    worker_id: int
    status: ApplicationStatus
    message: Optional[str] = None
    applied_at: datetime
    updated_at: datetime
    job: Optional[JobOut] = None
    worker: Optional[UserSummary] = None
