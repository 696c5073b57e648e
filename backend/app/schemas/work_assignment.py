from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.enums import AssignmentStatus
from app.schemas.common import CamelModel, UserSummary
from app.schemas.job import JobOut


class WorkAssignmentCreate(CamelModel):
    job_id: int
    worker_id: int
    recruiter_id: Optional[int] = None
    work_date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[AssignmentStatus] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class WorkAssignmentUpdate(CamelModel):
    job_id: Optional[int] = None
    worker_id: Optional[int] = None
    recruiter_id: Optional[int] = None
    work_date: Optional[datetime] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[AssignmentStatus] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class WorkAssignmentOut(CamelModel):
    id: int
    job_id: int
    worker_id: int
    recruiter_id: int
    work_date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: AssignmentStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    job: Optional[JobOut] = None
    worker: Optional[UserSummary] = None
    recruiter: Optional[UserSummary] = None
