from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.enums import ApplicationStatus, AssignmentStatus, SalaryType
from app.schemas.common import CamelModel, UserSummary


# ============== Job Categories ==============


class JobCategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class JobCategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class JobCategoryOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime


# ============== Jobs ==============


class JobCreate(CamelModel):
    """
    Schema for posting a job.

    ``recruiterId`` is ignored for recruiters (the caller is the owner);
    admins may post on behalf of a recruiter user.
    """

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    location: Optional[str] = None
    salary: Optional[int] = Field(default=None, ge=0)
    salary_type: SalaryType = SalaryType.MONTHLY
    requirements: Optional[str] = None
    working_hours: Optional[str] = None
    is_active: bool = True
    allow_multiple: bool = True
    urgent: bool = False
    skills: list[str] = []
    category_id: int
    recruiter_id: Optional[int] = None


class JobUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = None
    salary: Optional[int] = Field(default=None, ge=0)
    salary_type: Optional[SalaryType] = None
    requirements: Optional[str] = None
    working_hours: Optional[str] = None
    is_active: Optional[bool] = None
    allow_multiple: Optional[bool] = None
    urgent: Optional[bool] = None
    skills: Optional[list[str]] = None
    category_id: Optional[int] = None
    recruiter_id: Optional[int] = None


class JobOut(CamelModel):
    id: int
    title: str
    description: str
    location: Optional[str] = None
    salary: Optional[int] = None
    salary_type: SalaryType
    requirements: Optional[str] = None
    working_hours: Optional[str] = None
    is_active: bool
    allow_multiple: bool
    urgent: bool
    skills: list[str] = []
    category_id: int
    recruiter_id: int
    created_at: datetime
    updated_at: datetime
    category: Optional[JobCategoryOut] = None
    recruiter: Optional[UserSummary] = None


class JobApplicationItem(CamelModel):
    id: int
    worker_id: int
    status: ApplicationStatus
    message: Optional[str] = None
    applied_at: datetime
    worker: Optional[UserSummary] = None


class JobAssignmentItem(CamelModel):
    id: int
    worker_id: int
    work_date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: AssignmentStatus
    notes: Optional[str] = None
    worker: Optional[UserSummary] = None


class JobDetail(JobOut):
    applications: list[JobApplicationItem] = []
    work_assignments: list[JobAssignmentItem] = []
