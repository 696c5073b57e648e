from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.enums import ApplicationStatus, AssignmentStatus, Role
from app.schemas.common import CamelModel, UserSummary, normalize_email, validate_phone
from app.schemas.job import JobOut
from app.schemas.recruiter import RecruiterProfile
from app.schemas.worker import WorkerProfile


# ============== Requests ==============


class UserCreate(CamelModel):
    """Schema for creating a user (any role)."""

    email: str
    password: str = Field(min_length=6, max_length=50)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Role = Role.WORKER
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v)


class UserUpdate(CamelModel):
    """Schema for partial user updates."""

    email: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=50)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v) if v is not None else v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v)


class UpdateRoleRequest(CamelModel):
    role: Role


# ============== Responses ==============


class UserOut(CamelModel):
    """User without password."""

    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserWithProfiles(UserOut):
    worker: Optional[WorkerProfile] = None
    recruiter: Optional[RecruiterProfile] = None


class UserApplicationItem(CamelModel):
    id: int
    job_id: int
    status: ApplicationStatus
    message: Optional[str] = None
    applied_at: datetime
    job: Optional[JobOut] = None


class UserAssignmentItem(CamelModel):
    id: int
    job_id: int
    worker_id: int
    recruiter_id: int
    work_date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: AssignmentStatus
    notes: Optional[str] = None
    worker: Optional[UserSummary] = None
    recruiter: Optional[UserSummary] = None


class UserDetail(UserWithProfiles):
    """User with every relation, for ``includeRelations=true``."""

    jobs: list[JobOut] = []
    applications: list[UserApplicationItem] = []
    work_assignments: list[UserAssignmentItem] = []
    recruiter_assignments: list[UserAssignmentItem] = []


class UserStatusOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    is_active: bool


class UserRoleOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: Role
