from app.models.enums import (
    ApplicationStatus,
    AssignmentStatus,
    ConnectionStatus,
    RecruiterType,
    Role,
    SalaryType,
)
from app.models.user import User
from app.models.worker import Worker
from app.models.recruiter import Recruiter
from app.models.job import Job, JobCategory
from app.models.application import Application
from app.models.work_assignment import WorkAssignment
from app.models.connection_request import ConnectionRequest

__all__ = [
    "ApplicationStatus",
    "AssignmentStatus",
    "ConnectionStatus",
    "RecruiterType",
    "Role",
    "SalaryType",
    "User",
    "Worker",
    "Recruiter",
    "Job",
    "JobCategory",
    "Application",
    "WorkAssignment",
    "ConnectionRequest",
]
