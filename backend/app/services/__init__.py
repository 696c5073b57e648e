from app.services.applications import ApplicationService
from app.services.auth import AuthService
from app.services.connection_requests import ConnectionRequestService
from app.services.job_categories import JobCategoryService
from app.services.jobs import JobService
from app.services.notifications import NotificationDispatcher, get_notifier
from app.services.recruiters import RecruiterService
from app.services.storage import LocalImageStorage, get_storage
from app.services.users import UsersService
from app.services.work_assignments import WorkAssignmentService
from app.services.workers import WorkerService

__all__ = [
    "ApplicationService",
    "AuthService",
    "ConnectionRequestService",
    "JobCategoryService",
    "JobService",
    "NotificationDispatcher",
    "get_notifier",
    "RecruiterService",
    "LocalImageStorage",
    "get_storage",
    "UsersService",
    "WorkAssignmentService",
    "WorkerService",
]
