"""
Job application API endpoints. All routes require authentication.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import ApplicationStatus, Role, User
from app.schemas.application import ApplicationCreate, ApplicationUpdate
from app.services.applications import ApplicationService
from app.services.notifications import NotificationDispatcher, get_notifier

router = APIRouter()


def get_application_service(
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> ApplicationService:
    return ApplicationService(db, notifier)


# ============== API Endpoints ==============


@router.post("")
def create_application(
    data: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Apply to a job.

    Workers always apply as themselves; admins name the ``workerId``. The job's
    recruiter is emailed about the new application.
    """
    if current_user.role == Role.WORKER:
        data.worker_id = current_user.id
    return envelope_response(service.create(data))


@router.get("")
def list_applications(
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """All applications, most recent first."""
    return envelope_response(service.find_all())


@router.get("/job/{job_id}")
def list_job_applications(
    job_id: int,
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return envelope_response(service.find_by_job(job_id))


@router.get("/worker/{worker_id}")
def list_worker_applications(
    worker_id: int,
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return envelope_response(service.find_by_worker(worker_id))


@router.get("/{application_id}")
def get_application(
    application_id: int,
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return envelope_response(service.find_one(application_id))


@router.patch("/{application_id}/status")
def update_application_status(
    application_id: int,
    status: ApplicationStatus = Query(...),
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    """
    Set the application status.

    Setting ACCEPTED emails the worker a work assignment confirmation.
    """
    return envelope_response(service.update_status(application_id, status))


@router.patch("/{application_id}")
def update_application(
    application_id: int,
    data: ApplicationUpdate,
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return envelope_response(service.update(application_id, data))


@router.delete("/{application_id}")
def delete_application(
    application_id: int,
    _: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return envelope_response(service.remove(application_id))
