"""
Work assignment API endpoints. All routes require authentication.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import AssignmentStatus, Role, User
from app.schemas.work_assignment import WorkAssignmentCreate, WorkAssignmentUpdate
from app.services.notifications import NotificationDispatcher, get_notifier
from app.services.work_assignments import WorkAssignmentService

router = APIRouter()


def get_assignment_service(
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> WorkAssignmentService:
    return WorkAssignmentService(db, notifier)


@router.post("")
def create_assignment(
    data: WorkAssignmentCreate,
    current_user: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    """
    Assign a worker to a job on a date.

    ``recruiterId`` defaults to the calling recruiter, then to the job's
    owner. The worker is emailed the date and times.
    """
    if data.recruiter_id is None and current_user.role == Role.RECRUITER:
        data.recruiter_id = current_user.id
    return envelope_response(service.create(data))


@router.get("")
def list_assignments(
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    """All assignments, latest work date first."""
    return envelope_response(service.find_all())


@router.get("/worker/{worker_id}")
def list_worker_assignments(
    worker_id: int,
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.find_by_worker(worker_id))


@router.get("/job/{job_id}")
def list_job_assignments(
    job_id: int,
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.find_by_job(job_id))


@router.get("/recruiter/{recruiter_id}")
def list_recruiter_assignments(
    recruiter_id: int,
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.find_by_recruiter(recruiter_id))


@router.get("/{assignment_id}")
def get_assignment(
    assignment_id: int,
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.find_one(assignment_id))


@router.patch("/{assignment_id}/status")
def update_assignment_status(
    assignment_id: int,
    status: AssignmentStatus = Query(...),
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.update_status(assignment_id, status))


@router.patch("/{assignment_id}")
def update_assignment(
    assignment_id: int,
    data: WorkAssignmentUpdate,
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.update(assignment_id, data))


@router.delete("/{assignment_id}")
def delete_assignment(
    assignment_id: int,
    _: User = Depends(get_current_user),
    service: WorkAssignmentService = Depends(get_assignment_service),
):
    return envelope_response(service.remove(assignment_id))
