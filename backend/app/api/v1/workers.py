"""
Worker profile API endpoints.

Workers manage their own profile through the ``/me`` routes; admins and
recruiters can browse profiles.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import Role, User
from app.schemas.worker import WorkerCreate, WorkerUpdate
from app.services.workers import WorkerService

router = APIRouter()


# ============== API Endpoints ==============


@router.post("")
def create_worker(
    data: WorkerCreate,
    current_user: User = Depends(require_roles(Role.WORKER, Role.ADMIN)),
    db: Session = Depends(get_db),
):
    """
    Create a worker profile.

    Workers create their own; admins name the owner with ``userId`` and
    default to themselves. A user can own at most one worker profile (409
    otherwise).
    """
    user_id = current_user.id
    if current_user.role == Role.ADMIN and data.user_id is not None:
        user_id = data.user_id
    return envelope_response(WorkerService(db).create(data, user_id))


@router.get("")
def list_workers(
    _: User = Depends(require_roles(Role.ADMIN, Role.RECRUITER)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).find_all())


@router.get("/me")
def get_my_profile(
    current_user: User = Depends(require_roles(Role.WORKER)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).find_by_user_id(current_user.id))


@router.patch("/me")
def update_my_profile(
    data: WorkerUpdate,
    current_user: User = Depends(require_roles(Role.WORKER)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).update_for_user(current_user.id, data))


@router.patch("/me/toggle-availability")
def toggle_my_availability(
    current_user: User = Depends(require_roles(Role.WORKER)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).toggle_availability_for_user(current_user.id))


@router.get("/{worker_id}")
def get_worker(
    worker_id: int,
    _: User = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).find_one(worker_id))


@router.patch("/{worker_id}")
def update_worker(
    worker_id: int,
    data: WorkerUpdate,
    _: User = Depends(require_roles(Role.ADMIN, Role.WORKER)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).update(worker_id, data))


@router.patch("/{worker_id}/toggle-availability")
def toggle_worker_availability(
    worker_id: int,
    _: User = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).toggle_availability(worker_id))


@router.delete("/{worker_id}")
def delete_worker(
    worker_id: int,
    _: User = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return envelope_response(WorkerService(db).remove(worker_id))
