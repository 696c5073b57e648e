"""
Connection request API endpoints.

Recruiters ask to be introduced to a worker; an admin approves or rejects.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_roles
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import ConnectionStatus, Role, User
from app.schemas.connection_request import ConnectionRequestCreate, ConnectionStatusUpdate
from app.services.connection_requests import ConnectionRequestService
from app.services.notifications import NotificationDispatcher, get_notifier

router = APIRouter()


def get_connection_service(
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> ConnectionRequestService:
    return ConnectionRequestService(db, notifier)


# ============== API Endpoints ==============


@router.post("")
def create_connection_request(
    data: ConnectionRequestCreate,
    _: User = Depends(require_roles(Role.ADMIN, Role.RECRUITER)),
    service: ConnectionRequestService = Depends(get_connection_service),
):
    """
    Ask for an introduction to a worker.

    ``recruiterId`` and ``workerId`` are profile ids. Every admin is emailed
    about the new request.
    """
    return envelope_response(service.create(data.recruiter_id, data.worker_id, data.message))


@router.get("")
def list_connection_requests(
    recruiter_id: Optional[int] = Query(None, alias="recruiterId"),
    worker_id: Optional[int] = Query(None, alias="workerId"),
    status: Optional[ConnectionStatus] = None,
    _: User = Depends(require_roles(Role.ADMIN, Role.RECRUITER)),
    service: ConnectionRequestService = Depends(get_connection_service),
):
    return envelope_response(service.find_all(recruiter_id, worker_id, status))


@router.get("/{request_id}")
def get_connection_request(
    request_id: int,
    _: User = Depends(get_current_user),
    service: ConnectionRequestService = Depends(get_connection_service),
):
    return envelope_response(service.find_one(request_id))


@router.put("/{request_id}/status")
def update_connection_status(
    request_id: int,
    data: ConnectionStatusUpdate,
    _: User = Depends(require_roles(Role.ADMIN)),
    service: ConnectionRequestService = Depends(get_connection_service),
):
    """
    Approve, reject or cancel a request.

    APPROVED mails both parties; REJECTED mails the recruiter.
    """
    return envelope_response(service.update_status(request_id, data.status, data.admin_notes))
