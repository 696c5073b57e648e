"""
Admin-mediated connection requests from recruiter profiles to worker profiles.

Only one non-cancelled request may exist per (recruiter, worker) pair. Every
admin is told about new requests; the admin's decision is mailed back to the
parties.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.models import ConnectionRequest, ConnectionStatus, Recruiter, Role, User, Worker
from app.schemas.common import serialize, serialize_many
from app.schemas.connection_request import ConnectionRequestOut
from app.services.notifications import NotificationDispatcher, notify_safely

logger = logging.getLogger("connection_requests")

DUPLICATE = "Connection request already exists"


class ConnectionRequestService:
    def __init__(self, db: Session, notifier: Optional[NotificationDispatcher] = None):
        self.db = db
        self.notifier = notifier

    def _base_query(self):
        return self.db.query(ConnectionRequest).options(
            joinedload(ConnectionRequest.recruiter).joinedload(Recruiter.user),
            joinedload(ConnectionRequest.worker).joinedload(Worker.user),
        )

    def _get_request(self, request_id: int) -> ConnectionRequest:
        request = self._base_query().filter(ConnectionRequest.id == request_id).first()
        if not request:
            raise NotFoundError("Connection request not found")
        return request

    def _notify_admins(self, request: ConnectionRequest) -> None:
        if self.notifier is None:
            return
        admin_emails = [
            email for (email,) in self.db.query(User.email).filter(User.role == Role.ADMIN)
        ]
        self.notifier.notify_admins_new_connection_request(admin_emails, request)

    def _notify_decision(self, request: ConnectionRequest) -> None:
        if self.notifier is None:
            return
        if request.status == ConnectionStatus.APPROVED:
            self.notifier.send_connection_approved(request)
        elif request.status == ConnectionStatus.REJECTED:
            self.notifier.send_connection_rejected(request)

    @service_operation(
        "create",
        "Failed to create connection request",
        conflict_message=DUPLICATE,
        reference_message="Recruiter or worker not found",
    )
    def create(self, recruiter_id: int, worker_id: int, message: Optional[str] = None) -> ServiceResponse:
        existing = (
            self.db.query(ConnectionRequest.id)
            .filter(
                ConnectionRequest.recruiter_id == recruiter_id,
                ConnectionRequest.worker_id == worker_id,
                ConnectionRequest.status != ConnectionStatus.CANCELLED,
            )
            .first()
        )
        if existing:
            raise ConflictError(DUPLICATE)

        if not self.db.query(Recruiter.id).filter(Recruiter.id == recruiter_id).first():
            raise NotFoundError("Recruiter not found")
        if not self.db.query(Worker.id).filter(Worker.id == worker_id).first():
            raise NotFoundError("Worker not found")

        request = ConnectionRequest(
            recruiter_id=recruiter_id,
            worker_id=worker_id,
            message=message,
            status=ConnectionStatus.PENDING,
        )
        self.db.add(request)
        self.db.commit()

        request = self._get_request(request.id)
        logger.info(
            "Recruiter %s requested connection to worker %s", recruiter_id, worker_id
        )

        notify_safely(self._notify_admins, request)

        return success_response(
            "Connection request created successfully",
            serialize(ConnectionRequestOut, request),
            201,
        )

    @service_operation("find all", "Failed to retrieve connection requests")
    def find_all(
        self,
        recruiter_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        status: Optional[ConnectionStatus] = None,
    ) -> ServiceResponse:
        query = self._base_query()
        if recruiter_id is not None:
            query = query.filter(ConnectionRequest.recruiter_id == recruiter_id)
        if worker_id is not None:
            query = query.filter(ConnectionRequest.worker_id == worker_id)
        if status is not None:
            query = query.filter(ConnectionRequest.status == status)

        requests = query.order_by(
            ConnectionRequest.created_at.desc(), ConnectionRequest.id.desc()
        ).all()
        return success_response(
            "Connection requests retrieved successfully",
            serialize_many(ConnectionRequestOut, requests),
        )

    @service_operation("find one", "Failed to retrieve connection request")
    def find_one(self, request_id: int) -> ServiceResponse:
        request = self._get_request(request_id)
        return success_response(
            "Connection request retrieved successfully", serialize(ConnectionRequestOut, request)
        )

    @service_operation(
        "update status",
        "Failed to update connection request status",
        conflict_message=DUPLICATE,
    )
    def update_status(
        self,
        request_id: int,
        status: ConnectionStatus,
        admin_notes: Optional[str] = None,
    ) -> ServiceResponse:
        request = self._get_request(request_id)
        request.status = status
        if admin_notes is not None:
            request.admin_notes = admin_notes
        self.db.commit()
        self.db.refresh(request)

        logger.info("Connection request %s set to %s", request_id, status.value)
        notify_safely(self._notify_decision, request)

        return success_response(
            "Connection request status updated successfully",
            serialize(ConnectionRequestOut, request),
        )
