"""
Worker profiles: one per user, carrying location, skills and availability.
"""

import logging

from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.models import User, Worker
from app.schemas.common import serialize, serialize_many
from app.schemas.worker import WorkerCreate, WorkerOut, WorkerUpdate

logger = logging.getLogger("workers")


class WorkerService:
    def __init__(self, db: Session):
        self.db = db

    def _get_worker(self, worker_id: int) -> Worker:
        worker = (
            self.db.query(Worker)
            .options(joinedload(Worker.user))
            .filter(Worker.id == worker_id)
            .first()
        )
        if not worker:
            raise NotFoundError("Worker not found")
        return worker

    @service_operation(
        "create",
        "Failed to create worker profile",
        conflict_message="Worker profile already exists for this user",
        reference_message="User not found",
    )
    def create(self, data: WorkerCreate, user_id: int) -> ServiceResponse:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        if self.db.query(Worker.id).filter(Worker.user_id == user_id).first():
            raise ConflictError("Worker profile already exists for this user")

        fields = data.model_dump(exclude_unset=True, exclude={"user_id"})
        if fields.get("available") is None:
            fields["available"] = True

        worker = Worker(user_id=user_id, **fields)
        self.db.add(worker)
        self.db.commit()
        self.db.refresh(worker)

        logger.info("Created worker profile %s for user %s", worker.id, user_id)
        return success_response(
            "Worker profile created successfully", serialize(WorkerOut, worker), 201
        )

    @service_operation("find all", "Failed to retrieve workers")
    def find_all(self) -> ServiceResponse:
        workers = (
            self.db.query(Worker)
            .options(joinedload(Worker.user))
            .order_by(Worker.created_at.desc(), Worker.id.desc())
            .all()
        )
        return success_response("Workers retrieved successfully", serialize_many(WorkerOut, workers))

    @service_operation("find one", "Failed to retrieve worker")
    def find_one(self, worker_id: int) -> ServiceResponse:
        worker = self._get_worker(worker_id)
        return success_response("Worker retrieved successfully", serialize(WorkerOut, worker))

    @service_operation("find by user", "Failed to retrieve worker profile")
    def find_by_user_id(self, user_id: int) -> ServiceResponse:
        worker = (
            self.db.query(Worker)
            .options(joinedload(Worker.user))
            .filter(Worker.user_id == user_id)
            .first()
        )
        if not worker:
            raise NotFoundError("Worker profile not found for this user")
        return success_response("Worker profile retrieved successfully", serialize(WorkerOut, worker))

    @service_operation("update", "Failed to update worker")
    def update(self, worker_id: int, data: WorkerUpdate) -> ServiceResponse:
        worker = self._get_worker(worker_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "available" and value is None:
                continue
            setattr(worker, field, value)

        self.db.commit()
        self.db.refresh(worker)
        return success_response("Worker updated successfully", serialize(WorkerOut, worker))

    @service_operation("remove", "Failed to delete worker")
    def remove(self, worker_id: int) -> ServiceResponse:
        worker = self._get_worker(worker_id)
        self.db.delete(worker)
        self.db.commit()
        return success_response("Worker deleted successfully")

    @service_operation("toggle availability", "Failed to toggle worker availability")
    def toggle_availability(self, worker_id: int) -> ServiceResponse:
        worker = self._get_worker(worker_id)
        worker.available = not worker.available
        self.db.commit()
        self.db.refresh(worker)

        state = "available" if worker.available else "unavailable"
        return success_response(
            f"Worker availability updated to {state}", serialize(WorkerOut, worker)
        )

    # ============== Current User ==============

    def _worker_id_for_user(self, user_id: int) -> int:
        row = self.db.query(Worker.id).filter(Worker.user_id == user_id).first()
        if not row:
            raise NotFoundError("Worker profile not found for this user")
        return row[0]

    @service_operation("update own profile", "Failed to update worker")
    def update_for_user(self, user_id: int, data: WorkerUpdate) -> ServiceResponse:
        return self.update(self._worker_id_for_user(user_id), data)

    @service_operation("toggle own availability", "Failed to toggle worker availability")
    def toggle_availability_for_user(self, user_id: int) -> ServiceResponse:
        return self.toggle_availability(self._worker_id_for_user(user_id))
