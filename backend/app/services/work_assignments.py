"""
Work assignments: confirmed, scheduled engagements of a worker on a job.
"""

import logging
from datetime import timezone
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.models import AssignmentStatus, Job, Role, User, WorkAssignment
from app.schemas.common import serialize, serialize_many
from app.schemas.work_assignment import WorkAssignmentCreate, WorkAssignmentOut, WorkAssignmentUpdate
from app.services.notifications import NotificationDispatcher, notify_safely

logger = logging.getLogger("work_assignments")

DUPLICATE = "Worker already assigned to this job on the specified date"


class WorkAssignmentService:
    def __init__(self, db: Session, notifier: Optional[NotificationDispatcher] = None):
        self.db = db
        self.notifier = notifier

    # ============== Helpers ==============

    def _base_query(self):
        return self.db.query(WorkAssignment).options(
            joinedload(WorkAssignment.job).joinedload(Job.category),
            joinedload(WorkAssignment.job).joinedload(Job.recruiter),
            joinedload(WorkAssignment.worker),
            joinedload(WorkAssignment.recruiter),
        )

    def _get_assignment(self, assignment_id: int) -> WorkAssignment:
        assignment = self._base_query().filter(WorkAssignment.id == assignment_id).first()
        if not assignment:
            raise NotFoundError("Work assignment not found")
        return assignment

    def _ensure_job(self, job_id: int) -> Job:
        job = self.db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        return job

    def _ensure_user(self, user_id: int, role: Role, message: str) -> None:
        if not self.db.query(User.id).filter(User.id == user_id, User.role == role).first():
            raise NotFoundError(message)

    def _ensure_unique(self, job_id, worker_id, work_date, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(WorkAssignment.id).filter(
            WorkAssignment.job_id == job_id,
            WorkAssignment.worker_id == worker_id,
            WorkAssignment.work_date == work_date,
        )
        if exclude_id is not None:
            query = query.filter(WorkAssignment.id != exclude_id)
        if query.first():
            raise ConflictError(DUPLICATE)

    @staticmethod
    def _naive(value):
        """Store datetimes as naive UTC."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def _notify_assigned(self, assignment: WorkAssignment) -> None:
        if self.notifier is None:
            return
        self.notifier.send_work_assignment_confirmed(
            worker_email=assignment.worker.email,
            worker_name=assignment.worker.full_name,
            job_title=assignment.job.title,
            recruiter_name=assignment.recruiter.full_name,
            work_date=assignment.work_date,
            start_time=assignment.start_time,
            end_time=assignment.end_time,
        )

    def _ordered(self, query) -> list[WorkAssignment]:
        return query.order_by(WorkAssignment.work_date.desc(), WorkAssignment.id.desc()).all()

    # ============== Operations ==============

    @service_operation(
        "create",
        "Failed to create work assignment",
        conflict_message=DUPLICATE,
        reference_message="Job, worker or recruiter not found",
    )
    def create(self, data: WorkAssignmentCreate) -> ServiceResponse:
        work_date = self._naive(data.work_date)
        self._ensure_unique(data.job_id, data.worker_id, work_date)

        job = self._ensure_job(data.job_id)
        recruiter_id = data.recruiter_id or job.recruiter_id
        self._ensure_user(data.worker_id, Role.WORKER, "Worker not found")
        self._ensure_user(recruiter_id, Role.RECRUITER, "Recruiter not found")

        assignment = WorkAssignment(
            job_id=data.job_id,
            worker_id=data.worker_id,
            recruiter_id=recruiter_id,
            work_date=work_date,
            start_time=self._naive(data.start_time),
            end_time=self._naive(data.end_time),
            status=data.status or AssignmentStatus.ACTIVE,
            notes=data.notes,
        )
        self.db.add(assignment)
        self.db.commit()

        assignment = self._get_assignment(assignment.id)
        logger.info("Assigned worker %s to job %s", assignment.worker_id, assignment.job_id)

        notify_safely(self._notify_assigned, assignment)

        return success_response(
            "Work assignment created successfully", serialize(WorkAssignmentOut, assignment), 201
        )

    @service_operation("find all", "Failed to retrieve work assignments")
    def find_all(self) -> ServiceResponse:
        assignments = self._ordered(self._base_query())
        return success_response(
            "Work assignments retrieved successfully", serialize_many(WorkAssignmentOut, assignments)
        )

    @service_operation("find one", "Failed to retrieve work assignment")
    def find_one(self, assignment_id: int) -> ServiceResponse:
        assignment = self._get_assignment(assignment_id)
        return success_response(
            "Work assignment retrieved successfully", serialize(WorkAssignmentOut, assignment)
        )

    @service_operation("find by worker", "Failed to retrieve worker assignments")
    def find_by_worker(self, worker_id: int) -> ServiceResponse:
        assignments = self._ordered(self._base_query().filter(WorkAssignment.worker_id == worker_id))
        return success_response(
            "Worker assignments retrieved successfully", serialize_many(WorkAssignmentOut, assignments)
        )

    @service_operation("find by job", "Failed to retrieve job assignments")
    def find_by_job(self, job_id: int) -> ServiceResponse:
        assignments = self._ordered(self._base_query().filter(WorkAssignment.job_id == job_id))
        return success_response(
            "Job assignments retrieved successfully", serialize_many(WorkAssignmentOut, assignments)
        )

    @service_operation("find by recruiter", "Failed to retrieve recruiter assignments")
    def find_by_recruiter(self, recruiter_id: int) -> ServiceResponse:
        assignments = self._ordered(
            self._base_query().filter(WorkAssignment.recruiter_id == recruiter_id)
        )
        return success_response(
            "Recruiter assignments retrieved successfully",
            serialize_many(WorkAssignmentOut, assignments),
        )

    @service_operation(
        "update",
        "Failed to update work assignment",
        conflict_message=DUPLICATE,
        reference_message="Job, worker or recruiter not found",
    )
    def update(self, assignment_id: int, data: WorkAssignmentUpdate) -> ServiceResponse:
        assignment = self._get_assignment(assignment_id)
        nullable = {"start_time", "end_time", "notes"}
        changes = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if k in nullable or v is not None
        }
        for field in ("work_date", "start_time", "end_time"):
            if field in changes:
                changes[field] = self._naive(changes[field])

        if "job_id" in changes:
            self._ensure_job(changes["job_id"])
        if "worker_id" in changes:
            self._ensure_user(changes["worker_id"], Role.WORKER, "Worker not found")
        if "recruiter_id" in changes:
            self._ensure_user(changes["recruiter_id"], Role.RECRUITER, "Recruiter not found")
        if {"job_id", "worker_id", "work_date"} & changes.keys():
            self._ensure_unique(
                changes.get("job_id", assignment.job_id),
                changes.get("worker_id", assignment.worker_id),
                changes.get("work_date", assignment.work_date),
                exclude_id=assignment_id,
            )

        for field, value in changes.items():
            setattr(assignment, field, value)
        self.db.commit()
        self.db.expire(assignment)

        return success_response(
            "Work assignment updated successfully",
            serialize(WorkAssignmentOut, self._get_assignment(assignment_id)),
        )

    @service_operation("update status", "Failed to update work assignment status")
    def update_status(self, assignment_id: int, status: AssignmentStatus) -> ServiceResponse:
        assignment = self._get_assignment(assignment_id)
        assignment.status = status
        self.db.commit()
        self.db.refresh(assignment)
        return success_response(
            "Work assignment status updated successfully", serialize(WorkAssignmentOut, assignment)
        )

    @service_operation("remove", "Failed to delete work assignment")
    def remove(self, assignment_id: int) -> ServiceResponse:
        assignment = self._get_assignment(assignment_id)
        self.db.delete(assignment)
        self.db.commit()
        return success_response("Work assignment deleted successfully")
