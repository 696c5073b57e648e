"""
Job applications: a worker's expressed interest in a job.

One application per (job, worker). Accepting an application mails the
worker a work-assignment confirmation.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.models import Application, ApplicationStatus, Job, Role, User
from app.schemas.application import ApplicationCreate, ApplicationOut, ApplicationUpdate
from app.schemas.common import serialize, serialize_many
from app.services.notifications import NotificationDispatcher, notify_safely

logger = logging.getLogger("applications")

DUPLICATE = "Application already exists for this job and worker"


class ApplicationService:
    def __init__(self, db: Session, notifier: Optional[NotificationDispatcher] = None):
        self.db = db
        self.notifier = notifier

    # ============== Helpers ==============

    def _base_query(self):
        return self.db.query(Application).options(
            joinedload(Application.job).joinedload(Job.category),
            joinedload(Application.job).joinedload(Job.recruiter),
            joinedload(Application.worker),
        )

    def _get_application(self, application_id: int) -> Application:
        application = self._base_query().filter(Application.id == application_id).first()
        if not application:
            raise NotFoundError("Application not found")
        return application

    def _ensure_job(self, job_id: int) -> None:
        if not self.db.query(Job.id).filter(Job.id == job_id).first():
            raise NotFoundError("Job not found")

    def _ensure_worker(self, worker_id: int) -> None:
        worker = (
            self.db.query(User.id).filter(User.id == worker_id, User.role == Role.WORKER).first()
        )
        if not worker:
            raise NotFoundError("Worker not found")

    def _ensure_unique(self, job_id: int, worker_id: int, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(Application.id).filter(
            Application.job_id == job_id, Application.worker_id == worker_id
        )
        if exclude_id is not None:
            query = query.filter(Application.id != exclude_id)
        if query.first():
            raise ConflictError(DUPLICATE)

    def _notify_received(self, application: Application) -> None:
        if self.notifier is None:
            return
        recruiter = application.job.recruiter
        self.notifier.send_job_application_received(
            recruiter_email=recruiter.email,
            recruiter_name=recruiter.full_name,
            job_title=application.job.title,
            worker_name=application.worker.full_name,
            application_message=application.message,
        )

    def _notify_accepted(self, application: Application) -> None:
        if self.notifier is None:
            return
        job = application.job
        self.notifier.send_work_assignment_confirmed(
            worker_email=application.worker.email,
            worker_name=application.worker.full_name,
            job_title=job.title,
            recruiter_name=job.recruiter.full_name,
        )

    def _ordered(self, query) -> list[Application]:
        return query.order_by(Application.applied_at.desc(), Application.id.desc()).all()

    # ============== Operations ==============

    @service_operation(
        "create",
        "Failed to create application",
        conflict_message=DUPLICATE,
        reference_message="Job or worker not found",
    )
    def create(self, data: ApplicationCreate) -> ServiceResponse:
        self._ensure_unique(data.job_id, data.worker_id)
        self._ensure_job(data.job_id)
        self._ensure_worker(data.worker_id)

        application = Application(
            job_id=data.job_id,
            worker_id=data.worker_id,
            message=data.message,
            status=data.status or ApplicationStatus.PENDING,
        )
        self.db.add(application)
        self.db.commit()

        application = self._get_application(application.id)
        logger.info("Worker %s applied to job %s", application.worker_id, application.job_id)

        notify_safely(self._notify_received, application)

        return success_response(
            "Application created successfully", serialize(ApplicationOut, application), 201
        )

    @service_operation("find all", "Failed to retrieve applications")
    def find_all(self) -> ServiceResponse:
        applications = self._ordered(self._base_query())
        return success_response(
            "Applications retrieved successfully", serialize_many(ApplicationOut, applications)
        )

    @service_operation("find one", "Failed to retrieve application")
    def find_one(self, application_id: int) -> ServiceResponse:
        application = self._get_application(application_id)
        return success_response("Application retrieved successfully", serialize(ApplicationOut, application))

    @service_operation("find by job", "Failed to retrieve applications")
    def find_by_job(self, job_id: int) -> ServiceResponse:
        applications = self._ordered(self._base_query().filter(Application.job_id == job_id))
        return success_response(
            "Applications retrieved successfully", serialize_many(ApplicationOut, applications)
        )

    @service_operation("find by worker", "Failed to retrieve applications")
    def find_by_worker(self, worker_id: int) -> ServiceResponse:
        applications = self._ordered(self._base_query().filter(Application.worker_id == worker_id))
        return success_response(
            "Applications retrieved successfully", serialize_many(ApplicationOut, applications)
        )

    @service_operation(
        "update",
        "Failed to update application",
        conflict_message=DUPLICATE,
        reference_message="Job or worker not found",
    )
    def update(self, application_id: int, data: ApplicationUpdate) -> ServiceResponse:
        application = self._get_application(application_id)
        changes = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if k == "message" or v is not None
        }

        if "job_id" in changes:
            self._ensure_job(changes["job_id"])
        if "worker_id" in changes:
            self._ensure_worker(changes["worker_id"])
        if "job_id" in changes or "worker_id" in changes:
            self._ensure_unique(
                changes.get("job_id", application.job_id),
                changes.get("worker_id", application.worker_id),
                exclude_id=application_id,
            )

        for field, value in changes.items():
            setattr(application, field, value)
        self.db.commit()
        self.db.expire(application)

        application = self._get_application(application_id)
        if changes.get("status") == ApplicationStatus.ACCEPTED:
            notify_safely(self._notify_accepted, application)

        return success_response("Application updated successfully", serialize(ApplicationOut, application))

    @service_operation("update status", "Failed to update application status")
    def update_status(self, application_id: int, status: ApplicationStatus) -> ServiceResponse:
        application = self._get_application(application_id)
        application.status = status
        self.db.commit()
        self.db.refresh(application)

        if status == ApplicationStatus.ACCEPTED:
            notify_safely(self._notify_accepted, application)

        return success_response(
            "Application status updated successfully", serialize(ApplicationOut, application)
        )

    @service_operation("remove", "Failed to delete application")
    def remove(self, application_id: int) -> ServiceResponse:
        application = self._get_application(application_id)
        self.db.delete(application)
        self.db.commit()
        return success_response("Application deleted successfully")
