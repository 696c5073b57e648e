"""
Job postings.

Jobs are owned by a RECRUITER user. Deleting a job is refused while any
application or work assignment still references it.
"""

import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.errors import BadRequestError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.models import Application, Job, JobCategory, Role, User, WorkAssignment
from app.schemas.common import serialize, serialize_many
from app.schemas.job import JobCreate, JobDetail, JobOut, JobUpdate

logger = logging.getLogger("jobs")

HAS_DEPENDENTS = "Cannot delete job with existing applications or assignments"


class JobService:
    def __init__(self, db: Session):
        self.db = db

    # ============== Helpers ==============

    def _base_query(self):
        return self.db.query(Job).options(joinedload(Job.category), joinedload(Job.recruiter))

    def _get_job(self, job_id: int) -> Job:
        job = self._base_query().filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        return job

    def _ensure_category(self, category_id: int) -> None:
        if not self.db.query(JobCategory.id).filter(JobCategory.id == category_id).first():
            raise NotFoundError("Job category not found")

    def _ensure_recruiter(self, recruiter_id: int) -> None:
        recruiter = (
            self.db.query(User.id)
            .filter(User.id == recruiter_id, User.role == Role.RECRUITER)
            .first()
        )
        if not recruiter:
            raise NotFoundError("Recruiter not found")

    # ============== Operations ==============

    @service_operation("create", "Failed to create job", reference_message="Job category not found")
    def create(self, data: JobCreate, recruiter_id: Optional[int]) -> ServiceResponse:
        """Create a job owned by ``recruiter_id`` (a RECRUITER user id)."""
        if recruiter_id is None:
            raise BadRequestError("recruiterId is required")
        self._ensure_category(data.category_id)
        self._ensure_recruiter(recruiter_id)

        fields = data.model_dump(exclude={"recruiter_id"})
        fields["skills"] = fields.get("skills") or []
        job = Job(recruiter_id=recruiter_id, **fields)
        self.db.add(job)
        self.db.commit()

        logger.info("Recruiter %s posted job %s", recruiter_id, job.id)
        return success_response("Job created successfully", serialize(JobOut, self._get_job(job.id)), 201)

    @service_operation("find all", "Failed to retrieve jobs")
    def find_all(
        self,
        active_only: bool = True,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ServiceResponse:
        query = self._base_query()
        if active_only:
            query = query.filter(Job.is_active.is_(True))
        if category_id is not None:
            query = query.filter(Job.category_id == category_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(Job.title).like(pattern),
                    func.lower(Job.description).like(pattern),
                    func.lower(Job.location).like(pattern),
                )
            )

        query = query.order_by(Job.created_at.desc(), Job.id.desc())
        if skip:
            query = query.offset(skip)
        if take:
            query = query.limit(take)

        return success_response("Jobs retrieved successfully", serialize_many(JobOut, query.all()))

    @service_operation("find posted by", "Failed to retrieve jobs")
    def find_posted_by(self, recruiter_id: int, active_only: Optional[bool] = None) -> ServiceResponse:
        """Jobs of one recruiter; ``active_only`` None means all of them."""
        query = (
            self._base_query()
            .options(selectinload(Job.applications), selectinload(Job.work_assignments))
            .filter(Job.recruiter_id == recruiter_id)
        )
        if active_only is not None:
            query = query.filter(Job.is_active.is_(active_only))

        jobs = query.order_by(Job.created_at.desc(), Job.id.desc()).all()
        return success_response("Jobs retrieved successfully", serialize_many(JobDetail, jobs))

    @service_operation("find one", "Failed to retrieve job")
    def find_one(self, job_id: int) -> ServiceResponse:
        job = self._get_job(job_id)
        return success_response("Job retrieved successfully", serialize(JobDetail, job))

    @service_operation("update", "Failed to update job", reference_message="Job category not found")
    def update(self, job_id: int, data: JobUpdate) -> ServiceResponse:
        job = self._get_job(job_id)
        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

        if "category_id" in changes:
            self._ensure_category(changes["category_id"])
        if "recruiter_id" in changes:
            self._ensure_recruiter(changes["recruiter_id"])

        for field, value in changes.items():
            setattr(job, field, value)

        self.db.commit()
        self.db.expire(job)
        return success_response("Job updated successfully", serialize(JobOut, self._get_job(job_id)))

    @service_operation("remove", "Failed to delete job", reference_message=HAS_DEPENDENTS)
    def remove(self, job_id: int) -> ServiceResponse:
        job = self._get_job(job_id)

        has_applications = self.db.query(Application.id).filter(Application.job_id == job_id).first()
        has_assignments = (
            self.db.query(WorkAssignment.id).filter(WorkAssignment.job_id == job_id).first()
        )
        if has_applications or has_assignments:
            raise BadRequestError(HAS_DEPENDENTS)

        self.db.delete(job)
        self.db.commit()
        return success_response("Job deleted successfully")

    @service_operation("toggle active", "Failed to toggle job status")
    def toggle_active(self, job_id: int) -> ServiceResponse:
        job = self._get_job(job_id)
        job.is_active = not job.is_active
        self.db.commit()
        self.db.refresh(job)

        state = "activated" if job.is_active else "deactivated"
        return success_response(f"Job {state} successfully", serialize(JobOut, job))
