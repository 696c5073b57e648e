"""
Job posting API endpoints.

Anyone can browse active jobs; recruiters post and manage their own jobs.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import Role, User
from app.schemas.job import JobCreate, JobUpdate
from app.services.jobs import JobService

router = APIRouter()

writers = require_roles(Role.ADMIN, Role.RECRUITER)


# ============== API Endpoints ==============


@router.post("")
def create_job(
    data: JobCreate,
    current_user: User = Depends(writers),
    db: Session = Depends(get_db),
):
    """
    Post a new job.

    Recruiters always post as themselves. Admins post on behalf of the
    recruiter named by ``recruiterId``.
    """
    recruiter_id = current_user.id if current_user.role == Role.RECRUITER else data.recruiter_id
    return envelope_response(JobService(db).create(data, recruiter_id))


@router.get("")
def list_jobs(
    active_only: bool = Query(True, alias="activeOnly"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    search: Optional[str] = None,
    skip: Optional[int] = Query(None, ge=0),
    take: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """List jobs, newest first. Only active jobs unless ``activeOnly=false``."""
    return envelope_response(JobService(db).find_all(active_only, category_id, search, skip, take))


@router.get("/myjobs")
def list_my_jobs(
    active_only: Optional[bool] = Query(None, alias="activeOnly"),
    current_user: User = Depends(require_roles(Role.RECRUITER)),
    db: Session = Depends(get_db),
):
    """Jobs posted by the calling recruiter, with applications and assignments."""
    return envelope_response(JobService(db).find_posted_by(current_user.id, active_only))


@router.get("/{job_id}")
def get_job(job_id: int, db: Session = Depends(get_db)):
    return envelope_response(JobService(db).find_one(job_id))


@router.patch("/{job_id}")
def update_job(
    job_id: int,
    data: JobUpdate,
    _: User = Depends(writers),
    db: Session = Depends(get_db),
):
    return envelope_response(JobService(db).update(job_id, data))


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    _: User = Depends(writers),
    db: Session = Depends(get_db),
):
    """Refused with 400 while applications or assignments reference the job."""
    return envelope_response(JobService(db).remove(job_id))


@router.patch("/{job_id}/toggle-active")
def toggle_job_active(
    job_id: int,
    _: User = Depends(writers),
    db: Session = Depends(get_db),
):
    return envelope_response(JobService(db).toggle_active(job_id))
