"""
Job category API endpoints. Reads are public, writes are admin-only.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import Role, User
from app.schemas.job import JobCategoryCreate, JobCategoryUpdate
from app.services.job_categories import JobCategoryService

router = APIRouter()

admin_only = require_roles(Role.ADMIN)


@router.post("")
def create_category(
    data: JobCategoryCreate,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return envelope_response(JobCategoryService(db).create(data))


@router.get("")
def list_categories(db: Session = Depends(get_db)):
    """All categories ordered by name."""
    return envelope_response(JobCategoryService(db).find_all())


@router.get("/{category_id}")
def get_category(category_id: int, db: Session = Depends(get_db)):
    return envelope_response(JobCategoryService(db).find_one(category_id))


@router.patch("/{category_id}")
def update_category(
    category_id: int,
    data: JobCategoryUpdate,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return envelope_response(JobCategoryService(db).update(category_id, data))


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    """Refused with 400 while any job is filed under the category."""
    return envelope_response(JobCategoryService(db).remove(category_id))
