"""
Recruiter profile API endpoints.

``POST /recruiters`` is the public self-registration route: it creates the
RECRUITER user and its profile together.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import RecruiterType, Role, User
from app.schemas.recruiter import RecruiterCreate, RecruiterUpdate
from app.services.notifications import NotificationDispatcher, get_notifier
from app.services.recruiters import RecruiterService

router = APIRouter()

admin_only = require_roles(Role.ADMIN)


# ============== API Endpoints ==============


@router.post("")
def register_recruiter(
    data: RecruiterCreate,
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """
    Register as a recruiter.

    Creates the user account (role RECRUITER) and the recruiter profile in a
    single transaction, then sends the recruiter welcome email.
    """
    return envelope_response(RecruiterService(db, notifier).create(data))


@router.get("")
def list_recruiters(
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    type: Optional[RecruiterType] = None,
    location: Optional[str] = None,
    verified: Optional[bool] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    List recruiter profiles with filters and page-based pagination.

    ``search`` matches company name, description and the user's name.
    """
    return envelope_response(
        RecruiterService(db).find_all(page, limit, type, location, verified, search)
    )


@router.get("/stats")
def recruiter_stats(db: Session = Depends(get_db)):
    """Counts of recruiters: total, verified, unverified and per type."""
    return envelope_response(RecruiterService(db).stats())


@router.get("/user/{user_id}")
def get_recruiter_by_user(user_id: int, db: Session = Depends(get_db)):
    return envelope_response(RecruiterService(db).find_by_user_id(user_id))


@router.get("/{recruiter_id}")
def get_recruiter(recruiter_id: int, db: Session = Depends(get_db)):
    return envelope_response(RecruiterService(db).find_one(recruiter_id))


@router.patch("/{recruiter_id}")
def update_recruiter(
    recruiter_id: int,
    data: RecruiterUpdate,
    _: User = Depends(require_roles(Role.ADMIN, Role.RECRUITER)),
    db: Session = Depends(get_db),
):
    return envelope_response(RecruiterService(db).update(recruiter_id, data))


@router.patch("/{recruiter_id}/verify")
def verify_recruiter(
    recruiter_id: int,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return envelope_response(RecruiterService(db).verify(recruiter_id))


@router.patch("/{recruiter_id}/unverify")
def unverify_recruiter(
    recruiter_id: int,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return envelope_response(RecruiterService(db).unverify(recruiter_id))


@router.patch("/{recruiter_id}/toggle-verified")
def toggle_recruiter_verified(
    recruiter_id: int,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return envelope_response(RecruiterService(db).toggle_verified(recruiter_id))


@router.delete("/{recruiter_id}")
def delete_recruiter(
    recruiter_id: int,
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return envelope_response(RecruiterService(db).remove(recruiter_id))
