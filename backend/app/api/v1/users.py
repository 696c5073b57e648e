"""
User API endpoints.

Registration is public; listing, search and account administration are
restricted to admins.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_roles
from app.core.responses import envelope_response
from app.db.session import get_db
from app.models import Role, User
from app.schemas.user import UpdateRoleRequest, UserCreate, UserUpdate
from app.services.notifications import NotificationDispatcher, get_notifier
from app.services.storage import LocalImageStorage, get_storage
from app.services.users import UsersService

router = APIRouter()

admin_only = require_roles(Role.ADMIN)


def get_users_service(
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
    storage: LocalImageStorage = Depends(get_storage),
) -> UsersService:
    return UsersService(db, notifier, storage)


# ============== API Endpoints ==============


@router.post("")
def create_user(data: UserCreate, service: UsersService = Depends(get_users_service)):
    """
    Register a new user.

    Sends a role-specific welcome email after the account is created.
    """
    return envelope_response(service.create(data))


@router.get("")
def list_users(
    skip: Optional[int] = Query(None, ge=0),
    take: Optional[int] = Query(None, ge=1),
    role: Optional[Role] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    include_relations: bool = Query(False, alias="includeRelations"),
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    """List users, newest first, with ``{totalCount, page, pageSize, users}``."""
    return envelope_response(
        service.find_all(skip, take, role, is_active, include_relations)
    )


@router.get("/search")
def search_users(
    q: str = Query("", description="Substring matched against name and email"),
    role: Optional[Role] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    skip: Optional[int] = Query(None, ge=0),
    take: Optional[int] = Query(None, ge=1),
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    """Case-insensitive search on first name, last name and email."""
    return envelope_response(service.search(q, role, is_active, skip, take))


@router.get("/recruiters")
def list_recruiter_users(
    skip: Optional[int] = Query(None, ge=0),
    take: Optional[int] = Query(None, ge=1),
    include_jobs: bool = Query(False, alias="includeJobs"),
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    return envelope_response(service.find_recruiters(skip, take, include_jobs))


@router.get("/workers")
def list_worker_users(
    skip: Optional[int] = Query(None, ge=0),
    take: Optional[int] = Query(None, ge=1),
    include_applications: bool = Query(False, alias="includeApplications"),
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    return envelope_response(service.find_workers(skip, take, include_applications))


@router.get("/{user_id}")
def get_user(
    user_id: int,
    include_relations: bool = Query(False, alias="includeRelations"),
    _: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
):
    return envelope_response(service.find_one(user_id, include_relations))


@router.get("/{user_id}/jobs")
def get_user_jobs(
    user_id: int,
    _: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
):
    """Jobs posted by a recruiter user (400 for other roles)."""
    return envelope_response(service.get_user_jobs(user_id))


@router.get("/{user_id}/applications")
def get_user_applications(
    user_id: int,
    _: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
):
    """Applications filed by a worker user (400 for other roles)."""
    return envelope_response(service.get_user_applications(user_id))


@router.get("/{user_id}/work-assignments")
def get_user_work_assignments(
    user_id: int,
    _: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
):
    """Assignments of a worker, or assignments made by a recruiter."""
    return envelope_response(service.get_user_work_assignments(user_id))


@router.patch("/{user_id}")
def update_user(
    user_id: int,
    data: UserUpdate,
    _: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
):
    return envelope_response(service.update(user_id, data))


@router.patch("/{user_id}/avatar")
def update_avatar(
    user_id: int,
    file: UploadFile = File(...),
    _: User = Depends(get_current_user),
    service: UsersService = Depends(get_users_service),
):
    """
    Upload a new avatar image.

    Accepts multipart form data with a single ``file`` field.
    """
    content = file.file.read()
    return envelope_response(service.update_avatar(user_id, file.filename, content))


@router.patch("/{user_id}/role")
def update_role(
    user_id: int,
    data: UpdateRoleRequest,
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    return envelope_response(service.update_role(user_id, data.role))


@router.patch("/{user_id}/status")
def toggle_user_status(
    user_id: int,
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    """Activate a deactivated user, or deactivate an active one."""
    return envelope_response(service.toggle_status(user_id))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    _: User = Depends(admin_only),
    service: UsersService = Depends(get_users_service),
):
    return envelope_response(service.remove(user_id))
