"""
User accounts: registration, lookup, search, profile and role management.
"""

import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from app.core.errors import BadRequestError, ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.core.security import get_password_hash
from app.models import Application, Job, Role, User, WorkAssignment
from app.schemas.application import ApplicationOut
from app.schemas.common import serialize, serialize_many
from app.schemas.job import JobDetail
from app.schemas.user import (
    UserCreate,
    UserDetail,
    UserOut,
    UserRoleOut,
    UserStatusOut,
    UserUpdate,
    UserWithProfiles,
)
from app.schemas.work_assignment import WorkAssignmentOut
from app.services.notifications import NotificationDispatcher, notify_safely
from app.services.storage import LocalImageStorage

logger = logging.getLogger("users")

DEFAULT_PAGE_SIZE = 10


def page_block(skip: Optional[int], take: Optional[int], total: int, rows: list) -> dict:
    """``{totalCount, page, pageSize}`` for skip/take listings."""
    return {
        "totalCount": total,
        "page": (skip // (take or DEFAULT_PAGE_SIZE)) + 1 if skip else 1,
        "pageSize": take or len(rows),
    }


class UsersService:
    def __init__(
        self,
        db: Session,
        notifier: Optional[NotificationDispatcher] = None,
        storage: Optional[LocalImageStorage] = None,
    ):
        self.db = db
        self.notifier = notifier
        self.storage = storage

    # ============== Helpers ==============

    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def _ensure_email_available(self, email: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first():
            raise ConflictError(f"Email {email} already exists")

    @staticmethod
    def _validate_role(role) -> Role:
        try:
            return Role(role)
        except ValueError:
            raise BadRequestError(f"Invalid role: {role}")

    def _store_avatar(self, avatar: Optional[tuple[str, bytes]]) -> Optional[str]:
        if not avatar:
            return None
        if self.storage is None:
            raise BadRequestError("Image uploads are not available")
        filename, content = avatar
        return self.storage.upload_image(filename, content)

    def _send_welcome(self, user: User) -> None:
        if self.notifier is None:
            return
        if user.role == Role.ADMIN:
            self.notifier.send_admin_welcome(user.email, user.first_name)
        elif user.role == Role.RECRUITER:
            self.notifier.send_recruiter_welcome(user.email, user.first_name)
        else:
            self.notifier.send_worker_welcome(user.email, user.first_name)

    def _listing_query(self, role: Optional[Role], is_active: Optional[bool]):
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        return query

    @staticmethod
    def _paginate(query, skip: Optional[int], take: Optional[int]) -> list:
        query = query.order_by(User.created_at.desc(), User.id.desc())
        if skip:
            query = query.offset(skip)
        if take:
            query = query.limit(take)
        return query.all()

    # ============== Create ==============

    @service_operation(
        "create",
        "Failed to create user",
        conflict_message="Email already exists",
    )
    def create(self, data: UserCreate, avatar: Optional[tuple[str, bytes]] = None) -> ServiceResponse:
        role = self._validate_role(data.role)
        self._ensure_email_available(data.email)

        avatar_url = self._store_avatar(avatar) or data.avatar
        user = User(
            email=data.email,
            password=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            avatar=avatar_url,
            role=role,
            is_active=data.is_active,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info("Created user %s with role %s", user.id, user.role.value)
        notify_safely(self._send_welcome, user)

        return success_response("User created successfully", serialize(UserOut, user), 201)

    # ============== Read ==============

    @service_operation("find all", "Failed to retrieve users")
    def find_all(
        self,
        skip: Optional[int] = None,
        take: Optional[int] = None,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
        include_relations: bool = False,
    ) -> ServiceResponse:
        query = self._listing_query(role, is_active)
        total = query.count()
        if include_relations:
            query = query.options(selectinload(User.worker), selectinload(User.recruiter))
        users = self._paginate(query, skip, take)

        schema = UserWithProfiles if include_relations else UserOut
        return success_response(
            "Users retrieved successfully",
            {**page_block(skip, take, total, users), "users": serialize_many(schema, users)},
        )

    @service_operation("search", "Failed to search users")
    def search(
        self,
        query_text: str,
        role: Optional[Role] = None,
        is_active: Optional[bool] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ServiceResponse:
        pattern = f"%{(query_text or '').lower()}%"
        query = self._listing_query(role, is_active).filter(
            or_(
                func.lower(User.first_name).like(pattern),
                func.lower(User.last_name).like(pattern),
                func.lower(User.email).like(pattern),
            )
        )
        total = query.count()
        users = self._paginate(query, skip, take)
        return success_response(
            "Search results retrieved successfully",
            {**page_block(skip, take, total, users), "users": serialize_many(UserOut, users)},
        )

    @service_operation("find recruiters", "Failed to retrieve recruiters")
    def find_recruiters(
        self, skip: Optional[int] = None, take: Optional[int] = None, include_jobs: bool = False
    ) -> ServiceResponse:
        query = self._listing_query(Role.RECRUITER, True).options(selectinload(User.recruiter))
        total = query.count()
        recruiters = self._paginate(query, skip, take)

        items = []
        for user in recruiters:
            item = serialize(UserWithProfiles, user)
            if include_jobs:
                jobs = (
                    self.db.query(Job)
                    .filter(Job.recruiter_id == user.id)
                    .order_by(Job.created_at.desc(), Job.id.desc())
                    .all()
                )
                item["jobs"] = serialize_many(JobDetail, jobs)
            items.append(item)

        return success_response(
            "Recruiters retrieved successfully",
            {**page_block(skip, take, total, recruiters), "recruiters": items},
        )

    @service_operation("find workers", "Failed to retrieve workers")
    def find_workers(
        self,
        skip: Optional[int] = None,
        take: Optional[int] = None,
        include_applications: bool = False,
    ) -> ServiceResponse:
        query = self._listing_query(Role.WORKER, True).options(selectinload(User.worker))
        total = query.count()
        workers = self._paginate(query, skip, take)

        items = []
        for user in workers:
            item = serialize(UserWithProfiles, user)
            if include_applications:
                item["applications"] = serialize_many(
                    ApplicationOut, self._applications_of(user.id)
                )
            items.append(item)

        return success_response(
            "Workers retrieved successfully",
            {**page_block(skip, take, total, workers), "workers": items},
        )

    @service_operation("find one", "Failed to retrieve user")
    def find_one(self, user_id: int, include_relations: bool = False) -> ServiceResponse:
        user = self._get_user(user_id)
        schema = UserDetail if include_relations else UserOut
        return success_response("User retrieved successfully", serialize(schema, user))

    def _applications_of(self, user_id: int) -> list[Application]:
        return (
            self.db.query(Application)
            .filter(Application.worker_id == user_id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
            .all()
        )

    @service_operation("get user jobs", "Failed to retrieve user jobs")
    def get_user_jobs(self, user_id: int) -> ServiceResponse:
        user = self._get_user(user_id)
        if user.role != Role.RECRUITER:
            raise BadRequestError("Only recruiters can have jobs")

        jobs = (
            self.db.query(Job)
            .filter(Job.recruiter_id == user_id)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )
        return success_response("User jobs retrieved successfully", serialize_many(JobDetail, jobs))

    @service_operation("get user applications", "Failed to retrieve user applications")
    def get_user_applications(self, user_id: int) -> ServiceResponse:
        user = self._get_user(user_id)
        if user.role != Role.WORKER:
            raise BadRequestError("Only workers can have applications")

        return success_response(
            "User applications retrieved successfully",
            serialize_many(ApplicationOut, self._applications_of(user_id)),
        )

    @service_operation("get user work assignments", "Failed to retrieve work assignments")
    def get_user_work_assignments(self, user_id: int) -> ServiceResponse:
        user = self._get_user(user_id)

        if user.role == Role.WORKER:
            column = WorkAssignment.worker_id
        elif user.role == Role.RECRUITER:
            column = WorkAssignment.recruiter_id
        else:
            raise BadRequestError("Only workers and recruiters can have work assignments")

        assignments = (
            self.db.query(WorkAssignment)
            .filter(column == user_id)
            .order_by(WorkAssignment.created_at.desc(), WorkAssignment.id.desc())
            .all()
        )
        return success_response(
            "Work assignments retrieved successfully",
            serialize_many(WorkAssignmentOut, assignments),
        )

    # ============== Update ==============

    @service_operation(
        "update",
        "Failed to update user",
        conflict_message="Email already exists",
    )
    def update(
        self, user_id: int, data: UserUpdate, avatar: Optional[tuple[str, bytes]] = None
    ) -> ServiceResponse:
        user = self._get_user(user_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("email") and changes["email"] != user.email:
            self._ensure_email_available(changes["email"], exclude_id=user_id)
        if changes.get("role") is not None:
            changes["role"] = self._validate_role(changes["role"])
        if changes.get("password"):
            changes["password"] = get_password_hash(changes["password"])

        avatar_url = self._store_avatar(avatar)
        if avatar_url:
            changes["avatar"] = avatar_url

        for field, value in changes.items():
            if value is None and field in ("email", "password", "first_name", "last_name", "role", "is_active"):
                continue
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return success_response("User updated successfully", serialize(UserOut, user))

    @service_operation("update avatar", "Failed to update avatar")
    def update_avatar(self, user_id: int, filename: str, content: bytes) -> ServiceResponse:
        user = self._get_user(user_id)
        user.avatar = self._store_avatar((filename, content))
        self.db.commit()
        self.db.refresh(user)
        return success_response("Avatar updated successfully", serialize(UserOut, user))

    @service_operation("update role", "Failed to update user role")
    def update_role(self, user_id: int, role) -> ServiceResponse:
        new_role = self._validate_role(role)
        user = self._get_user(user_id)
        user.role = new_role
        self.db.commit()
        self.db.refresh(user)
        return success_response(f"User role updated to {new_role.value}", serialize(UserRoleOut, user))

    @service_operation("toggle status", "Failed to toggle user status")
    def toggle_status(self, user_id: int) -> ServiceResponse:
        user = self._get_user(user_id)
        user.is_active = not user.is_active
        self.db.commit()
        self.db.refresh(user)

        state = "activated" if user.is_active else "deactivated"
        return success_response(f"User {state} successfully", serialize(UserStatusOut, user))

    # ============== Delete ==============

    @service_operation(
        "remove",
        "Failed to delete user",
        reference_message="Cannot delete user with existing jobs, applications or assignments",
    )
    def remove(self, user_id: int) -> ServiceResponse:
        user = self._get_user(user_id)
        self.db.delete(user)
        self.db.commit()
        return success_response("User deleted successfully")
