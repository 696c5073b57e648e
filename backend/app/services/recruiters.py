"""
Recruiter profiles, including self-registration of a recruiter account.
"""

import logging
import math
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.core.errors import BadRequestError, ConflictError, NotFoundError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.core.security import get_password_hash
from app.models import Recruiter, RecruiterType, Role, User
from app.schemas.common import serialize, serialize_many
from app.schemas.recruiter import Pagination, RecruiterCreate, RecruiterOut, RecruiterUpdate
from app.services.notifications import NotificationDispatcher, notify_safely

logger = logging.getLogger("recruiters")


class RecruiterService:
    def __init__(self, db: Session, notifier: Optional[NotificationDispatcher] = None):
        self.db = db
        self.notifier = notifier

    def _get_recruiter(self, recruiter_id: int) -> Recruiter:
        recruiter = (
            self.db.query(Recruiter)
            .options(joinedload(Recruiter.user))
            .filter(Recruiter.id == recruiter_id)
            .first()
        )
        if not recruiter:
            raise NotFoundError("Recruiter not found")
        return recruiter

    def _set_verified(self, recruiter_id: int, verified: bool) -> Recruiter:
        recruiter = self._get_recruiter(recruiter_id)
        recruiter.verified = verified
        self.db.commit()
        self.db.refresh(recruiter)
        return recruiter

    @service_operation(
        "create",
        "Failed to create recruiter",
        conflict_message="User with this email already exists",
    )
    def create(self, data: RecruiterCreate) -> ServiceResponse:
        """Register a RECRUITER user and its profile in one transaction."""
        if self.db.query(User.id).filter(User.email == data.email).first():
            raise ConflictError("User with this email already exists")

        user = User(
            email=data.email,
            password=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            avatar=data.avatar,
            role=Role.RECRUITER,
        )
        recruiter = Recruiter(
            user=user,
            company_name=data.company_name,
            type=data.type,
            description=data.description,
            location=data.location,
            website=data.website,
            verified=data.verified,
        )
        self.db.add_all([user, recruiter])
        self.db.commit()
        self.db.refresh(recruiter)

        logger.info("Registered recruiter %s (user %s)", recruiter.id, user.id)
        if self.notifier is not None:
            notify_safely(
                self.notifier.send_recruiter_welcome, user.email, user.first_name, recruiter.type
            )

        return success_response(
            "Recruiter and user created successfully", serialize(RecruiterOut, recruiter), 201
        )

    @service_operation("find all", "Failed to retrieve recruiters")
    def find_all(
        self,
        page: int = 1,
        limit: int = 25,
        type: Optional[RecruiterType] = None,
        location: Optional[str] = None,
        verified: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> ServiceResponse:
        page = max(page, 1)
        limit = max(limit, 1)

        query = self.db.query(Recruiter).join(Recruiter.user)
        if type is not None:
            query = query.filter(Recruiter.type == type)
        if location:
            query = query.filter(func.lower(Recruiter.location).like(f"%{location.lower()}%"))
        if verified is not None:
            query = query.filter(Recruiter.verified == verified)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(Recruiter.company_name).like(pattern),
                    func.lower(Recruiter.description).like(pattern),
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                )
            )

        total = query.count()
        recruiters = (
            query.options(joinedload(Recruiter.user))
            .order_by(Recruiter.created_at.desc(), Recruiter.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        total_pages = math.ceil(total / limit)
        pagination = Pagination(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )

        return success_response(
            "Recruiters retrieved successfully",
            {
                "recruiters": serialize_many(RecruiterOut, recruiters),
                "pagination": pagination.model_dump(by_alias=True),
            },
        )

    @service_operation("find one", "Failed to retrieve recruiter")
    def find_one(self, recruiter_id: int) -> ServiceResponse:
        recruiter = self._get_recruiter(recruiter_id)
        return success_response("Recruiter retrieved successfully", serialize(RecruiterOut, recruiter))

    @service_operation("find by user", "Failed to retrieve recruiter")
    def find_by_user_id(self, user_id: int) -> ServiceResponse:
        recruiter = (
            self.db.query(Recruiter)
            .options(joinedload(Recruiter.user))
            .filter(Recruiter.user_id == user_id)
            .first()
        )
        if not recruiter:
            raise NotFoundError("Recruiter profile not found for this user")
        return success_response("Recruiter retrieved successfully", serialize(RecruiterOut, recruiter))

    @service_operation(
        "update",
        "Failed to update recruiter",
        conflict_message="Recruiter profile already exists for this user",
        reference_message="Invalid user ID provided",
    )
    def update(self, recruiter_id: int, data: RecruiterUpdate) -> ServiceResponse:
        recruiter = self._get_recruiter(recruiter_id)
        changes = data.model_dump(exclude_unset=True)

        new_user_id = changes.get("user_id")
        if new_user_id is not None and new_user_id != recruiter.user_id:
            if not self.db.query(User.id).filter(User.id == new_user_id).first():
                raise BadRequestError("User does not exist")
            taken = (
                self.db.query(Recruiter.id)
                .filter(Recruiter.user_id == new_user_id, Recruiter.id != recruiter_id)
                .first()
            )
            if taken:
                raise ConflictError("Another recruiter profile already exists for this user")

        for field, value in changes.items():
            if value is None and field in ("user_id", "type", "verified"):
                continue
            setattr(recruiter, field, value)

        self.db.commit()
        self.db.refresh(recruiter)
        return success_response("Recruiter updated successfully", serialize(RecruiterOut, recruiter))

    @service_operation("remove", "Failed to delete recruiter")
    def remove(self, recruiter_id: int) -> ServiceResponse:
        recruiter = self._get_recruiter(recruiter_id)
        self.db.delete(recruiter)
        self.db.commit()
        return success_response("Recruiter deleted successfully")

    @service_operation("verify", "Failed to verify recruiter")
    def verify(self, recruiter_id: int) -> ServiceResponse:
        recruiter = self._set_verified(recruiter_id, True)
        return success_response("Recruiter verified successfully", serialize(RecruiterOut, recruiter))

    @service_operation("unverify", "Failed to unverify recruiter")
    def unverify(self, recruiter_id: int) -> ServiceResponse:
        recruiter = self._set_verified(recruiter_id, False)
        return success_response("Recruiter unverified successfully", serialize(RecruiterOut, recruiter))

    @service_operation("toggle verified", "Failed to toggle recruiter verification")
    def toggle_verified(self, recruiter_id: int) -> ServiceResponse:
        recruiter = self._get_recruiter(recruiter_id)
        recruiter = self._set_verified(recruiter_id, not recruiter.verified)
        state = "verified" if recruiter.verified else "unverified"
        return success_response(f"Recruiter {state} successfully", serialize(RecruiterOut, recruiter))

    @service_operation("stats", "Failed to retrieve recruiter statistics")
    def stats(self) -> ServiceResponse:
        total = self.db.query(func.count(Recruiter.id)).scalar()
        verified = (
            self.db.query(func.count(Recruiter.id)).filter(Recruiter.verified.is_(True)).scalar()
        )
        by_type = (
            self.db.query(Recruiter.type, func.count(Recruiter.id)).group_by(Recruiter.type).all()
        )

        return success_response(
            "Recruiter statistics retrieved successfully",
            {
                "total": total,
                "verified": verified,
                "unverified": total - verified,
                "byType": {recruiter_type.value: count for recruiter_type, count in by_type},
            },
        )
