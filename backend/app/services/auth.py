"""
Credential checks and token issuance.
"""

import logging

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, UnauthorizedError, service_operation
from app.core.responses import ServiceResponse, success_response
from app.core.security import TOKEN_TYPE, create_access_token, verify_password
from app.models import User
from app.schemas.auth import LoginResult
from app.schemas.common import serialize
from app.schemas.user import UserOut, UserWithProfiles

logger = logging.getLogger("auth")


def token_claims(user: User) -> dict:
    """JWT claims for a user: ``sub`` is the email, plus id and role."""
    return {"sub": user.email, "id": user.id, "email": user.email, "role": user.role.value}


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, email: str, password: str) -> User:
        """
        Return the user for valid credentials.

        Unknown emails and wrong passwords get the same Unauthorized error so
        the endpoint does not reveal which accounts exist.
        """
        user = self.db.query(User).filter(User.email == email.lower()).first()
        if not user or not verify_password(password, user.password):
            raise UnauthorizedError("Invalid credentials")
        if not user.is_active:
            raise ForbiddenError("Account is deactivated")
        return user

    @service_operation("login", "Login failed")
    def login(self, email: str, password: str) -> ServiceResponse:
        user = self.authenticate(email, password)
        access_token = create_access_token(token_claims(user))

        logger.info("User %s logged in", user.id)
        result = LoginResult(
            access_token=access_token,
            token_type=TOKEN_TYPE,
            user=UserOut.model_validate(user),
        )
        return success_response("Login successful", result.model_dump(mode="json", by_alias=True))

    @service_operation("profile", "Failed to retrieve profile")
    def profile(self, current_user: User) -> ServiceResponse:
        return success_response(
            "Profile retrieved successfully", serialize(UserWithProfiles, current_user)
        )
