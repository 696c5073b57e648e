from pydantic import BaseModel, field_validator

from app.schemas.common import CamelModel, normalize_email
from app.schemas.user import UserOut


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class LoginResult(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class Token(BaseModel):
    """OAuth2 token response (snake_case, as OAuth2 clients expect)."""

    access_token: str
    token_type: str = "bearer"
