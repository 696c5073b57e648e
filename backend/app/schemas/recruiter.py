from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.enums import RecruiterType
from app.schemas.common import CamelModel, UserSummary, normalize_email, validate_phone


# ============== Requests ==============


class RecruiterCreate(CamelModel):
    """Creates a RECRUITER user together with its recruiter profile."""

    email: str
    password: str = Field(min_length=6, max_length=50)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    phone: Optional[str] = None
    avatar: Optional[str] = None

    company_name: Optional[str] = Field(default=None, max_length=100)
    type: RecruiterType = RecruiterType.INDIVIDUAL
    description: Optional[str] = Field(default=None, max_length=1000)
    location: Optional[str] = Field(default=None, max_length=100)
    website: Optional[str] = None
    verified: bool = False

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v)


class RecruiterUpdate(CamelModel):
    """Partial profile update; ``userId`` reassigns the profile to another user."""

    user_id: Optional[int] = None
    company_name: Optional[str] = Field(default=None, max_length=100)
    type: Optional[RecruiterType] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    location: Optional[str] = Field(default=None, max_length=100)
    website: Optional[str] = None
    verified: Optional[bool] = None


# ============== Responses ==============


class RecruiterProfile(CamelModel):
    id: int
    user_id: int
    company_name: Optional[str] = None
    type: RecruiterType
    description: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    verified: bool
    created_at: datetime
    updated_at: datetime


class RecruiterOut(RecruiterProfile):
    user: UserSummary


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool
