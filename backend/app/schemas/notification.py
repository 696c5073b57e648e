from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common import CamelModel, normalize_email


class SubscribeRequest(CamelModel):
    email: str
    name: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)
