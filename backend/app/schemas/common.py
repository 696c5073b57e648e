"""
Shared schema building blocks.

Wire format is camelCase (``jobId``, ``firstName``); Python attributes stay
snake_case and are read straight from ORM rows.
"""

import re
from typing import Any, Iterable, Optional, Type

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
PHONE_PATTERN = r"^[\+]?[1-9][\d]{0,15}$"


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, snake_case names accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    """Public subset of a user embedded in other resources."""

    id: int
    first_name: str
    last_name: str
    email: str
    avatar: Optional[str] = None


def normalize_email(value: str) -> str:
    """Validate email format and lower-case it."""
    value = value.strip()
    if not re.match(EMAIL_PATTERN, value):
        raise ValueError("Invalid email format")
    return value.lower()


def validate_phone(value: Optional[str]) -> Optional[str]:
    if value is not None and not re.match(PHONE_PATTERN, value):
        raise ValueError("Please provide a valid phone number")
    return value


def serialize(schema: Type[BaseModel], obj: Any) -> dict:
    """Dump an ORM row through a schema into JSON-ready camelCase data."""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def serialize_many(schema: Type[BaseModel], rows: Iterable[Any]) -> list[dict]:
    return [serialize(schema, row) for row in rows]
