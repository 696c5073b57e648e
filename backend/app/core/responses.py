"""
Uniform response envelope.

Every service method returns a ServiceResponse; routers turn it into a
JSONResponse whose HTTP status mirrors ``statusCode``.
"""

from typing import Any, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field


class ServiceResponse(BaseModel):
    """Schema for the {success, message, data?, error?, statusCode} envelope."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    data: Any = None
    error: Optional[str] = None
    status_code: int = Field(default=status.HTTP_200_OK, alias="statusCode")

    def to_content(self) -> dict:
        content = self.model_dump(mode="json", by_alias=True)
        if content["error"] is None:
            content.pop("error")
        return content


def success_response(
    message: str,
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
) -> ServiceResponse:
    return ServiceResponse(success=True, message=message, data=data, status_code=status_code)


def error_response(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    error_type: Optional[str] = None,
) -> ServiceResponse:
    return ServiceResponse(
        success=False,
        message=message,
        error=error_type,
        status_code=status_code,
    )


# ============== Typed Error Helpers ==============


def not_found_error(message: str) -> ServiceResponse:
    return error_response(message, status.HTTP_404_NOT_FOUND, "NotFound")


def bad_request_error(message: str) -> ServiceResponse:
    return error_response(message, status.HTTP_400_BAD_REQUEST, "BadRequest")


def unauthorized_error(message: str) -> ServiceResponse:
    return error_response(message, status.HTTP_401_UNAUTHORIZED, "Unauthorized")


def forbidden_error(message: str) -> ServiceResponse:
    return error_response(message, status.HTTP_403_FORBIDDEN, "Forbidden")


def conflict_error(message: str) -> ServiceResponse:
    return error_response(message, status.HTTP_409_CONFLICT, "Conflict")


def server_error(message: str) -> ServiceResponse:
    return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR, "InternalServerError")


def envelope_response(result: ServiceResponse) -> JSONResponse:
    """Render a ServiceResponse with a matching HTTP status code."""
    return JSONResponse(status_code=result.status_code, content=result.to_content())
