"""
Service error taxonomy and the handler that turns errors into envelopes.

Service methods raise the ServiceError subclasses below; the
``service_operation`` decorator catches everything at the method boundary so
no exception ever reaches the HTTP layer unhandled.
"""

import functools
import logging
from typing import Callable, Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError

from app.core.responses import ServiceResponse, error_response, server_error


class ServiceError(Exception):
    """Base class for expected, client-visible failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "InternalServerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> ServiceResponse:
        return error_response(self.message, self.status_code, self.error_type)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "NotFound"


class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "BadRequest"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "Conflict"


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "Unauthorized"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "Forbidden"


class InternalServerError(ServiceError):
    pass


# Postgres SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def classify_integrity_error(exc: IntegrityError) -> str:
    """Return "unique", "foreign_key" or "other" for a constraint failure."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNIQUE_VIOLATION:
        return "unique"
    if code == FOREIGN_KEY_VIOLATION:
        return "foreign_key"

    text = str(orig).lower()
    if "unique" in text or "duplicate" in text:
        return "unique"
    if "foreign key" in text:
        return "foreign_key"
    return "other"


def service_operation(
    operation: str,
    default_message: str,
    conflict_message: Optional[str] = None,
    reference_message: Optional[str] = None,
) -> Callable:
    """
    Wrap a service method so every failure becomes an error envelope.

    - ServiceError: returned as-is (NotFound, Conflict, ...)
    - IntegrityError: the store's constraint won a check-then-insert race;
      mapped to Conflict (unique) or BadRequest (dangling foreign key)
    - anything else: logged with its traceback, returned as
      InternalServerError with ``default_message`` only

    The wrapped method's instance must expose the SQLAlchemy session as
    ``self.db`` so failed units of work can be rolled back.
    """

    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs) -> ServiceResponse:
            service = type(self).__name__
            try:
                return func(self, *args, **kwargs)
            except ServiceError as exc:
                self.db.rollback()
                logger.debug("[%s] %s: %s", service, operation, exc.message)
                return exc.to_response()
            except IntegrityError as exc:
                self.db.rollback()
                kind = classify_integrity_error(exc)
                logger.warning("[%s] %s: integrity error (%s): %s", service, operation, kind, exc.orig)
                if kind == "unique":
                    return ConflictError(conflict_message or "Resource already exists").to_response()
                if kind == "foreign_key":
                    return BadRequestError(
                        reference_message or "Referenced record does not exist"
                    ).to_response()
                return server_error(default_message)
            except Exception:
                self.db.rollback()
                logger.exception("[%s] %s failed", service, operation)
                return server_error(default_message)

        return wrapper

    return decorator
