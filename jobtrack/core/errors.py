"""
Typed errors raised by the resource layer.

The HTTP layer maps each kind to a status code; nothing below the routers
knows about HTTP.
"""
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """Base class for every error the resource layer emits."""

    kind = "internal"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class Unauthenticated(TrackerError):
    kind = "unauthenticated"


class InvalidArgument(TrackerError):
    kind = "invalid_argument"

    def __init__(self, message: str, details: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message, details)
        self.field = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["fields"] = {self.field: self.message}
        return body


class NotFound(TrackerError):
    """Missing row, or a row owned by somebody else. Callers cannot tell which."""

    kind = "not_found"

    def __init__(self, resource: str, details: Optional[str] = None):
        super().__init__(f"{resource} not found", details)
        self.resource = resource


class Conflict(TrackerError):
    kind = "conflict"

    def __init__(self, message: str, details: Optional[str] = None, resource: Any = None):
        super().__init__(message, details)
        self.resource = resource


class Internal(TrackerError):
    kind = "internal"


class DeadlineExceeded(TrackerError):
    kind = "deadline_exceeded"


# Constraint names shared with the models and the initial migration
COMPANY_NAME_CONSTRAINT = "uq_companies_owner_normalized_name"
JOB_APPLICATION_CONSTRAINT = "uq_jobs_application_id"

_UNIQUE_MARKERS = ("unique", "duplicate")
_FOREIGN_KEY_MARKERS = ("foreign key", "violates foreign key")


def _message(exc: IntegrityError) -> str:
    return str(getattr(exc, "orig", exc)).lower()


def is_unique_violation(exc: IntegrityError, constraint: str, columns: tuple = ()) -> bool:
    """
    Check whether an IntegrityError was raised by a specific unique constraint.

    PostgreSQL reports the constraint name; SQLite only reports the
    offending ``table.column`` list, so both forms are accepted.
    """
    message = _message(exc)
    if not any(marker in message for marker in _UNIQUE_MARKERS):
        return False
    if constraint.lower() in message:
        return True
    return bool(columns) and all(column.lower() in message for column in columns)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    message = _message(exc)
    return any(marker in message for marker in _FOREIGN_KEY_MARKERS)


def classify_integrity_error(exc: IntegrityError, resource: str) -> TrackerError:
    """Turn a store constraint failure into Conflict or Internal."""
    if is_foreign_key_violation(exc):
        return Conflict(
            f"{resource} is still referenced by other records",
            details=str(getattr(exc, "orig", exc)),
        )
    message = _message(exc)
    if any(marker in message for marker in _UNIQUE_MARKERS):
        return Conflict(
            f"{resource} already exists",
            details=str(getattr(exc, "orig", exc)),
        )
    logger.error(f"Unclassified integrity error for {resource}: {exc}")
    return Internal(f"Failed to save {resource.lower()}", details=str(getattr(exc, "orig", exc)))
