"""
Application service.

Handles owner-scoped CRUD for applications, status filtering and the
per-status breakdown used by the dashboard.
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobtrack.core.errors import InvalidArgument, NotFound
from jobtrack.core.ownership import Owner, owned_by
from jobtrack.core.pagination import Pagination
from jobtrack.db.models.application import Application, ApplicationStatus
from jobtrack.db.models.contact import Contact
from jobtrack.services import store

logger = logging.getLogger(__name__)

RESOURCE = "Application"


def parse_status(value: Any) -> str:
    """
    Validate an application status.

    Args:
        value: Raw status (case and surrounding whitespace are ignored)

    Returns:
        The canonical status value

    Raises:
        InvalidArgument: If the status is blank or not one of ApplicationStatus
    """
    if isinstance(value, ApplicationStatus):
        return value.value
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument("Status is required", field="status")
    candidate = value.strip().lower()
    if candidate not in ApplicationStatus.values():
        raise InvalidArgument(
            "Invalid status",
            details=f"status must be one of: {', '.join(ApplicationStatus.values())}",
            field="status",
        )
    return candidate


def parse_applied_date(value: Any) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string; anything else is invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidArgument(
        "Invalid applied_date format",
        details="Date must be in YYYY-MM-DD format (e.g., 2024-01-15)",
        field="applied_date",
    )


def _owned_contact_id(db: Session, owner: Owner, contact_id: Optional[int]) -> Optional[int]:
    if contact_id is None:
        return None
    if store.find_owned(db, Contact, owner, contact_id) is None:
        raise NotFound("Contact", details="The specified contact does not exist or does not belong to you")
    return contact_id


def list_applications(
    db: Session,
    owner: Owner,
    pagination: Pagination,
    status: Optional[str] = None,
) -> Tuple[List[Application], int]:
    criteria = []
    if status is not None:
        criteria.append(Application.status == parse_status(status))
    return store.list_owned(db, Application, owner, pagination, criteria=criteria)


def get_application(db: Session, owner: Owner, application_id: int) -> Application:
    return store.get_owned(db, Application, owner, application_id, RESOURCE)


def create_application(db: Session, owner: Owner, fields: Dict[str, Any]) -> Application:
    status = parse_status(fields.get("status", ApplicationStatus.APPLIED.value))
    applied_date = parse_applied_date(fields.get("applied_date"))
    contact_id = _owned_contact_id(db, owner, fields.get("contact_id"))

    application = Application(
        owner_id=owner,
        status=status,
        applied_date=applied_date,
        contact_id=contact_id,
        notes=store.optional_text(fields.get("notes")),
    )
    store.save(db, application, RESOURCE)
    logger.info(f"Application created: application_id={application.id}, owner={owner}, status={status}")
    return application


def update_application(db: Session, owner: Owner, application_id: int, fields: Dict[str, Any]) -> Application:
    # Validate everything before touching the store
    changes: Dict[str, Any] = {}
    if "status" in fields:
        changes["status"] = parse_status(fields["status"])
    if "applied_date" in fields:
        changes["applied_date"] = parse_applied_date(fields["applied_date"])
    if "notes" in fields:
        changes["notes"] = store.optional_text(fields["notes"])

    application = get_application(db, owner, application_id)
    if "contact_id" in fields:
        changes["contact_id"] = _owned_contact_id(db, owner, fields["contact_id"])

    for field, value in changes.items():
        setattr(application, field, value)

    store.save(db, application, RESOURCE)
    logger.info(f"Application updated: application_id={application.id}, owner={owner}")
    return application


def delete_application(db: Session, owner: Owner, application_id: int) -> None:
    """The application's job is removed with it (ON DELETE CASCADE)."""
    store.delete_owned(db, Application, owner, application_id, RESOURCE)


def status_breakdown(db: Session, owner: Owner) -> Dict[str, int]:
    """Count the owner's applications per status; every status is present."""
    with store.reading(db, RESOURCE):
        rows = (
            owned_by(db.query(Application.status, func.count(Application.id)), Application, owner)
            .group_by(Application.status)
            .all()
        )
    breakdown = {status: 0 for status in ApplicationStatus.values()}
    for status, count in rows:
        breakdown[status] = int(count)
    return breakdown
