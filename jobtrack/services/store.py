"""
Owner-scoped building blocks shared by the per-resource services.

Every helper takes the caller's Owner and puts it into the SQL predicate.
Each write ends in exactly one commit; a failed commit is rolled back and
reported as a typed error.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobtrack.core.errors import (
    Internal,
    InvalidArgument,
    NotFound,
    TrackerError,
    classify_integrity_error,
)
from jobtrack.core.ownership import Owner, owned_by, owned_row
from jobtrack.core.pagination import Pagination

logger = logging.getLogger(__name__)


def require_text(value: Optional[str], field: str, label: Optional[str] = None) -> str:
    """Return ``value`` stripped, or raise InvalidArgument if it is blank."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{label or field.capitalize()} is required", field=field)
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Empty strings are stored as NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@contextmanager
def reading(db: Session, resource: str):
    """Map store failures during a read to Internal; typed errors pass through."""
    try:
        yield
    except TrackerError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to load {resource.lower()}: {e}", exc_info=True)
        raise Internal(f"Failed to load {resource.lower()}") from e


def list_owned(
    db: Session,
    model,
    owner: Owner,
    pagination: Pagination,
    criteria: Iterable[Any] = (),
    order_by: Iterable[Any] = (),
) -> Tuple[List[Any], int]:
    """
    Fetch one page of ``model`` rows owned by ``owner``.

    Returns:
        Tuple of (rows on the requested page, total matching rows)
    """
    with reading(db, model.__name__):
        query = owned_by(db.query(model), model, owner)
        for criterion in criteria:
            query = query.filter(criterion)

        total = query.count()
        ordering = list(order_by) or [model.id.asc()]
        rows = (
            query.order_by(*ordering)
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
    logger.debug(
        f"{model.__name__} listed: owner={owner}, total={total}, "
        f"page={pagination.page}, limit={pagination.limit}"
    )
    return rows, total


def find_owned(db: Session, model, owner: Owner, row_id: int):
    with reading(db, model.__name__):
        return owned_row(db.query(model), model, owner, row_id).first()


def get_owned(db: Session, model, owner: Owner, row_id: int, resource: str):
    row = find_owned(db, model, owner, row_id)
    if row is None:
        raise NotFound(resource)
    return row


def commit(db: Session, resource: str) -> None:
    """Commit the unit of work, mapping store failures to typed errors."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise classify_integrity_error(e, resource) from e
    except TrackerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save {resource.lower()}: {e}", exc_info=True)
        raise Internal(f"Failed to save {resource.lower()}") from e


def save(db: Session, row, resource: str):
    """Add (or re-add) ``row``, commit and return it refreshed."""
    db.add(row)
    commit(db, resource)
    db.refresh(row)
    return row


def delete_owned(db: Session, model, owner: Owner, row_id: int, resource: str) -> None:
    """Single ``DELETE ... WHERE id = ? AND owner_id = ?`` statement."""
    try:
        deleted = owned_row(db.query(model), model, owner, row_id).delete(
            synchronize_session=False
        )
    except IntegrityError as e:
        db.rollback()
        raise classify_integrity_error(e, resource) from e
    except TrackerError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete {resource.lower()}: {e}", exc_info=True)
        raise Internal(f"Failed to delete {resource.lower()}") from e

    if not deleted:
        db.rollback()
        raise NotFound(resource)

    commit(db, resource)
    logger.info(f"{resource} deleted: id={row_id}, owner={owner}")
