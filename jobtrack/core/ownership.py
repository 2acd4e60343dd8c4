"""
Owner scoping for every read, update and delete.

Rows are always filtered by owner inside the SQL predicate. A row that exists
under a different owner is reported exactly like a missing row.
"""
import logging
from typing import Any, Mapping, NewType, Optional

from sqlalchemy.orm import Query

from jobtrack.core.errors import Unauthenticated

logger = logging.getLogger(__name__)

Owner = NewType("Owner", str)

MAX_OWNER_ID_LENGTH = 255


def authorize(caller: Optional[Mapping[str, Any]]) -> Owner:
    """
    Extract the owner identifier from verified request claims.

    Args:
        caller: Decoded token claims (or any mapping carrying ``sub``)

    Returns:
        The caller's Owner

    Raises:
        Unauthenticated: If the identity is missing or malformed
    """
    if not caller:
        raise Unauthenticated("User not authenticated")

    subject = caller.get("sub")
    if not isinstance(subject, str):
        logger.warning("Rejected identity without a string subject")
        raise Unauthenticated("Invalid token", details="Token subject is missing")

    subject = subject.strip()
    if not subject or len(subject) > MAX_OWNER_ID_LENGTH:
        logger.warning("Rejected identity with a malformed subject")
        raise Unauthenticated("Invalid token", details="Token subject is malformed")

    return Owner(subject)


def owned_by(query: Query, model, owner: Owner) -> Query:
    """Restrict a query on ``model`` to rows owned by ``owner``."""
    return query.filter(model.owner_id == owner)


def owned_row(query: Query, model, owner: Owner, row_id: int) -> Query:
    """``WHERE id = ? AND owner_id = ?`` for a single owned row."""
    return query.filter(model.id == row_id, model.owner_id == owner)
