"""
Per-request deadlines for store calls.

The request framework binds a deadline to the session; every ORM execute and
flush checks it, so an expired request stops before issuing more statements.
"""
import logging
import time
from typing import Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from jobtrack.core.errors import DeadlineExceeded

logger = logging.getLogger(__name__)

_DEADLINE_KEY = "deadline"


def bind_deadline(db: Session, seconds: Optional[float]) -> None:
    """Attach a deadline ``seconds`` from now to ``db`` (None clears it)."""
    if seconds is None:
        db.info.pop(_DEADLINE_KEY, None)
        return
    db.info[_DEADLINE_KEY] = time.monotonic() + seconds


def check_deadline(db: Session) -> None:
    deadline = db.info.get(_DEADLINE_KEY)
    if deadline is not None and time.monotonic() >= deadline:
        logger.warning("Request deadline exceeded, aborting store call")
        raise DeadlineExceeded("Request deadline exceeded")


@event.listens_for(Session, "do_orm_execute")
def _check_before_execute(orm_execute_state):
    check_deadline(orm_execute_state.session)


@event.listens_for(Session, "before_flush")
def _check_before_flush(session, flush_context, instances):
    check_deadline(session)
