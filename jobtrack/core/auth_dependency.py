from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from jobtrack.core.config import REQUEST_DEADLINE_SECONDS
from jobtrack.core.deadline import bind_deadline
from jobtrack.core.ownership import Owner, authorize
from jobtrack.core.security import decode_access_token
from jobtrack.db.session import SessionLocal

# auto_error=False so a missing header surfaces as our own Unauthenticated
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    bind_deadline(db, REQUEST_DEADLINE_SECONDS)
    try:
        yield db
    finally:
        db.close()


def get_current_owner(token: Optional[str] = Depends(oauth2_scheme)) -> Owner:
    """Owner of the request, taken from the verified JWT ``sub`` claim."""
    claims = decode_access_token(token)
    return authorize(claims)
