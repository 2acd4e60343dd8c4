"""
Token helpers.

Production tokens come from the identity provider; create_access_token is
used by local tooling and tests to mint tokens with the same secret.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from jobtrack.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from jobtrack.core.errors import Unauthenticated

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: Optional[str]) -> Dict[str, Any]:
    """
    Verify a bearer token and return its claims.

    Raises:
        Unauthenticated: If the token is missing, expired or tampered with
    """
    if not token:
        raise Unauthenticated("Authorization header is required")
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        raise Unauthenticated("Invalid or expired token") from e
