import logging

from jobtrack.db.session import engine
from jobtrack.db.base import Base

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet (development and tests)."""
    # Registers every model on Base.metadata
    import jobtrack.db.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")
