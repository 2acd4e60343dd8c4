from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from jobtrack.core import config
from jobtrack.core import deadline  # noqa: F401  registers session deadline hooks

DATABASE_URL = config.DATABASE_URL


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FK actions (RESTRICT/CASCADE/SET NULL) unless asked."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
    enable_sqlite_foreign_keys(engine)
    return engine


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
