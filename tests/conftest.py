"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database with foreign keys enforced,
so RESTRICT / CASCADE / SET NULL behave like they do on PostgreSQL.
"""
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtrack.core.auth_dependency import get_db
from jobtrack.core.ownership import Owner
from jobtrack.core.security import create_access_token
from jobtrack.db.base import Base
from jobtrack.db.init_db import init_db
from jobtrack.db.session import enable_sqlite_foreign_keys
from jobtrack.services import application_service, company_service, contact_service, job_service

# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

OWNER_A = Owner("user_alice")
OWNER_B = Owner("user_bob")


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    init_db(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def owner():
    return OWNER_A


@pytest.fixture
def other_owner():
    return OWNER_B


@pytest.fixture
def company(db, owner):
    return company_service.get_or_create_company(db, owner, "Acme Corp").company


@pytest.fixture
def contact(db, owner):
    return contact_service.create_contact(db, owner, {"name": "Jane Recruiter", "email": "jane@acme.example"})


@pytest.fixture
def application(db, owner):
    return application_service.create_application(
        db, owner, {"status": "applied", "applied_date": date(2026, 1, 15)}
    )


@pytest.fixture
def job(db, owner, application, company):
    return job_service.create_job(
        db,
        owner,
        {"application_id": application.id, "company_id": company.id, "title": "Backend Engineer"},
    )


@pytest.fixture
def client(db):
    """TestClient sharing the test session with the assertions."""
    from jobtrack.main import app

    def _get_test_db():
        yield db

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(owner_id: str) -> dict:
    token = create_access_token({"sub": owner_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_a():
    return auth_headers(OWNER_A)


@pytest.fixture
def headers_b():
    return auth_headers(OWNER_B)
