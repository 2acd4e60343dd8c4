"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from jobtrack.db.models.company import Company
from jobtrack.db.models.contact import Contact
from jobtrack.db.models.application import Application, ApplicationStatus
from jobtrack.db.models.job import Job

__all__ = [
    "Company",
    "Contact",
    "Application",
    "ApplicationStatus",
    "Job",
]
