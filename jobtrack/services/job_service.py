"""
Job service.

A job belongs to one application and one company, both of which must be
owned by the caller. The job's owner_id is copied from its application and
must agree with it on every write.
"""
import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from jobtrack.core.errors import Conflict, Internal, InvalidArgument, NotFound
from jobtrack.core.ownership import Owner, owned_by
from jobtrack.core.pagination import Pagination
from jobtrack.db.models.application import Application
from jobtrack.db.models.company import Company
from jobtrack.db.models.job import Job
from jobtrack.services import store

logger = logging.getLogger(__name__)

RESOURCE = "Job"
OPTIONAL_FIELDS = ("description", "requirements", "location")


def _owned_application(db: Session, owner: Owner, application_id: Any) -> Application:
    application = store.find_owned(db, Application, owner, application_id)
    if application is None:
        raise NotFound("Application", details="The specified application does not exist or does not belong to you")
    return application


def _owned_company(db: Session, owner: Owner, company_id: Any) -> Company:
    company = store.find_owned(db, Company, owner, company_id)
    if company is None:
        raise NotFound("Company", details="The specified company does not exist or does not belong to you")
    return company


def _ensure_owner_agrees(job: Job, application: Application) -> None:
    if job.owner_id != application.owner_id:
        logger.error(
            f"Job owner mismatch: job_id={job.id}, job_owner={job.owner_id}, "
            f"application_owner={application.owner_id}"
        )
        raise Internal("Job owner does not match its application")


def _ensure_application_free(db: Session, application_id: int, job_id: int = None) -> None:
    query = db.query(Job.id).filter(Job.application_id == application_id)
    if job_id is not None:
        query = query.filter(Job.id != job_id)
    with store.reading(db, RESOURCE):
        taken = query.first() is not None
    if taken:
        raise Conflict("Application already has a job", details=f"application_id={application_id}")


def list_jobs(db: Session, owner: Owner, pagination: Pagination) -> Tuple[List[Job], int]:
    return store.list_owned(db, Job, owner, pagination)


def list_jobs_for_company(
    db: Session, owner: Owner, company_id: int, pagination: Pagination
) -> Tuple[List[Job], int]:
    """Jobs at one of the owner's companies; NotFound if the company is not theirs."""
    store.get_owned(db, Company, owner, company_id, "Company")
    return store.list_owned(db, Job, owner, pagination, criteria=[Job.company_id == company_id])


def get_job(db: Session, owner: Owner, job_id: int) -> Job:
    return store.get_owned(db, Job, owner, job_id, RESOURCE)


def get_job_for_application(db: Session, owner: Owner, application_id: int) -> Job:
    store.get_owned(db, Application, owner, application_id, "Application")
    with store.reading(db, RESOURCE):
        job = owned_by(db.query(Job), Job, owner).filter(Job.application_id == application_id).first()
    if job is None:
        raise NotFound(RESOURCE)
    return job


def create_job(db: Session, owner: Owner, fields: Dict[str, Any]) -> Job:
    """
    Create the job of an application.

    Raises:
        InvalidArgument: If the title is blank
        NotFound: If the application or company is missing or not the caller's
        Conflict: If the application already has a job
    """
    title = store.require_text(fields.get("title"), "title", "Job title")
    if fields.get("application_id") is None:
        raise InvalidArgument("Application is required", field="application_id")
    if fields.get("company_id") is None:
        raise InvalidArgument("Company is required", field="company_id")

    application = _owned_application(db, owner, fields["application_id"])
    company = _owned_company(db, owner, fields["company_id"])
    _ensure_application_free(db, application.id)

    job = Job(
        owner_id=application.owner_id,
        application_id=application.id,
        company_id=company.id,
        title=title,
        **{field: store.optional_text(fields.get(field)) for field in OPTIONAL_FIELDS},
    )
    _ensure_owner_agrees(job, application)
    store.save(db, job, RESOURCE)
    logger.info(f"Job created: job_id={job.id}, application_id={application.id}, owner={owner}")
    return job


def update_job(db: Session, owner: Owner, job_id: int, fields: Dict[str, Any]) -> Job:
    """Partial update; moved references are re-verified exactly like on create."""
    title = None
    if "title" in fields:
        title = store.require_text(fields["title"], "title", "Job title")

    job = get_job(db, owner, job_id)

    if fields.get("application_id") is not None and fields["application_id"] != job.application_id:
        application = _owned_application(db, owner, fields["application_id"])
        _ensure_application_free(db, application.id, job_id=job.id)
        job.application_id = application.id
    else:
        application = _owned_application(db, owner, job.application_id)

    if fields.get("company_id") is not None and fields["company_id"] != job.company_id:
        job.company_id = _owned_company(db, owner, fields["company_id"]).id

    if title is not None:
        job.title = title
    for field in OPTIONAL_FIELDS:
        if field in fields:
            setattr(job, field, store.optional_text(fields[field]))

    _ensure_owner_agrees(job, application)
    store.save(db, job, RESOURCE)
    logger.info(f"Job updated: job_id={job.id}, owner={owner}")
    return job


def delete_job(db: Session, owner: Owner, job_id: int) -> None:
    store.delete_owned(db, Job, owner, job_id, RESOURCE)
