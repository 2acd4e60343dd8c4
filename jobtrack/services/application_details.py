"""
Edit an application together with its job and company in one request.

Each step is its own atomic store call. When a step fails, the steps before
it stay committed and the ones after it are skipped; the caller gets a report
saying exactly which steps went through.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from jobtrack.core.errors import TrackerError
from jobtrack.core.ownership import Owner
from jobtrack.db.models.application import Application
from jobtrack.db.models.company import Company
from jobtrack.db.models.job import Job
from jobtrack.services import application_service, company_service, job_service

logger = logging.getLogger(__name__)

STEP_COMPANY = "company"
STEP_JOB = "job"
STEP_APPLICATION = "application"


@dataclass
class DetailsUpdateResult:
    completed: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[TrackerError] = None
    skipped: List[str] = field(default_factory=list)
    company: Optional[Company] = None
    job: Optional[Job] = None
    application: Optional[Application] = None

    @property
    def partial(self) -> bool:
        return self.failed_step is not None


def update_application_details(
    db: Session,
    owner: Owner,
    application_id: int,
    company_name: Optional[str] = None,
    job_fields: Optional[Dict[str, Any]] = None,
    application_fields: Optional[Dict[str, Any]] = None,
) -> DetailsUpdateResult:
    """
    Run the company, job and application updates in order.

    Args:
        db: Database session
        owner: Authorized owner
        application_id: Application being edited
        company_name: New company name; resolved with get-or-create and the
            job is moved to that company
        job_fields: Partial update for the application's job
        application_fields: Partial update for the application itself

    Returns:
        DetailsUpdateResult listing completed, failed and skipped steps
    """
    steps = []
    if company_name is not None:
        steps.append(STEP_COMPANY)
    if company_name is not None or job_fields:
        steps.append(STEP_JOB)
    if application_fields:
        steps.append(STEP_APPLICATION)

    result = DetailsUpdateResult()
    job_update = dict(job_fields or {})

    for position, step in enumerate(steps):
        try:
            if step == STEP_COMPANY:
                resolved = company_service.get_or_create_company(db, owner, company_name)
                result.company = resolved.company
                job_update["company_id"] = resolved.company.id
            elif step == STEP_JOB:
                job = job_service.get_job_for_application(db, owner, application_id)
                result.job = job_service.update_job(db, owner, job.id, job_update)
            else:
                result.application = application_service.update_application(
                    db, owner, application_id, application_fields
                )
        except TrackerError as e:
            result.failed_step = step
            result.error = e
            result.skipped = steps[position + 1:]
            logger.warning(
                f"Application details update stopped: application_id={application_id}, "
                f"owner={owner}, step={step}, completed={result.completed}, error={e.message}"
            )
            return result
        result.completed.append(step)

    logger.info(f"Application details updated: application_id={application_id}, owner={owner}, steps={steps}")
    return result
