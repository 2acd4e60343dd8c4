"""
Application endpoints for the job tracker.

Supports status filtering on the list, a per-status breakdown, and a
combined edit of an application with its job and company.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_current_owner, get_db
from jobtrack.core.ownership import Owner
from jobtrack.core.pagination import parse_pagination
from jobtrack.schemas.application import (
    ApplicationCreate,
    ApplicationUpdate,
    ApplicationResponse,
    ApplicationListResponse,
    ApplicationStatsResponse,
    ApplicationDetailsUpdate,
    ApplicationDetailsResponse,
)
from jobtrack.schemas.company import CompanyResponse
from jobtrack.schemas.job import JobResponse
from jobtrack.services import application_details, application_service, job_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=ApplicationListResponse)
def list_applications(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    page: Optional[str] = Query(None, description="Page number"),
    limit: Optional[str] = Query(None, description="Items per page"),
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    List the caller's applications.
    
    An empty ?status= is treated as no filter; an unknown status is a 400.
    """
    pagination = parse_pagination(page, limit)
    applications, total = application_service.list_applications(
        db, owner, pagination, status=status_filter or None
    )
    return ApplicationListResponse(
        data=[ApplicationResponse.model_validate(application) for application in applications],
        meta=pagination.meta(total),
    )


@router.get("/stats", response_model=ApplicationStatsResponse)
def application_stats(
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    breakdown = application_service.status_breakdown(db, owner)
    return ApplicationStatsResponse(total=sum(breakdown.values()), by_status=breakdown)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def create_application(
    application_data: ApplicationCreate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    application = application_service.create_application(db, owner, application_data.model_dump())
    return ApplicationResponse.model_validate(application)


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return ApplicationResponse.model_validate(
        application_service.get_application(db, owner, application_id)
    )


@router.get("/{application_id}/job", response_model=JobResponse)
def get_application_job(
    application_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return JobResponse.model_validate(job_service.get_job_for_application(db, owner, application_id))


@router.put("/{application_id}", response_model=ApplicationResponse)
def update_application(
    application_id: int,
    application_data: ApplicationUpdate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    application = application_service.update_application(
        db, owner, application_id, application_data.model_dump(exclude_unset=True)
    )
    return ApplicationResponse.model_validate(application)


@router.put("/{application_id}/details", response_model=ApplicationDetailsResponse)
def update_application_details(
    application_id: int,
    details: ApplicationDetailsUpdate,
    response: Response,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Update company, job and application in sequence.
    
    Each step is saved on its own. Returns 207 with the step report when a
    step fails after earlier steps were already saved.
    """
    result = application_details.update_application_details(
        db,
        owner,
        application_id,
        company_name=details.company_name,
        job_fields=details.job.model_dump(exclude_unset=True) if details.job else None,
        application_fields=(
            details.application.model_dump(exclude_unset=True) if details.application else None
        ),
    )
    if result.partial:
        response.status_code = status.HTTP_207_MULTI_STATUS

    return ApplicationDetailsResponse(
        completed=result.completed,
        failed_step=result.failed_step,
        skipped=result.skipped,
        error=result.error.to_dict() if result.error else None,
        company=CompanyResponse.model_validate(result.company) if result.company else None,
        job=JobResponse.model_validate(result.job) if result.job else None,
        application=(
            ApplicationResponse.model_validate(result.application) if result.application else None
        ),
    )


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Deleting an application also deletes its job."""
    application_service.delete_application(db, owner, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
