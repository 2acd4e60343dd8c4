"""
Job endpoints.

Every job hangs off one of the caller's applications and companies.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_current_owner, get_db
from jobtrack.core.ownership import Owner
from jobtrack.core.pagination import parse_pagination
from jobtrack.schemas.job import (
    JobCreate,
    JobUpdate,
    JobResponse,
    JobListResponse,
)
from jobtrack.services import job_service

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=JobListResponse)
def list_jobs(
    page: Optional[str] = Query(None, description="Page number"),
    limit: Optional[str] = Query(None, description="Items per page"),
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    pagination = parse_pagination(page, limit)
    jobs, total = job_service.list_jobs(db, owner, pagination)
    return JobListResponse(
        data=[JobResponse.model_validate(job) for job in jobs],
        meta=pagination.meta(total),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    job_data: JobCreate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Create the job of an application.
    
    Returns 404 naming the reference when the application or company is not the caller's.
    """
    job = job_service.create_job(db, owner, job_data.model_dump())
    return JobResponse.model_validate(job)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Returns 404 if job not found or user doesn't have access."""
    return JobResponse.model_validate(job_service.get_job(db, owner, job_id))


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    job_data: JobUpdate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Only updates provided fields."""
    job = job_service.update_job(db, owner, job_id, job_data.model_dump(exclude_unset=True))
    return JobResponse.model_validate(job)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    job_service.delete_job(db, owner, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
