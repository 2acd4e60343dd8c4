"""
Company endpoints.

POST is get-or-create: 201 when a new company was stored, 200 when the
caller already had a company with an equivalent name.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_current_owner, get_db
from jobtrack.core.ownership import Owner
from jobtrack.core.pagination import parse_pagination
from jobtrack.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyListResponse,
)
from jobtrack.schemas.job import JobListResponse, JobResponse
from jobtrack.services import company_service, job_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=CompanyListResponse)
def list_companies(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10, max 100)"),
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """List the caller's companies, one page at a time."""
    pagination = parse_pagination(page, limit)
    companies, total = company_service.list_companies(db, owner, pagination)
    return CompanyListResponse(
        data=[CompanyResponse.model_validate(company) for company in companies],
        meta=pagination.meta(total),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyResponse)
def create_company(
    company_data: CompanyCreate,
    response: Response,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Get or create a company by name.
    
    Names are compared case- and whitespace-insensitively per user.
    """
    result = company_service.get_or_create_company(
        db, owner, company_data.name, company_data.website
    )
    if result.existed:
        response.status_code = status.HTTP_200_OK
    return CompanyResponse.model_validate(result.company)


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(
    company_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    return CompanyResponse.model_validate(company_service.get_company(db, owner, company_id))


@router.get("/{company_id}/jobs", response_model=JobListResponse)
def list_company_jobs(
    company_id: int,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Jobs the caller tracks at one of their companies."""
    pagination = parse_pagination(page, limit)
    jobs, total = job_service.list_jobs_for_company(db, owner, company_id, pagination)
    return JobListResponse(
        data=[JobResponse.model_validate(job) for job in jobs],
        meta=pagination.meta(total),
    )


@router.put("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: int,
    company_data: CompanyUpdate,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Update a company.
    
    Returns 409 if the new name collides with another of the caller's companies.
    """
    company = company_service.update_company(
        db, owner, company_id, company_data.model_dump(exclude_unset=True)
    )
    return CompanyResponse.model_validate(company)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_company(
    company_id: int,
    owner: Owner = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Delete a company.
    
    Returns 409 while jobs still reference the company.
    """
    company_service.delete_company(db, owner, company_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
