"""
Pydantic schemas for application endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field

from jobtrack.schemas.company import CompanyResponse
from jobtrack.schemas.job import JobResponse
from jobtrack.schemas.pagination import PaginationMeta


class ApplicationCreate(BaseModel):
    status: str = Field(
        default="applied",
        description="One of: applied, interview, offer, rejected, withdrawn, accepted"
    )
    applied_date: date = Field(..., description="Date applied (YYYY-MM-DD)")
    contact_id: Optional[int] = Field(None, description="Optional contact ID")
    notes: Optional[str] = Field(None, description="Notes about this application")


class ApplicationUpdate(BaseModel):
    """Only provided fields change; send contact_id=null to unlink the contact."""
    status: Optional[str] = Field(None, description="Application status")
    applied_date: Optional[date] = Field(None, description="Date applied (YYYY-MM-DD)")
    contact_id: Optional[int] = Field(None, description="Contact ID")
    notes: Optional[str] = Field(None, description="Notes about this application")


class ApplicationResponse(BaseModel):
    id: int = Field(..., description="Application ID")
    status: str = Field(..., description="Application status")
    applied_date: date = Field(..., description="Date applied")
    contact_id: Optional[int] = Field(None, description="Linked contact ID")
    notes: Optional[str] = Field(None, description="Notes")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "status": "interview",
                "applied_date": "2026-01-15",
                "contact_id": None,
                "notes": "Recruiter call on Monday.",
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-20T10:00:00Z"
            }
        }


class ApplicationListResponse(BaseModel):
    data: List[ApplicationResponse]
    meta: PaginationMeta


class ApplicationStatsResponse(BaseModel):
    total: int = Field(..., description="Total number of applications")
    by_status: Dict[str, int] = Field(..., description="Application count per status")


class JobDetailsUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None


class ApplicationDetailsUpdate(BaseModel):
    """Edit the company, job and application of one tracked application at once."""
    company_name: Optional[str] = Field(None, description="Company name (get-or-create)")
    job: Optional[JobDetailsUpdate] = None
    application: Optional[ApplicationUpdate] = None


class ApplicationDetailsResponse(BaseModel):
    completed: List[str] = Field(..., description="Steps that were saved")
    failed_step: Optional[str] = Field(None, description="Step that failed, if any")
    skipped: List[str] = Field(default_factory=list, description="Steps not attempted")
    error: Optional[Dict[str, Any]] = Field(None, description="Error of the failed step")
    company: Optional[CompanyResponse] = None
    job: Optional[JobResponse] = None
    application: Optional[ApplicationResponse] = None
