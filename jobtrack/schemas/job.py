"""
Pydantic schemas for job endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from jobtrack.schemas.pagination import PaginationMeta


class JobBase(BaseModel):
    """Base job schema with common fields."""
    title: str = Field(..., description="Job title", max_length=255)
    description: Optional[str] = Field(None, description="Job description")
    requirements: Optional[str] = Field(None, description="Job requirements")
    location: Optional[str] = Field(None, description="Job location", max_length=255)


class JobCreate(JobBase):
    """Schema for creating the job of an application."""
    application_id: int = Field(..., description="Application this job belongs to")
    company_id: int = Field(..., description="Company offering the job")


class JobUpdate(BaseModel):
    """Schema for updating an existing job."""
    title: Optional[str] = Field(None, description="Job title", max_length=255)
    description: Optional[str] = Field(None, description="Job description")
    requirements: Optional[str] = Field(None, description="Job requirements")
    location: Optional[str] = Field(None, description="Job location", max_length=255)
    application_id: Optional[int] = Field(None, description="Move the job to another application")
    company_id: Optional[int] = Field(None, description="Move the job to another company")


class JobResponse(JobBase):
    """Schema for job response."""
    id: int = Field(..., description="Job ID")
    application_id: int = Field(..., description="Owning application ID")
    company_id: int = Field(..., description="Company ID")
    created_at: datetime = Field(..., description="Job creation timestamp")
    updated_at: datetime = Field(..., description="Job last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "application_id": 1,
                "company_id": 1,
                "title": "Senior Software Engineer",
                "description": "Build the platform.",
                "requirements": "5+ years of Python",
                "location": "Remote",
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-15T10:00:00Z"
            }
        }


class JobListResponse(BaseModel):
    """Schema for list of jobs response."""
    data: List[JobResponse] = Field(..., description="Jobs on this page")
    meta: PaginationMeta
