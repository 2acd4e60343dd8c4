"""
Pydantic schemas for company endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from jobtrack.schemas.pagination import PaginationMeta


class CompanyCreate(BaseModel):
    """Schema for get-or-create by name."""
    name: str = Field(..., description="Company name (normalized before saving)", max_length=255)
    website: Optional[str] = Field(None, description="Company website", max_length=255)


class CompanyUpdate(BaseModel):
    """Schema for updating a company. Only provided fields change."""
    name: Optional[str] = Field(None, description="New company name", max_length=255)
    website: Optional[str] = Field(None, description="Company website", max_length=255)


class CompanyResponse(BaseModel):
    """Schema for company response."""
    id: int = Field(..., description="Company ID")
    name: str = Field(..., description="Display name")
    website: Optional[str] = Field(None, description="Company website")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Acme Corp",
                "website": "https://acme.example",
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-15T09:00:00Z"
            }
        }


class CompanyListResponse(BaseModel):
    data: List[CompanyResponse] = Field(..., description="Companies on this page")
    meta: PaginationMeta
