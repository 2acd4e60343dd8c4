"""
Pydantic schemas for contact endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from jobtrack.schemas.pagination import PaginationMeta


class ContactCreate(BaseModel):
    name: str = Field(..., description="Contact name", max_length=255)
    email: Optional[str] = Field(None, description="Email address", max_length=255)
    phone: Optional[str] = Field(None, description="Phone number", max_length=50)
    linkedin: Optional[str] = Field(None, description="LinkedIn profile URL", max_length=500)


class ContactUpdate(BaseModel):
    name: Optional[str] = Field(None, description="Contact name", max_length=255)
    email: Optional[str] = Field(None, description="Email address", max_length=255)
    phone: Optional[str] = Field(None, description="Phone number", max_length=50)
    linkedin: Optional[str] = Field(None, description="LinkedIn profile URL", max_length=500)


class ContactResponse(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ContactListResponse(BaseModel):
    data: List[ContactResponse]
    meta: PaginationMeta
