"""
Pydantic schemas shared by all list endpoints.
"""
from pydantic import BaseModel, Field


class PaginationMeta(BaseModel):
    """Effective pagination values (after defaults and clamping)."""
    page: int = Field(..., description="Page actually served")
    limit: int = Field(..., description="Page size actually used")
    total_count: int = Field(..., description="Total number of matching rows")
    total_pages: int = Field(..., description="Number of pages at this page size")
