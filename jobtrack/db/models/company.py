"""
Company model. Names are unique per owner after normalization.
"""
from sqlalchemy import Column, Integer, String, DateTime, Index, UniqueConstraint
from sqlalchemy.sql import func

from jobtrack.core.errors import COMPANY_NAME_CONSTRAINT
from jobtrack.db.base import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(255), nullable=False, index=True)

    name = Column(String(255), nullable=False)  # display form
    normalized_name = Column(String(255), nullable=False)  # comparison key, never shown
    website = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("owner_id", "normalized_name", name=COMPANY_NAME_CONSTRAINT),
        Index("idx_companies_owner_id_id", "owner_id", "id"),
    )

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"
