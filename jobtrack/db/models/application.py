"""
Application model: the parent of a tracked Job.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from jobtrack.db.base import Base


class ApplicationStatus(str, enum.Enum):
    APPLIED = "applied"
    INTERVIEW = "interview"
    OFFER = "offer"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"
    ACCEPTED = "accepted"

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(255), nullable=False, index=True)

    status = Column(String(20), nullable=False, default=ApplicationStatus.APPLIED.value)
    applied_date = Column(Date, nullable=False)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_applications_owner_status", "owner_id", "status"),
    )

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"
