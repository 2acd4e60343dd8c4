"""
Job model. A job belongs to exactly one application; its owner_id is a copy
of the application's owner, checked on every write.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from jobtrack.core.errors import JOB_APPLICATION_CONSTRAINT
from jobtrack.db.base import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(255), nullable=False, index=True)

    application_id = Column(Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("application_id", name=JOB_APPLICATION_CONSTRAINT),
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}')>"
