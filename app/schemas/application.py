"""
Pydantic schemas for job applications.
"""

from pydantic import Field

from app.models.application import ApplicationStatus
from app.schemas.base import CamelModel, UtcDatetime


class ApplicationCreate(CamelModel):
    """An editor's bid on a job. New applications always start as pending."""
    job_id: int
    editor_id: int
    cover_letter: str = Field(..., min_length=20, description="Cover letter must be at least 20 characters")
    price: int = Field(..., ge=0, description="Proposed price in USD")
    status: ApplicationStatus = ApplicationStatus.PENDING


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationRecord(CamelModel):
    id: int
    job_id: int
    editor_id: int
    cover_letter: str
    price: int
    status: ApplicationStatus
    created_at: UtcDatetime
