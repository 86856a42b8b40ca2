from typing import Optional
from pydantic import Field

from app.schemas.base import CamelModel, UtcDatetime


class ReviewCreate(CamelModel):
    """A creator's review of an editor."""
    editor_id: int
    creator_id: int
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 (poor) to 5 (excellent)")
    comment: Optional[str] = None


class ReviewRecord(CamelModel):
    id: int
    editor_id: int
    creator_id: int
    rating: int
    comment: Optional[str] = None
    created_at: UtcDatetime
