from pydantic import Field, model_validator
from typing import List, Optional

from app.schemas.base import CamelModel, UpdateModel, UtcDatetime

PRICE_RANGE_MESSAGE = "minPrice must be less than or equal to maxPrice"


class JobCreate(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=5, description="Title must be at least 5 characters")
    description: str = Field(..., min_length=20, description="Description must be at least 20 characters")
    job_type: str = Field(..., min_length=1)
    employment_type: str = Field(..., min_length=1)
    min_price: int = Field(..., ge=0)
    max_price: int = Field(..., ge=0)
    price_type: str = Field(..., min_length=1)
    skills: List[str] = Field(..., min_length=1, description="Ordered list of required skills")
    creator_id: int
    is_active: bool = True

    @model_validator(mode="after")
    def check_price_range(self) -> "JobCreate":
        if self.min_price > self.max_price:
            raise ValueError(PRICE_RANGE_MESSAGE)
        return self


class JobUpdate(UpdateModel):
    """Partial job update. The creator of a job cannot be changed."""
    title: Optional[str] = Field(None, min_length=5)
    description: Optional[str] = Field(None, min_length=20)
    job_type: Optional[str] = Field(None, min_length=1)
    employment_type: Optional[str] = Field(None, min_length=1)
    min_price: Optional[int] = Field(None, ge=0)
    max_price: Optional[int] = Field(None, ge=0)
    price_type: Optional[str] = Field(None, min_length=1)
    skills: Optional[List[str]] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class JobRecord(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    description: str
    job_type: str
    employment_type: str
    min_price: int
    max_price: int
    price_type: str
    skills: List[str]
    creator_id: int
    is_active: bool
    created_at: UtcDatetime
