"""
Pydantic schemas for editor profiles.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from app.schemas.base import CamelModel, UpdateModel, validate_http_url


class EditorProfileCreate(CamelModel):
    user_id: int
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=20)
    skills: List[str] = Field(..., min_length=1)
    hourly_rate: int = Field(..., ge=0, description="Hourly rate in USD")
    experience: int = Field(..., ge=0, description="Years of experience")
    portfolio_url: Optional[str] = None
    is_available: bool = True

    @field_validator("portfolio_url")
    @classmethod
    def check_portfolio_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class EditorProfileUpdate(UpdateModel):
    nullable_fields = frozenset({"portfolio_url"})

    title: Optional[str] = Field(None, min_length=5)
    description: Optional[str] = Field(None, min_length=20)
    skills: Optional[List[str]] = Field(None, min_length=1)
    hourly_rate: Optional[int] = Field(None, ge=0)
    experience: Optional[int] = Field(None, ge=0)
    portfolio_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("portfolio_url")
    @classmethod
    def check_portfolio_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class EditorProfileRecord(CamelModel):
    id: int
    user_id: int
    title: str
    description: str
    skills: List[str]
    hourly_rate: int
    experience: int
    portfolio_url: Optional[str] = None
    is_available: bool
