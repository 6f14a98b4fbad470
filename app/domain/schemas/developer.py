"""Pydantic schemas for the developer API."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.domain.models.developer import Developer

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class DeveloperCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    skills: Optional[str] = Field(None, max_length=500, description="Comma-separated skills")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class DeveloperUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    skills: Optional[str] = Field(None, max_length=500)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class DeveloperResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    skills: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_domain(cls, developer: Developer) -> "DeveloperResponse":
        return cls.model_validate(developer)


class DeveloperSummaryResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    task_count: int = 0

    model_config = {"from_attributes": True}
