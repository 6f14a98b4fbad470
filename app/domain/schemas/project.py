"""Pydantic schemas for the project API. Strict validation, no DB or infrastructure."""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.models.project import Project, ProjectStatus


class ProjectCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Unique project name")
    description: Optional[str] = Field(None, max_length=1000)
    deadline: date
    status: ProjectStatus = ProjectStatus.PLANNING


class ProjectUpdateRequest(BaseModel):
    """Partial update: only fields that are set are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    deadline: Optional[date] = None
    status: Optional[ProjectStatus] = None


class ProjectResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    deadline: date
    status: ProjectStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponse":
        return cls.model_validate(project)
