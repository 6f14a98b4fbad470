"""Pydantic schemas for the task API."""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.models.task import Task, TaskStatus


class TaskCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[date] = None
    project_id: uuid.UUID
    developer_id: Optional[uuid.UUID] = None


class TaskUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    project_id: Optional[uuid.UUID] = None
    developer_id: Optional[uuid.UUID] = None


class TaskResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    due_date: Optional[date] = None
    project_id: uuid.UUID
    developer_id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls.model_validate(task)


class TaskStatsResponse(BaseModel):
    total: int
    completed: int
    todo: int
    in_progress: int
    blocked: int
    completion_rate: float = Field(..., description="Completed / total as a percentage, 0 when empty")
