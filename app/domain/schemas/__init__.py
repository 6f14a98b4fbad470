"""Domain schemas. Request/response and validation."""

from app.domain.schemas.common import PageResponse
from app.domain.schemas.developer import (
    DeveloperCreateRequest,
    DeveloperResponse,
    DeveloperSummaryResponse,
    DeveloperUpdateRequest,
)
from app.domain.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest
from app.domain.schemas.task import TaskCreateRequest, TaskResponse, TaskStatsResponse, TaskUpdateRequest

__all__ = [
    "DeveloperCreateRequest",
    "DeveloperResponse",
    "DeveloperSummaryResponse",
    "DeveloperUpdateRequest",
    "PageResponse",
    "ProjectCreateRequest",
    "ProjectResponse",
    "ProjectUpdateRequest",
    "TaskCreateRequest",
    "TaskResponse",
    "TaskStatsResponse",
    "TaskUpdateRequest",
]
