# Application layer: services that orchestrate domain, audit trail and infrastructure.

from app.application.developer_service import DeveloperService
from app.application.project_service import ProjectService
from app.application.task_service import TaskService

__all__ = [
    "DeveloperService",
    "ProjectService",
    "TaskService",
]
