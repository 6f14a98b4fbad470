"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from app.domain.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    TaskAssignmentError,
)
from app.domain.models import Developer, Project, ProjectStatus, Task, TaskStatus

__all__ = [
    "BusinessRuleViolationError",
    "Developer",
    "DomainError",
    "DomainValidationError",
    "DuplicateEntityError",
    "EntityNotFoundError",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskAssignmentError",
    "TaskStatus",
]
