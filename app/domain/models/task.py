"""Domain model for tasks. A task belongs to exactly one project and at most one developer."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    BLOCKED = "BLOCKED"


@dataclass
class Task:
    id: uuid.UUID
    title: str
    project_id: uuid.UUID
    status: TaskStatus = TaskStatus.TODO
    description: Optional[str] = None
    due_date: Optional[date] = None
    developer_id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_assigned(self) -> bool:
        return self.developer_id is not None

    def is_overdue(self, today: date) -> bool:
        return (
            self.due_date is not None
            and self.due_date < today
            and self.status != TaskStatus.COMPLETED
        )
