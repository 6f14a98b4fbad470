"""Domain model for projects. Pure business semantics, no ORM or infrastructure."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass
class Project:
    id: uuid.UUID
    name: str
    deadline: date
    status: ProjectStatus = ProjectStatus.PLANNING
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_overdue(self, today: date) -> bool:
        """Deadline has passed and the project is not completed."""
        return self.deadline < today and self.status != ProjectStatus.COMPLETED
