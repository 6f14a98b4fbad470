"""Domain model for developers."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class Developer:
    id: uuid.UUID
    name: str
    email: str
    skills: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    task_count: int = 0

    def skill_list(self) -> List[str]:
        """Skills are stored comma-separated; blanks dropped."""
        if not self.skills:
            return []
        return [s.strip() for s in self.skills.split(",") if s.strip()]
