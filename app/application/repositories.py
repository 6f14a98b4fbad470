"""Entity repository protocols. Application layer depends on these; infrastructure implements them."""

import uuid
from datetime import date
from typing import Dict, List, Optional, Protocol

from app.core.pagination import Page, PageRequest
from app.domain.models.developer import Developer
from app.domain.models.project import Project, ProjectStatus
from app.domain.models.task import Task, TaskStatus


class ProjectRepository(Protocol):
    async def create(self, project: Project) -> Project: ...
    async def get(self, project_id: uuid.UUID) -> Optional[Project]: ...
    async def update(self, project: Project) -> Project: ...

    async def delete(self, project_id: uuid.UUID) -> None:
        """Deletes the project's tasks as well."""
        ...

    async def exists_by_name(self, name: str) -> bool:
        """Case-insensitive."""
        ...

    async def list(self, page: PageRequest) -> Page[Project]: ...
    async def find_by_status(self, status: ProjectStatus, page: PageRequest) -> Page[Project]: ...
    async def find_overdue(self, today: date) -> List[Project]: ...
    async def find_without_tasks(self) -> List[Project]: ...
    async def search_by_name(self, term: str, page: PageRequest) -> Page[Project]: ...
    async def find_by_deadline_between(self, start: date, end: date) -> List[Project]: ...
    async def count_by_status(self, status: ProjectStatus) -> int: ...


class DeveloperRepository(Protocol):
    async def create(self, developer: Developer) -> Developer: ...
    async def get(self, developer_id: uuid.UUID) -> Optional[Developer]: ...
    async def get_by_email(self, email: str) -> Optional[Developer]: ...
    async def update(self, developer: Developer) -> Developer: ...

    async def delete(self, developer_id: uuid.UUID) -> None:
        """Unassigns the developer's tasks first."""
        ...

    async def exists_by_email(self, email: str) -> bool: ...
    async def list(self, page: PageRequest) -> Page[Developer]: ...
    async def search_by_name(self, term: str, page: PageRequest) -> Page[Developer]: ...
    async def search_by_skill(self, term: str, page: PageRequest) -> Page[Developer]: ...
    async def top_by_task_count(self, limit: int) -> List[Developer]: ...
    async def find_without_tasks(self) -> List[Developer]: ...
    async def count(self) -> int: ...


class TaskRepository(Protocol):
    async def create(self, task: Task) -> Task: ...
    async def get(self, task_id: uuid.UUID) -> Optional[Task]: ...
    async def update(self, task: Task) -> Task: ...
    async def delete(self, task_id: uuid.UUID) -> None: ...
    async def list(self, page: PageRequest) -> Page[Task]: ...
    async def find_by_project(self, project_id: uuid.UUID, page: PageRequest) -> Page[Task]: ...
    async def find_by_developer(self, developer_id: uuid.UUID, page: PageRequest) -> Page[Task]: ...
    async def find_by_status(self, status: TaskStatus, page: PageRequest) -> Page[Task]: ...
    async def find_overdue(self, today: date) -> List[Task]: ...
    async def find_unassigned(self) -> List[Task]: ...

    async def count_by_status(
        self,
        project_id: Optional[uuid.UUID] = None,
        developer_id: Optional[uuid.UUID] = None,
    ) -> Dict[TaskStatus, int]: ...
