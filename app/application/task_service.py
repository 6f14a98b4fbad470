"""Task application service. Enforces that referenced projects and developers exist before linking."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional

from app.application.audit_trail import audit_after_commit
from app.application.repositories import DeveloperRepository, ProjectRepository, TaskRepository
from app.audit.models import ActionType
from app.audit.recorder import AuditRecorder
from app.core.pagination import Page, PageRequest
from app.domain.exceptions import EntityNotFoundError, TaskAssignmentError
from app.domain.models.task import Task, TaskStatus
from app.domain.schemas.task import TaskCreateRequest, TaskResponse, TaskStatsResponse, TaskUpdateRequest

ENTITY_TYPE = "Task"


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _stats(counts: Dict[TaskStatus, int]) -> TaskStatsResponse:
    total = sum(counts.values())
    completed = counts.get(TaskStatus.COMPLETED, 0)
    return TaskStatsResponse(
        total=total,
        completed=completed,
        todo=counts.get(TaskStatus.TODO, 0),
        in_progress=counts.get(TaskStatus.IN_PROGRESS, 0),
        blocked=counts.get(TaskStatus.BLOCKED, 0),
        completion_rate=round(completed * 100.0 / total, 2) if total else 0.0,
    )


class TaskService:
    """
    Task CRUD, assignment and statistics.
    Project must exist on create/move; developer must exist when assigning.
    """

    def __init__(
        self,
        repository: TaskRepository,
        project_repository: ProjectRepository,
        developer_repository: DeveloperRepository,
        recorder: AuditRecorder,
        logger: logging.Logger,
        today: Callable[[], date] = _today_utc,
    ) -> None:
        self._repository = repository
        self._projects = project_repository
        self._developers = developer_repository
        self._recorder = recorder
        self._logger = logger
        self._today = today

    async def _require(self, task_id: uuid.UUID) -> Task:
        task = await self._repository.get(task_id)
        if task is None:
            raise EntityNotFoundError(ENTITY_TYPE, task_id)
        return task

    async def _require_project(self, project_id: uuid.UUID) -> None:
        if await self._projects.get(project_id) is None:
            raise EntityNotFoundError("Project", project_id)

    async def _require_developer(self, developer_id: uuid.UUID) -> None:
        if await self._developers.get(developer_id) is None:
            raise EntityNotFoundError("Developer", developer_id)

    async def _audit(self, action_type: ActionType, task: Task, actor_name: str) -> None:
        await audit_after_commit(
            self._recorder, self._logger, action_type, ENTITY_TYPE, task.id, actor_name, task
        )

    async def create_task(self, request: TaskCreateRequest, actor_name: str) -> TaskResponse:
        await self._require_project(request.project_id)
        if request.developer_id is not None:
            await self._require_developer(request.developer_id)

        task = await self._repository.create(
            Task(
                id=uuid.uuid4(),
                title=request.title.strip(),
                description=request.description,
                status=request.status,
                due_date=request.due_date,
                project_id=request.project_id,
                developer_id=request.developer_id,
            )
        )
        self._logger.info(
            "task_created",
            extra={"task_id": str(task.id), "project_id": str(task.project_id)},
        )
        await self._audit(ActionType.CREATE, task, actor_name)
        return TaskResponse.from_domain(task)

    async def get_task(self, task_id: uuid.UUID) -> TaskResponse:
        return TaskResponse.from_domain(await self._require(task_id))

    async def list_tasks(self, page: PageRequest) -> Page[TaskResponse]:
        return (await self._repository.list(page)).map(TaskResponse.from_domain)

    async def update_task(self, task_id: uuid.UUID, request: TaskUpdateRequest, actor_name: str) -> TaskResponse:
        task = await self._require(task_id)
        changes = request.model_dump(exclude_unset=True)

        if changes.get("project_id") is not None and changes["project_id"] != task.project_id:
            await self._require_project(changes["project_id"])
            task.project_id = changes["project_id"]
        if "developer_id" in changes:
            if changes["developer_id"] is not None:
                await self._require_developer(changes["developer_id"])
            task.developer_id = changes["developer_id"]
        if changes.get("title") is not None:
            task.title = changes["title"].strip()
        if "description" in changes:
            task.description = changes["description"]
        if changes.get("status") is not None:
            task.status = TaskStatus(changes["status"])
        if "due_date" in changes:
            task.due_date = changes["due_date"]

        updated = await self._repository.update(task)
        self._logger.info("task_updated", extra={"task_id": str(task_id)})
        await self._audit(ActionType.UPDATE, updated, actor_name)
        return TaskResponse.from_domain(updated)

    async def delete_task(self, task_id: uuid.UUID, actor_name: str) -> None:
        task = await self._require(task_id)
        await self._repository.delete(task_id)
        self._logger.info("task_deleted", extra={"task_id": str(task_id)})
        await self._audit(ActionType.DELETE, task, actor_name)

    async def assign_task(self, task_id: uuid.UUID, developer_id: uuid.UUID, actor_name: str) -> TaskResponse:
        task = await self._require(task_id)
        await self._require_developer(developer_id)
        if task.status == TaskStatus.COMPLETED:
            raise TaskAssignmentError("Cannot assign a completed task")
        if task.developer_id == developer_id:
            raise TaskAssignmentError("Task is already assigned to this developer")

        task.developer_id = developer_id
        updated = await self._repository.update(task)
        self._logger.info(
            "task_assigned",
            extra={"task_id": str(task_id), "developer_id": str(developer_id)},
        )
        await self._audit(ActionType.UPDATE, updated, actor_name)
        return TaskResponse.from_domain(updated)

    async def unassign_task(self, task_id: uuid.UUID, actor_name: str) -> TaskResponse:
        task = await self._require(task_id)
        if not task.is_assigned:
            raise TaskAssignmentError("Task is not assigned to any developer")

        task.developer_id = None
        updated = await self._repository.update(task)
        self._logger.info("task_unassigned", extra={"task_id": str(task_id)})
        await self._audit(ActionType.UPDATE, updated, actor_name)
        return TaskResponse.from_domain(updated)

    async def get_tasks_by_project(self, project_id: uuid.UUID, page: PageRequest) -> Page[TaskResponse]:
        await self._require_project(project_id)
        return (await self._repository.find_by_project(project_id, page)).map(TaskResponse.from_domain)

    async def get_tasks_by_developer(self, developer_id: uuid.UUID, page: PageRequest) -> Page[TaskResponse]:
        await self._require_developer(developer_id)
        return (await self._repository.find_by_developer(developer_id, page)).map(TaskResponse.from_domain)

    async def get_tasks_by_status(self, status: TaskStatus, page: PageRequest) -> Page[TaskResponse]:
        return (await self._repository.find_by_status(status, page)).map(TaskResponse.from_domain)

    async def get_overdue_tasks(self) -> List[TaskResponse]:
        return [TaskResponse.from_domain(t) for t in await self._repository.find_overdue(self._today())]

    async def get_unassigned_tasks(self) -> List[TaskResponse]:
        return [TaskResponse.from_domain(t) for t in await self._repository.find_unassigned()]

    async def get_task_counts_by_status(self) -> Dict[TaskStatus, int]:
        return await self._repository.count_by_status()

    async def get_task_statistics(
        self,
        project_id: Optional[uuid.UUID] = None,
        developer_id: Optional[uuid.UUID] = None,
    ) -> TaskStatsResponse:
        if project_id is not None:
            await self._require_project(project_id)
        if developer_id is not None:
            await self._require_developer(developer_id)
        counts = await self._repository.count_by_status(project_id=project_id, developer_id=developer_id)
        return _stats(counts)
