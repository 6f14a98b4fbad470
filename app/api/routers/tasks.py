"""Tasks API router: CRUD, assignment, filters and statistics."""

import uuid
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.api.dependencies import get_actor, get_task_service
from app.api.pagination import entity_page_params
from app.application.task_service import TaskService
from app.core.pagination import PageRequest
from app.domain.models.task import TaskStatus
from app.domain.schemas.common import PageResponse
from app.domain.schemas.task import TaskCreateRequest, TaskResponse, TaskStatsResponse, TaskUpdateRequest

router = APIRouter(tags=["tasks"])

Service = Annotated[TaskService, Depends(get_task_service)]
Actor = Annotated[str, Depends(get_actor)]
Paging = Annotated[PageRequest, Depends(entity_page_params)]


@router.post("/", response_model=TaskResponse, status_code=201)
async def create_task(body: TaskCreateRequest, service: Service, actor: Actor):
    """Create a task in an existing project, optionally assigned to an existing developer."""
    return await service.create_task(body, actor)


@router.get("/", response_model=PageResponse[TaskResponse])
async def list_tasks(service: Service, paging: Paging):
    return PageResponse[TaskResponse].from_page(await service.list_tasks(paging))


@router.get("/project/{project_id}", response_model=PageResponse[TaskResponse])
async def get_tasks_by_project(project_id: uuid.UUID, service: Service, paging: Paging):
    return PageResponse[TaskResponse].from_page(await service.get_tasks_by_project(project_id, paging))


@router.get("/developer/{developer_id}", response_model=PageResponse[TaskResponse])
async def get_tasks_by_developer(developer_id: uuid.UUID, service: Service, paging: Paging):
    return PageResponse[TaskResponse].from_page(await service.get_tasks_by_developer(developer_id, paging))


@router.get("/status/{status}", response_model=PageResponse[TaskResponse])
async def get_tasks_by_status(status: TaskStatus, service: Service, paging: Paging):
    return PageResponse[TaskResponse].from_page(await service.get_tasks_by_status(status, paging))


@router.get("/overdue", response_model=List[TaskResponse])
async def get_overdue_tasks(service: Service):
    return await service.get_overdue_tasks()


@router.get("/unassigned", response_model=List[TaskResponse])
async def get_unassigned_tasks(service: Service):
    return await service.get_unassigned_tasks()


@router.get("/stats", response_model=TaskStatsResponse)
async def get_task_statistics(
    service: Service,
    project_id: Annotated[Optional[uuid.UUID], Query()] = None,
    developer_id: Annotated[Optional[uuid.UUID], Query()] = None,
):
    """Overall statistics, or scoped to one project and/or developer."""
    return await service.get_task_statistics(project_id=project_id, developer_id=developer_id)


@router.get("/counts/status", response_model=Dict[TaskStatus, int])
async def get_task_counts_by_status(service: Service):
    return await service.get_task_counts_by_status()


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: uuid.UUID, service: Service):
    return await service.get_task(task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: uuid.UUID, body: TaskUpdateRequest, service: Service, actor: Actor):
    return await service.update_task(task_id, body, actor)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: uuid.UUID, service: Service, actor: Actor):
    await service.delete_task(task_id, actor)
    return Response(status_code=204)


@router.put("/{task_id}/assign/{developer_id}", response_model=TaskResponse)
async def assign_task(task_id: uuid.UUID, developer_id: uuid.UUID, service: Service, actor: Actor):
    return await service.assign_task(task_id, developer_id, actor)


@router.put("/{task_id}/unassign", response_model=TaskResponse)
async def unassign_task(task_id: uuid.UUID, service: Service, actor: Actor):
    return await service.unassign_task(task_id, actor)
