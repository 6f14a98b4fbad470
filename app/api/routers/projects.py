"""Projects API router: CRUD plus status, overdue, search and deadline filters."""

import uuid
from datetime import date
from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Response

from app.api.dependencies import get_actor, get_project_service
from app.api.pagination import entity_page_params
from app.application.project_service import ProjectService
from app.core.pagination import PageRequest
from app.domain.models.project import ProjectStatus
from app.domain.schemas.common import PageResponse
from app.domain.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest

router = APIRouter(tags=["projects"])

Service = Annotated[ProjectService, Depends(get_project_service)]
Actor = Annotated[str, Depends(get_actor)]
Paging = Annotated[PageRequest, Depends(entity_page_params)]


@router.post("/", response_model=ProjectResponse, status_code=201)
async def create_project(body: ProjectCreateRequest, service: Service, actor: Actor):
    """Create a project. Name must be unique (case-insensitive)."""
    return await service.create_project(body, actor)


@router.get("/", response_model=PageResponse[ProjectResponse])
async def list_projects(service: Service, paging: Paging):
    return PageResponse[ProjectResponse].from_page(await service.list_projects(paging))


@router.get("/status/{status}", response_model=PageResponse[ProjectResponse])
async def get_projects_by_status(status: ProjectStatus, service: Service, paging: Paging):
    return PageResponse[ProjectResponse].from_page(await service.get_projects_by_status(status, paging))


@router.get("/overdue", response_model=List[ProjectResponse])
async def get_overdue_projects(service: Service):
    """Projects past their deadline that are not completed."""
    return await service.get_overdue_projects()


@router.get("/empty", response_model=List[ProjectResponse])
async def get_projects_without_tasks(service: Service):
    return await service.get_projects_without_tasks()


@router.get("/search", response_model=PageResponse[ProjectResponse])
async def search_projects_by_name(
    service: Service,
    paging: Paging,
    name: Annotated[str, Query(min_length=1)],
):
    return PageResponse[ProjectResponse].from_page(await service.search_projects_by_name(name, paging))


@router.get("/deadline-range", response_model=List[ProjectResponse])
async def get_projects_by_deadline_range(
    service: Service,
    start_date: Annotated[date, Query()],
    end_date: Annotated[date, Query()],
):
    """Deadlines within [start_date, end_date], inclusive."""
    return await service.get_projects_by_deadline_range(start_date, end_date)


@router.get("/count/status/{status}")
async def count_projects_by_status(status: ProjectStatus, service: Service):
    return {"status": status.value, "count": await service.count_by_status(status)}


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: uuid.UUID, service: Service):
    return await service.get_project(project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(project_id: uuid.UUID, body: ProjectUpdateRequest, service: Service, actor: Actor):
    return await service.update_project(project_id, body, actor)


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: uuid.UUID, service: Service, actor: Actor):
    """Delete a project and all of its tasks."""
    await service.delete_project(project_id, actor)
    return Response(status_code=204)
