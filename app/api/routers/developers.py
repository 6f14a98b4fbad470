"""Developers API router."""

import uuid
from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Response

from app.api.dependencies import get_actor, get_developer_service
from app.api.pagination import entity_page_params
from app.application.developer_service import DeveloperService
from app.core.pagination import PageRequest
from app.domain.schemas.common import PageResponse
from app.domain.schemas.developer import (
    DeveloperCreateRequest,
    DeveloperResponse,
    DeveloperSummaryResponse,
    DeveloperUpdateRequest,
)

router = APIRouter(tags=["developers"])

Service = Annotated[DeveloperService, Depends(get_developer_service)]
Actor = Annotated[str, Depends(get_actor)]
Paging = Annotated[PageRequest, Depends(entity_page_params)]


@router.post("/", response_model=DeveloperResponse, status_code=201)
async def create_developer(body: DeveloperCreateRequest, service: Service, actor: Actor):
    """Create a developer. Email must be unique."""
    return await service.create_developer(body, actor)


@router.get("/", response_model=PageResponse[DeveloperResponse])
async def list_developers(service: Service, paging: Paging):
    return PageResponse[DeveloperResponse].from_page(await service.list_developers(paging))


@router.get("/email/{email}", response_model=DeveloperResponse)
async def get_developer_by_email(email: str, service: Service):
    return await service.get_developer_by_email(email)


@router.get("/top", response_model=List[DeveloperSummaryResponse])
async def get_top_developers(service: Service):
    """Top 5 developers by number of assigned tasks."""
    return await service.get_top_developers_by_task_count()


@router.get("/without-tasks", response_model=List[DeveloperSummaryResponse])
async def get_developers_without_tasks(service: Service):
    return await service.get_developers_without_tasks()


@router.get("/search", response_model=PageResponse[DeveloperResponse])
async def search_developers_by_name(
    service: Service,
    paging: Paging,
    name: Annotated[str, Query(min_length=1)],
):
    return PageResponse[DeveloperResponse].from_page(await service.search_developers_by_name(name, paging))


@router.get("/search/skill", response_model=PageResponse[DeveloperResponse])
async def search_developers_by_skill(
    service: Service,
    paging: Paging,
    skill: Annotated[str, Query(min_length=1)],
):
    return PageResponse[DeveloperResponse].from_page(await service.search_developers_by_skill(skill, paging))


@router.get("/count")
async def count_developers(service: Service):
    return {"count": await service.get_total_developer_count()}


@router.get("/{developer_id}", response_model=DeveloperResponse)
async def get_developer(developer_id: uuid.UUID, service: Service):
    return await service.get_developer(developer_id)


@router.put("/{developer_id}", response_model=DeveloperResponse)
async def update_developer(developer_id: uuid.UUID, body: DeveloperUpdateRequest, service: Service, actor: Actor):
    return await service.update_developer(developer_id, body, actor)


@router.delete("/{developer_id}", status_code=204)
async def delete_developer(developer_id: uuid.UUID, service: Service, actor: Actor):
    """Delete a developer; their tasks become unassigned."""
    await service.delete_developer(developer_id, actor)
    return Response(status_code=204)
