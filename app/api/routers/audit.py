"""Audit API router: read-only audit trail queries, counts, and retention cleanup."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_audit_query_service
from app.api.pagination import audit_page_params
from app.audit.models import ActionType
from app.audit.query_service import AuditQueryService
from app.audit.schemas import AuditRecordView, CleanupResponse, CountResponse
from app.core.pagination import PageRequest
from app.domain.schemas.common import PageResponse
from app.domain.validators import validate_date_range
from app.infrastructure.database.audit_repository_db import to_utc

router = APIRouter(tags=["audit"])

Service = Annotated[AuditQueryService, Depends(get_audit_query_service)]
Paging = Annotated[PageRequest, Depends(audit_page_params)]
AuditPage = PageResponse[AuditRecordView]


@router.get("/entity/{entity_type}/{entity_id}", response_model=AuditPage)
async def get_entity_trail(entity_type: str, entity_id: str, service: Service, paging: Paging):
    """Full audit trail of one entity."""
    return AuditPage.from_page(await service.get_trail_for_entity(entity_type, entity_id, paging))


@router.get("/user/{actor_name}", response_model=AuditPage)
async def get_user_actions(actor_name: str, service: Service, paging: Paging):
    return AuditPage.from_page(await service.get_actions_by_actor(actor_name, paging))


@router.get("/action/{action_type}", response_model=AuditPage)
async def get_actions_by_type(action_type: ActionType, service: Service, paging: Paging):
    return AuditPage.from_page(await service.get_actions_by_type(action_type, paging))


@router.get("/date-range", response_model=AuditPage)
async def get_audits_by_date_range(
    service: Service,
    paging: Paging,
    start: Annotated[datetime, Query(description="ISO-8601 start, inclusive")],
    end: Annotated[datetime, Query(description="ISO-8601 end, inclusive")],
):
    start, end = to_utc(start), to_utc(end)
    validate_date_range(start, end)
    return AuditPage.from_page(await service.get_by_date_range(start, end, paging))


@router.get("/recent", response_model=AuditPage)
async def get_recent_audits(service: Service, paging: Paging):
    """All audit records, newest first."""
    return AuditPage.from_page(await service.get_all(paging))


@router.get("/count/entity-type/{entity_type}", response_model=CountResponse)
async def count_by_entity_type(entity_type: str, service: Service):
    return CountResponse(key=entity_type, count=await service.count_by_entity_type(entity_type))


@router.get("/count/action/{action_type}", response_model=CountResponse)
async def count_by_action_type(action_type: ActionType, service: Service):
    return CountResponse(key=action_type.value, count=await service.count_by_action_type(action_type))


@router.get("/count/user/{actor_name}", response_model=CountResponse)
async def count_by_actor(actor_name: str, service: Service):
    return CountResponse(key=actor_name, count=await service.count_by_actor(actor_name))


@router.delete("/cleanup", response_model=CleanupResponse)
async def cleanup_old_audits(
    service: Service,
    cutoff: Annotated[datetime, Query(description="Records strictly older than this are deleted")],
):
    """Retention enforcement. Irreversible."""
    return CleanupResponse(deleted=await service.cleanup_older_than(cutoff), cutoff=cutoff)
