# app/infrastructure/database/repository.py

from typing import Any, Dict, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import Page, PageRequest
from app.infrastructure.database.models import utcnow

T = TypeVar("T")


async def paginate(
    session: AsyncSession,
    stmt: Select,
    page: PageRequest,
    order_by: Sequence[Any],
) -> Page:
    """Run stmt as a count query and as an ordered, offset/limit page query."""
    total = await session.scalar(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    )
    result = await session.execute(
        stmt.order_by(*order_by).offset(page.offset).limit(page.size)
    )
    return Page(
        content=list(result.scalars().all()),
        page=page.page,
        size=page.size,
        total_elements=total or 0,
    )


def order_clause(columns: Dict[str, Any], page: PageRequest, default: str) -> Any:
    """Map a PageRequest sort key onto a whitelisted column; unknown keys fall back to default."""
    column = columns.get(page.sort_by, columns[default])
    return column.desc() if page.descending else column.asc()


class AsyncRepository(Generic[T]):
    """Session-scoped CRUD over one ORM model."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        self._session = session
        self.model = model

    async def get_by_id(self, id) -> Optional[T]:
        return await self._session.get(self.model, id)

    async def add(self, obj: T) -> T:
        if getattr(obj, "created_at", None) is None:
            obj.created_at = utcnow()
        self._session.add(obj)
        await self._session.commit()
        return obj

    async def save(self, obj: T) -> T:
        obj.updated_at = utcnow()
        await self._session.commit()
        return obj

    async def remove(self, obj: T) -> None:
        await self._session.delete(obj)
        await self._session.commit()

    async def list_page(self, page: PageRequest, order_by: Sequence[Any]) -> Page:
        return await paginate(self._session, select(self.model), page, order_by)
