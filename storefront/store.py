"""
Catalog store.

Generic async CRUD over the ORM models, keyed by id. Lookups return None
when the row does not exist; list calls always hit the database.
"""

from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from storefront.database import get_db

logger = structlog.get_logger()


def _as_uuid(value) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


class CatalogStore:
    """Data access for catalog, order and settings rows"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _filtered(self, model, query, filters: Optional[Dict[str, Any]]):
        for field, value in (filters or {}).items():
            query = query.where(getattr(model, field) == value)
        return query

    def _ordered(self, model, query, order_by: Sequence[str]):
        for field in order_by:
            if field.startswith("-"):
                query = query.order_by(getattr(model, field[1:]).desc())
            else:
                query = query.order_by(getattr(model, field))
        return query

    async def get(self, model, id, options: Sequence = ()):
        try:
            row_id = _as_uuid(id)
        except ValueError:
            return None
        query = select(model).where(model.id == row_id).options(*options)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def first(self, model, filters: Optional[Dict[str, Any]] = None, order_by: Sequence[str] = ()):
        query = self._ordered(model, self._filtered(model, select(model), filters), order_by)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def list(
        self,
        model,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = (),
        options: Sequence = (),
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List:
        query = self._filtered(model, select(model), filters).options(*options)
        query = self._ordered(model, query, order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, model, filters: Optional[Dict[str, Any]] = None) -> int:
        query = self._filtered(model, select(func.count(model.id)), filters)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def insert(self, model, data: Dict[str, Any]):
        """Add and commit a row without reloading it"""
        row = model(**data)
        self.db.add(row)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return row

    async def refresh(self, row):
        await self.db.refresh(row)
        return row

    async def create(self, model, data: Dict[str, Any]):
        row = await self.refresh(await self.insert(model, data))
        logger.info("Row created", table=model.__tablename__, id=str(row.id))
        return row

    async def update(self, model, id, data: Dict[str, Any]):
        row = await self.get(model, id)
        if row is None:
            return None
        for field, value in data.items():
            setattr(row, field, value)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(row)
        return row

    async def delete(self, model, id, options: Sequence = ()) -> bool:
        """Delete a row; pass loaders for relationships the delete cascades to"""
        row = await self.get(model, id, options=options)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.commit()
        logger.info("Row deleted", table=model.__tablename__, id=str(id))
        return True


async def get_store(db: AsyncSession = Depends(get_db)) -> CatalogStore:
    return CatalogStore(db)
