"""Generic async repository: reads, create, update and bulk clear."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, NoReturn, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_coffee.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Constraint violations raised by the database on flush are handed to
    :meth:`_integrity_error`, which subclasses override to raise a domain
    error. Individual deletes are never exposed; :meth:`delete_all` is the
    only removal path.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        return select(self.model)

    def _integrity_error(self, exc: IntegrityError, values: dict[str, Any]) -> NoReturn:
        raise exc

    async def _flush(self, values: dict[str, Any]) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            self._integrity_error(exc, values)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        result = await self._session.execute(
            self._base_query().where(self.model.id == entity_id)
        )
        return result.scalars().first()

    async def get_one_by(self, **filters: Any) -> ModelT | None:
        q = self._base_query()
        for col_name, value in filters.items():
            q = q.where(getattr(self.model, col_name) == value)
        result = await self._session.execute(q)
        return result.scalars().first()

    async def list(self, *, order_by: str = "id") -> list[ModelT]:
        q = self._base_query()
        col = getattr(self.model, order_by, None)
        if col is not None:
            q = q.order_by(col.asc())
        items = (await self._session.execute(q)).scalars().all()
        return list(items)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        kwargs.pop("id", None)
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._flush(kwargs)  # populate id
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: int, **kwargs: Any) -> ModelT | None:
        kwargs.pop("id", None)
        kwargs.pop("created_at", None)
        instance = await self.get_by_id(entity_id)
        if instance is None:
            return None

        for col_name, value in kwargs.items():
            setattr(instance, col_name, value)
        if hasattr(self.model, "updated_at"):
            instance.updated_at = datetime.now(timezone.utc)

        await self._flush(kwargs)
        await self._session.refresh(instance)
        return instance

    async def delete_all(self) -> int:
        result = await self._session.execute(delete(self.model))
        await self._session.flush()
        self._session.expunge_all()
        return result.rowcount or 0
