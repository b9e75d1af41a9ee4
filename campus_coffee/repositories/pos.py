"""POS repository — name lookups and unique-name violation mapping."""

from typing import Any, NoReturn

from sqlalchemy.exc import IntegrityError

from campus_coffee.core.exceptions import DuplicatePosNameError
from campus_coffee.domain.pos import POS_NAME_CONSTRAINT, Pos
from campus_coffee.repositories.base import BaseRepository


class PosRepository(BaseRepository[Pos]):
    model = Pos

    async def get_by_name(self, name: str) -> Pos | None:
        return await self.get_one_by(name=name)

    def _integrity_error(self, exc: IntegrityError, values: dict[str, Any]) -> NoReturn:
        # SQLite reports "UNIQUE constraint failed: pos.name", PostgreSQL the constraint name
        detail = str(exc.orig)
        if POS_NAME_CONSTRAINT in detail or "pos.name" in detail:
            raise DuplicatePosNameError(values.get("name", "")) from exc
        raise exc
