"""Administrative routes. Mounted only when ``ADMIN_ENDPOINTS_ENABLED`` is set."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_coffee.db.base import get_db
from campus_coffee.services.pos import PosService


router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.delete("/pos", status_code=status.HTTP_204_NO_CONTENT)
async def clear_pos(session: AsyncSession = Depends(get_db)):
    """Delete every POS record."""
    await PosService(session).clear()
