"""POS router — thin HTTP layer over :class:`PosService`.

Pattern:
  1. Inject the DB session (and the OSM client where needed) via Depends
  2. Instantiate the service with the session
  3. Call service methods and map ORM rows to ``PosDto``

Domain errors propagate to the handlers in ``campus_coffee.core.exceptions``.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_coffee.core.exceptions import BadRequestError
from campus_coffee.db.base import get_db
from campus_coffee.domain.enums import CampusType
from campus_coffee.domain.pos import Pos
from campus_coffee.schemas.pos import PosDto
from campus_coffee.services.osm_service import OsmDataService, get_osm_service
from campus_coffee.services.pos import PosService

router = APIRouter(prefix="/api/pos", tags=["POS"])


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _created(request: Request, response: Response, pos: Pos) -> PosDto:
    """Set 201 + Location: /api/pos/{id} and return the DTO."""
    response.headers["Location"] = str(request.url_for("get_pos", pos_id=pos.id))
    return PosDto.model_validate(pos)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=list[PosDto])
async def list_pos(session: AsyncSession = Depends(get_db)):
    """List all points of sale."""
    items = await PosService(session).get_all()
    return [PosDto.model_validate(p) for p in items]


# Declared before /{pos_id} so "filter" is not parsed as an id
@router.get("/filter", response_model=PosDto)
async def get_pos_by_name(
    name: str = Query(..., description="Exact POS name"),
    session: AsyncSession = Depends(get_db),
):
    pos = await PosService(session).get_by_name(name)
    return PosDto.model_validate(pos)


@router.get("/{pos_id}", response_model=PosDto, name="get_pos")
async def get_pos(pos_id: int, session: AsyncSession = Depends(get_db)):
    pos = await PosService(session).get_by_id(pos_id)
    return PosDto.model_validate(pos)


@router.post("", response_model=PosDto, status_code=status.HTTP_201_CREATED)
async def create_pos(
    body: PosDto,
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db),
):
    """Create a new POS. The body must not carry an id."""
    if body.id is not None:
        raise BadRequestError("POS ID must not be set when creating a POS.")
    pos = await PosService(session).upsert(body)
    return _created(request, response, pos)


@router.post(
    "/import/osm/{node_id}", response_model=PosDto, status_code=status.HTTP_201_CREATED
)
async def import_pos_from_osm(
    node_id: int,
    request: Request,
    response: Response,
    campus: CampusType = Body(..., description='Campus of the POS, e.g. "ALTSTADT"'),
    session: AsyncSession = Depends(get_db),
    osm: OsmDataService = Depends(get_osm_service),
):
    """Create (or update, if the name exists) a POS from an OpenStreetMap node."""
    pos = await PosService(session, osm).import_from_osm_node(node_id, campus)
    return _created(request, response, pos)


@router.put("/{pos_id}", response_model=PosDto)
async def update_pos(
    pos_id: int,
    body: PosDto,
    session: AsyncSession = Depends(get_db),
):
    if body.id != pos_id:
        raise BadRequestError("POS ID in path and body do not match.")
    pos = await PosService(session).upsert(body)
    return PosDto.model_validate(pos)
