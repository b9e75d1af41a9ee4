"""POS service — create/update decisions and the OpenStreetMap import.

Rule: No FastAPI here. Routers hand in DTOs, the service returns ORM rows.
Name uniqueness is enforced by the database; this service never locks.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_coffee.core.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    PosNotFoundError,
)
from campus_coffee.domain.enums import CampusType, OsmAmenity, PosType
from campus_coffee.domain.pos import Pos
from campus_coffee.repositories.pos import PosRepository
from campus_coffee.schemas.osm import OsmNode
from campus_coffee.schemas.pos import MAX_POSTAL_CODE, PosDto

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# OSM amenity → POS type
# ---------------------------------------------------------------------------

AMENITY_TO_POS_TYPE: dict[OsmAmenity, PosType] = {
    OsmAmenity.CAFE: PosType.CAFE,
    OsmAmenity.ICE_CREAM: PosType.CAFE,
    OsmAmenity.VENDING_MACHINE: PosType.VENDING_MACHINE,
    OsmAmenity.FOOD_COURT: PosType.CAFETERIA,
    OsmAmenity.BAR: PosType.OTHER,
    OsmAmenity.BIERGARTEN: PosType.OTHER,
    OsmAmenity.PUB: PosType.OTHER,
    OsmAmenity.RESTAURANT: PosType.OTHER,
    OsmAmenity.FAST_FOOD: PosType.OTHER,
}

_unmapped = set(OsmAmenity) - AMENITY_TO_POS_TYPE.keys()
if _unmapped:
    raise RuntimeError(
        "AMENITY_TO_POS_TYPE has no entry for: "
        + ", ".join(sorted(a.value for a in _unmapped))
    )


def map_amenity_to_pos_type(amenity: OsmAmenity) -> PosType:
    return AMENITY_TO_POS_TYPE[amenity]


# PosDto field (or its camelCase alias, as reported by pydantic) → OSM tag
_FIELD_TO_TAG = {
    "name": "name",
    "description": "description",
    "street": "addr:street",
    "house_number": "addr:housenumber",
    "houseNumber": "addr:housenumber",
    "postal_code": "postcode",
    "postalCode": "postcode",
    "city": "addr:city",
}

_REQUIRED_ADDRESS_TAGS = (
    ("street", "addr:street"),
    ("house_number", "addr:housenumber"),
    ("city", "addr:city"),
)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class OsmNodeFetcher(Protocol):
    async def fetch_node(self, node_id: int) -> OsmNode: ...


class PosService:
    def __init__(self, session: AsyncSession, osm: Optional[OsmNodeFetcher] = None):
        self._repo = PosRepository(session)
        self._osm = osm

    async def clear(self) -> None:
        """Remove every POS. Administrative / test use only."""
        logger.warning("Clearing all POS data")
        removed = await self._repo.delete_all()
        logger.info("Removed %d POS record(s)", removed)

    async def get_all(self) -> list[Pos]:
        logger.debug("Retrieving all POS")
        return await self._repo.list()

    async def get_by_id(self, pos_id: int) -> Pos:
        logger.debug("Retrieving POS with ID: %s", pos_id)
        pos = await self._repo.get_by_id(pos_id)
        if pos is None:
            raise PosNotFoundError("id", pos_id)
        return pos

    async def get_by_name(self, name: str) -> Pos:
        logger.debug("Retrieving POS with name: %s", name)
        pos = await self._repo.get_by_name(name)
        if pos is None:
            raise PosNotFoundError("name", name)
        return pos

    async def upsert(self, pos: PosDto) -> Pos:
        """Create ``pos`` when it has no id, otherwise update the existing row.

        Raises ``PosNotFoundError`` when updating an id that does not exist
        and ``DuplicatePosNameError`` when the name is taken.
        """
        try:
            if pos.id is None:
                logger.info("Creating new POS: %s", pos.name)
                saved = await self._repo.create(**pos.to_columns())
            else:
                logger.info("Updating POS with ID: %s", pos.id)
                await self.get_by_id(pos.id)  # raises 404 if missing
                saved = await self._repo.update(pos.id, **pos.to_columns())
        except DuplicatePosNameError as exc:
            logger.error("Error upserting POS '%s': %s", pos.name, exc.message)
            raise

        logger.info("Successfully upserted POS with ID: %s", saved.id)
        return saved  # type: ignore[return-value]

    async def import_from_osm_node(self, node_id: int, campus: CampusType) -> Pos:
        """Fetch an OSM node and create or update the POS with the same name."""
        if self._osm is None:
            raise RuntimeError("PosService was created without an OSM client")

        logger.info("Importing POS from OpenStreetMap node %d...", node_id)
        node = await self._osm.fetch_node(node_id)

        existing = await self._repo.get_by_name(node.name)
        candidate = self._convert_osm_node(node, campus, existing)

        saved = await self.upsert(candidate)
        logger.info(
            "Successfully imported POS '%s' from OSM node %d", saved.name, node_id
        )
        return saved

    # ── OSM conversion ────────────────────────────────────────────────────

    @staticmethod
    def _parse_postcode(node: OsmNode) -> int:
        raw = node.postcode or ""
        if not (raw.isascii() and raw.isdigit()) or int(raw) > MAX_POSTAL_CODE:
            logger.error(
                "Could not parse postcode %r of OSM node %d", node.postcode, node.node_id
            )
            raise OsmNodeMissingFieldsError(node.node_id, "postcode")
        return int(raw)

    def _convert_osm_node(
        self, node: OsmNode, campus: CampusType, existing: Optional[Pos] = None
    ) -> PosDto:
        """Build the upsert candidate for ``node``.

        With ``existing`` the candidate carries its id, and tags the node does
        not have keep the stored value.
        """
        for field, tag in _REQUIRED_ADDRESS_TAGS:
            if not (getattr(node, field) or "").strip():
                raise OsmNodeMissingFieldsError(node.node_id, tag)

        description = node.description
        if description is None:
            description = existing.description if existing is not None else ""

        postal_code = self._parse_postcode(node)
        try:
            return PosDto(
                id=existing.id if existing is not None else None,
                name=node.name,
                description=description,
                type=map_amenity_to_pos_type(node.amenity),
                campus=campus,
                street=node.street,
                house_number=node.house_number,
                postal_code=postal_code,
                city=node.city,
            )
        except ValidationError as exc:
            field = str(exc.errors()[0]["loc"][0])
            logger.error("OSM node %d has an invalid %s: %s", node.node_id, field, exc)
            raise OsmNodeMissingFieldsError(
                node.node_id, _FIELD_TO_TAG.get(field, field)
            ) from exc
