"""OpenStreetMap node client.

Fetches a single node from the OSM API v0.6 (``GET /node/{id}.json``) and
turns its tags into an :class:`~campus_coffee.schemas.osm.OsmNode`:

==================  =====================
OSM tag             OsmNode field
==================  =====================
name                name
description         description
amenity             amenity
addr:street         street
addr:housenumber    house_number
addr:postcode       postcode
addr:city           city
==================  =====================

No retries happen here; every failure to retrieve the node surfaces as
:class:`OsmNodeNotFoundError`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from campus_coffee.core.config import settings
from campus_coffee.core.exceptions import OsmNodeMissingFieldsError, OsmNodeNotFoundError
from campus_coffee.domain.enums import OsmAmenity
from campus_coffee.schemas.osm import OsmNode

logger = logging.getLogger(__name__)


class OsmDataService:
    """Thin async client for the OpenStreetMap API."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = client
        self.base_url = settings.osm_api_url.rstrip("/")

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=settings.osm_timeout,
            headers={"User-Agent": settings.osm_user_agent, "Accept": "application/json"},
        )

    # ── HTTP ──────────────────────────────────────────────────────────────

    async def _get_json(self, node_id: int) -> Dict[str, Any]:
        url = f"{self.base_url}/node/{node_id}.json"
        logger.info("Fetching OSM node %d from %s", node_id, url)
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with self._new_client() as client:
                    response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.error("OSM API request for node %d failed: %s", node_id, exc)
            raise OsmNodeNotFoundError(node_id, "OpenStreetMap API unreachable") from exc

        if response.status_code in (404, 410):
            logger.warning("OSM node %d not found (HTTP %d)", node_id, response.status_code)
            raise OsmNodeNotFoundError(node_id)
        if response.is_error:
            logger.error(
                "OSM API returned HTTP %d for node %d", response.status_code, node_id
            )
            raise OsmNodeNotFoundError(
                node_id, f"OpenStreetMap API returned HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Invalid JSON from OSM API for node %d: %s", node_id, exc)
            raise OsmNodeNotFoundError(node_id, "invalid response") from exc

    # ── Parsing ───────────────────────────────────────────────────────────

    @staticmethod
    def _find_node(payload: Dict[str, Any], node_id: int) -> Optional[Dict[str, Any]]:
        for element in payload.get("elements") or []:
            if element.get("type") == "node" and element.get("id") == node_id:
                return element
        return None

    @staticmethod
    def parse_node(node_id: int, element: Dict[str, Any]) -> OsmNode:
        """Build an OsmNode from a raw OSM element.

        Raises ``OsmNodeMissingFieldsError`` when ``name`` is absent or
        ``amenity`` is absent or not one of :class:`OsmAmenity`.
        """
        tags: Dict[str, str] = element.get("tags") or {}

        name = (tags.get("name") or "").strip()
        if not name:
            raise OsmNodeMissingFieldsError(node_id, "name")

        try:
            amenity = OsmAmenity.from_tag(tags.get("amenity") or "")
        except ValueError:
            logger.error(
                "Unsupported amenity %r on OSM node %d", tags.get("amenity"), node_id
            )
            raise OsmNodeMissingFieldsError(node_id, "amenity") from None

        return OsmNode(
            node_id=node_id,
            name=name,
            description=tags.get("description"),
            amenity=amenity,
            street=tags.get("addr:street"),
            house_number=tags.get("addr:housenumber"),
            postcode=tags.get("addr:postcode"),
            city=tags.get("addr:city"),
        )

    # ── Public methods ────────────────────────────────────────────────────

    async def fetch_node(self, node_id: int) -> OsmNode:
        payload = await self._get_json(node_id)
        element = self._find_node(payload, node_id)
        if element is None:
            logger.warning("OSM response for node %d contains no such node", node_id)
            raise OsmNodeNotFoundError(node_id)
        return self.parse_node(node_id, element)


def get_osm_service() -> OsmDataService:
    """Factory used as a FastAPI dependency (overridden in tests)."""
    return OsmDataService()
