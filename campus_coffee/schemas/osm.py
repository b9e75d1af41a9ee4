"""OpenStreetMap node schema (read-only input of the POS import)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from campus_coffee.domain.enums import OsmAmenity


class OsmNode(BaseModel):
    node_id: int
    name: str
    description: Optional[str] = None
    amenity: OsmAmenity
    street: Optional[str] = None
    house_number: Optional[str] = None
    postcode: Optional[str] = None
    city: Optional[str] = None
