"""Closed value sets shared by the ORM model, the API schemas and the OSM client."""

from __future__ import annotations

import enum


class PosType(str, enum.Enum):
    CAFE = "CAFE"
    BAKERY = "BAKERY"
    CAFETERIA = "CAFETERIA"
    VENDING_MACHINE = "VENDING_MACHINE"
    OTHER = "OTHER"


class CampusType(str, enum.Enum):
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"


class OsmAmenity(str, enum.Enum):
    """Values of the OSM ``amenity=*`` tag that can be imported.

    Members are upper-case; :meth:`from_tag` maps the lower-case tag value.
    """

    BAR = "BAR"
    BIERGARTEN = "BIERGARTEN"
    CAFE = "CAFE"
    FAST_FOOD = "FAST_FOOD"
    FOOD_COURT = "FOOD_COURT"
    ICE_CREAM = "ICE_CREAM"
    PUB = "PUB"
    RESTAURANT = "RESTAURANT"
    VENDING_MACHINE = "VENDING_MACHINE"

    @classmethod
    def from_tag(cls, value: str) -> OsmAmenity:
        """``"ice_cream"`` → ``OsmAmenity.ICE_CREAM``. Raises ValueError if unknown."""
        return cls(value.strip().upper())
