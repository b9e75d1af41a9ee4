"""Domain package — all ORM models are imported here so ``create_all`` sees them.

Folder intent:
  pos.py     — Point of Sale model (unique name, system timestamps)
  enums.py   — PosType, CampusType, OsmAmenity
  mixins.py  — Shared TimestampMixin
"""

from campus_coffee.domain.enums import CampusType, OsmAmenity, PosType
from campus_coffee.domain.pos import Pos

__all__ = [
    "CampusType",
    "OsmAmenity",
    "Pos",
    "PosType",
]
