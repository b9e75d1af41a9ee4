"""Shared Pydantic schema base with camelCase aliases."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """API schemas inherit from this: snake_case in Python, camelCase on the wire.

    ``from_attributes`` lets routers build responses straight from ORM rows.
    """

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    """Returned by /health."""
    status: str = "ok"
    app: str
    env: str
    version: str
