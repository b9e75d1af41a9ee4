from __future__ import annotations

import os

# Settings are read at import time; keep tests off the developer database.
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ADMIN_ENDPOINTS_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from campus_coffee.core.exceptions import OsmNodeNotFoundError
from campus_coffee.db.base import get_db, init_models
from campus_coffee.domain.enums import CampusType, OsmAmenity, PosType
from campus_coffee.schemas.osm import OsmNode
from campus_coffee.schemas.pos import PosDto
from campus_coffee.services.osm_service import get_osm_service


SCHMELZPUNKT_NODE_ID = 5589879349


class FakeOsm:
    """In-memory stand-in for OsmDataService."""

    def __init__(self) -> None:
        self.nodes: dict[int, OsmNode] = {}
        self.calls: list[int] = []

    def add(self, node: OsmNode) -> OsmNode:
        self.nodes[node.node_id] = node
        return node

    async def fetch_node(self, node_id: int) -> OsmNode:
        self.calls.append(node_id)
        try:
            return self.nodes[node_id]
        except KeyError:
            raise OsmNodeNotFoundError(node_id) from None


def schmelzpunkt_node(**overrides) -> OsmNode:
    values = dict(
        node_id=SCHMELZPUNKT_NODE_ID,
        name="Rada Coffee & Rösterei",
        description="Caffé und Rösterei",
        amenity=OsmAmenity.CAFE,
        street="Untere Straße",
        house_number="21",
        postcode="69117",
        city="Heidelberg",
    )
    values.update(overrides)
    return OsmNode(**values)


def sample_pos() -> list[PosDto]:
    return [
        PosDto(
            name="Schmelzpunkt",
            description="Great waffles",
            type=PosType.CAFE,
            campus=CampusType.ALTSTADT,
            street="Hauptstraße",
            house_number="90",
            postal_code=69117,
            city="Heidelberg",
        ),
        PosDto(
            name="Bäcker Görtz",
            description="Walking distance to lecture hall",
            type=PosType.BAKERY,
            campus=CampusType.INF,
            street="Berliner Str.",
            house_number="43",
            postal_code=69120,
            city="Heidelberg",
        ),
        PosDto(
            name="New Vending Machine",
            description="Use only in case of emergencies",
            type=PosType.VENDING_MACHINE,
            campus=CampusType.BERGHEIM,
            street="Teststraße",
            house_number="99a",
            postal_code=12345,
            city="Other City",
        ),
    ]


@pytest.fixture()
async def db_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'campus_coffee_test.db'}",
        poolclass=NullPool,
        # racing writers wait for the SQLite write lock instead of failing
        connect_args={"timeout": 30},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False)


@pytest.fixture()
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture()
def fake_osm() -> FakeOsm:
    return FakeOsm()


@pytest.fixture()
def client(session_factory, fake_osm):
    from campus_coffee.main import create_app

    app = create_app(enable_admin=True)

    async def _get_test_db():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_osm_service] = lambda: fake_osm
    return TestClient(app)
