"""Root conftest — shared test configuration and fixtures.

Every test that touches the database gets a fresh in-memory SQLite
database with foreign keys enabled, so piece cascades behave as they do
on PostgreSQL.
"""

import base64
import os

# Must be set before app.config caches its settings
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import get_settings
from app.infrastructure.database import build_engine, build_session_factory, init_schema
from app.infrastructure.database.repositories import SQLAlchemyCustomizationRepository
from app.main import create_app

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"

VALID_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><rect width="8" height="8"/></svg>'


def encode_svg(svg: str = VALID_SVG) -> str:
    return base64.b64encode(svg.encode("utf-8")).decode("ascii")


@pytest.fixture
def valid_image() -> str:
    return encode_svg()


@pytest.fixture
def make_payload(valid_image):
    """Factory for a valid create payload; keyword overrides replace top-level fields."""

    def _make(**overrides) -> dict:
        payload = {
            "name": "Test Chess Set",
            "description": "A test chess set",
            "boardImage": valid_image,
            "pieces": [
                {"type": "pawn", "color": "white", "imageData": valid_image},
                {"type": "king", "color": "black", "imageData": valid_image},
            ],
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
async def test_engine():
    engine = build_engine(get_settings(), SQLITE_MEMORY_URL)
    await init_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
def repository(session_factory) -> SQLAlchemyCustomizationRepository:
    return SQLAlchemyCustomizationRepository(session_factory)


@pytest.fixture
async def client(session_factory):
    app = create_app(session_factory=session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
