"""FastAPI dependency injection — wires infrastructure to application layer."""

import json
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.services import CustomizationService
from app.domain.exceptions import MalformedRequestError
from app.infrastructure.database.repositories import SQLAlchemyCustomizationRepository


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """The session factory built at startup (or injected by create_app)."""
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Database not initialized")
    return session_factory


async def get_customization_service(
    request: Request,
) -> AsyncGenerator[CustomizationService, None]:
    """Provides a CustomizationService instance with its repository wired up."""
    repository = SQLAlchemyCustomizationRepository(get_session_factory(request))
    yield CustomizationService(repository)


async def read_json_body(request: Request) -> Any:
    """Parse the raw request body as JSON without imposing any shape on it.

    An empty body yields None; the validators report it as missing.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise MalformedRequestError("Request body contains invalid JSON") from exc
