"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import get_settings
from app.infrastructure.database import (
    build_engine,
    build_session_factory,
    verify_schema,
    wait_for_database,
)
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.logging.request_logger import log_requests
from app.presentation.api.endpoints.health import router as health_router
from app.presentation.api.error_handlers import register_error_handlers
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — connect to the database and create the schema."""
    settings = get_settings()
    setup_logging(settings)

    # A session factory handed to create_app() means someone else owns the engine
    if app.state.session_factory is not None:
        yield
        return

    engine = build_engine(settings)
    try:
        # 1. Wait for the database to accept connections
        await wait_for_database(
            engine,
            max_retries=settings.db_max_retries,
            retry_delay_ms=settings.db_retry_delay_ms,
            backoff_multiplier=settings.db_backoff_multiplier,
        )

        # 2. Create tables if missing and confirm they exist
        await verify_schema(engine)
    except Exception:
        await engine.dispose()
        raise

    app.state.session_factory = build_session_factory(engine)
    logger.info("Chess Customization API started")

    yield

    # Shutdown
    app.state.session_factory = None
    await engine.dispose()
    logger.info("Chess Customization API shut down")


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    # Routes
    app.include_router(health_router)
    app.include_router(api_router)

    register_error_handlers(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=get_settings().port,
    )
