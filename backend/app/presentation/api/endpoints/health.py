"""Health check endpoint — no dependencies, always available."""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.application.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Returns the current application health status."""
    return HealthResponse(
        message="Server is healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
