"""Top-level API router — includes the resource routers under /api."""

from fastapi import APIRouter

from app.presentation.api.endpoints.customizations import router as customizations_router

router = APIRouter(prefix="/api")
router.include_router(customizations_router)
