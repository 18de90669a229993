"""Uniform response envelopes shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: ``{success: true, data, message}``."""

    success: bool = True
    data: T
    message: str


class ErrorResponse(BaseModel):
    """Error envelope: ``{success: false, error, message, details?}``."""

    success: bool = False
    error: str
    message: str
    details: list[str] | None = None

    def to_content(self) -> dict:
        """Serialize for a JSONResponse, leaving out ``details`` when there are none."""
        return self.model_dump(exclude_none=True)


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
