from .customization import (
    ChessPieceResponse,
    ChessPieceSchema,
    CustomizationCreate,
    CustomizationUpdate,
    CustomizationResponse,
)
from .envelope import ApiResponse, ErrorResponse, HealthResponse

__all__ = [
    "ChessPieceResponse",
    "ChessPieceSchema",
    "CustomizationCreate",
    "CustomizationUpdate",
    "CustomizationResponse",
    "ApiResponse",
    "ErrorResponse",
    "HealthResponse",
]
