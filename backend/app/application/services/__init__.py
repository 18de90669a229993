from .customization_service import CustomizationService

__all__ = [
    "CustomizationService",
]
