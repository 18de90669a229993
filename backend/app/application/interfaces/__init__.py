from .customization_repository import CustomizationRepository

__all__ = [
    "CustomizationRepository",
]
