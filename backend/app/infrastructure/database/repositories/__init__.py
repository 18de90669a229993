from .customization_repository import SQLAlchemyCustomizationRepository

__all__ = [
    "SQLAlchemyCustomizationRepository",
]
