"""Abstract repository interface (port) for customization persistence."""

from abc import ABC, abstractmethod

from app.application.schemas import CustomizationCreate, CustomizationUpdate
from app.domain.entities import Customization


class CustomizationRepository(ABC):
    """Port for customization persistence — implemented in the infrastructure layer.

    A customization and its pieces are always written together. Identifiers
    that are not well-formed UUIDs are treated as absent, never as errors.
    """

    @abstractmethod
    async def create(self, data: CustomizationCreate) -> Customization:
        """Persist a customization with its pieces and return it with generated fields."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Customization]:
        """All customizations, newest first, pieces in insertion order."""
        ...

    @abstractmethod
    async def get_by_id(self, customization_id: str) -> Customization | None:
        """Retrieve a single customization, or None if it does not exist."""
        ...

    @abstractmethod
    async def update(
        self, customization_id: str, data: CustomizationUpdate
    ) -> Customization | None:
        """Apply the supplied fields; a supplied piece list replaces the old one.

        Returns the refreshed customization, or None if it does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, customization_id: str) -> bool:
        """Delete a customization and its pieces. Returns True if a row was removed."""
        ...

    @abstractmethod
    async def exists(self, customization_id: str) -> bool:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove every customization (pieces cascade)."""
        ...
