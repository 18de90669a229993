"""Application service (use cases) for Customization operations.

Each use case runs received → validated → persisted, leaving early with a
typed exception; the presentation layer turns those into HTTP responses.
"""

from typing import Any

from app.application.interfaces import CustomizationRepository
from app.application.validation import validate_create, validate_update
from app.domain.entities import Customization
from app.domain.exceptions import (
    EntityNotFoundError,
    InconsistentStateError,
    ValidationFailedError,
)
from app.infrastructure.logging.operation_logger import OperationLogger, summarize_payload

_ENTITY = "Customization"

log = OperationLogger(__name__)


def _require_id(customization_id: Any) -> str:
    if not customization_id or not isinstance(customization_id, str):
        raise ValidationFailedError(["Customization ID is required and must be a string"])
    return customization_id


class CustomizationService:
    """Orchestrates customization business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: CustomizationRepository):
        self._repository = repository

    async def create_customization(self, payload: Any) -> Customization:
        with log.operation("create_customization", body=summarize_payload(payload)):
            result = validate_create(payload)
            if not result.is_valid:
                raise ValidationFailedError(result.errors)

            customization = await self._repository.create(result.command)

        log.success(
            "create_customization",
            f"Created customization with ID: {customization.id}",
            id=customization.id,
            name=customization.name,
        )
        return customization

    async def list_customizations(self) -> list[Customization]:
        with log.operation("list_customizations"):
            customizations = await self._repository.get_all()

        log.success("list_customizations", f"Retrieved {len(customizations)} customizations")
        return customizations

    async def get_customization(self, customization_id: Any) -> Customization:
        with log.operation("get_customization", id=customization_id):
            customization_id = _require_id(customization_id)
            customization = await self._repository.get_by_id(customization_id)
            if customization is None:
                raise EntityNotFoundError(_ENTITY, customization_id)

        log.success(
            "get_customization",
            f"Retrieved customization: {customization.name}",
            id=customization_id,
        )
        return customization

    async def update_customization(self, customization_id: Any, payload: Any) -> Customization:
        with log.operation(
            "update_customization", id=customization_id, body=summarize_payload(payload)
        ):
            customization_id = _require_id(customization_id)
            if not await self._repository.exists(customization_id):
                raise EntityNotFoundError(_ENTITY, customization_id)

            result = validate_update(payload)
            if not result.is_valid:
                raise ValidationFailedError(result.errors)

            updated = await self._repository.update(customization_id, result.command)
            if updated is None:
                # Existed a moment ago: deleted concurrently
                raise InconsistentStateError("Update failed", "Failed to update customization")

        log.success(
            "update_customization",
            f"Updated customization: {updated.name}",
            id=customization_id,
        )
        return updated

    async def delete_customization(self, customization_id: Any) -> None:
        with log.operation("delete_customization", id=customization_id):
            customization_id = _require_id(customization_id)
            if not await self._repository.exists(customization_id):
                raise EntityNotFoundError(_ENTITY, customization_id)

            if not await self._repository.delete(customization_id):
                raise InconsistentStateError("Delete failed", "Failed to delete customization")

        log.success(
            "delete_customization",
            f"Deleted customization with ID: {customization_id}",
            id=customization_id,
        )

    async def count_customizations(self) -> int:
        return await self._repository.count()

    async def clear_customizations(self) -> None:
        with log.operation("clear_customizations"):
            await self._repository.clear()
        log.success("clear_customizations", "Removed all customizations")
