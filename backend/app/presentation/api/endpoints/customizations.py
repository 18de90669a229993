"""Customization CRUD endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, status

from app.application.schemas import ApiResponse, CustomizationResponse
from app.application.services import CustomizationService
from app.infrastructure.dependencies import get_customization_service, read_json_body

router = APIRouter(prefix="/customizations", tags=["Customizations"])


@router.post(
    "",
    response_model=ApiResponse[CustomizationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_customization(
    payload: Any = Depends(read_json_body),
    service: CustomizationService = Depends(get_customization_service),
) -> ApiResponse[CustomizationResponse]:
    """Create a new customization together with its pieces."""
    customization = await service.create_customization(payload)
    return ApiResponse(
        data=CustomizationResponse.model_validate(customization),
        message="Customization created successfully",
    )


@router.get("", response_model=ApiResponse[list[CustomizationResponse]])
async def list_customizations(
    service: CustomizationService = Depends(get_customization_service),
) -> ApiResponse[list[CustomizationResponse]]:
    """Retrieve every customization, newest first."""
    customizations = await service.list_customizations()
    return ApiResponse(
        data=[CustomizationResponse.model_validate(c) for c in customizations],
        message=f"Retrieved {len(customizations)} customizations",
    )


@router.get("/{customization_id}", response_model=ApiResponse[CustomizationResponse])
async def get_customization(
    customization_id: str,
    service: CustomizationService = Depends(get_customization_service),
) -> ApiResponse[CustomizationResponse]:
    """Retrieve a single customization by ID."""
    customization = await service.get_customization(customization_id)
    return ApiResponse(
        data=CustomizationResponse.model_validate(customization),
        message="Customization retrieved successfully",
    )


@router.put("/{customization_id}", response_model=ApiResponse[CustomizationResponse])
async def update_customization(
    customization_id: str,
    payload: Any = Depends(read_json_body),
    service: CustomizationService = Depends(get_customization_service),
) -> ApiResponse[CustomizationResponse]:
    """Update an existing customization; a supplied piece list replaces the old one."""
    customization = await service.update_customization(customization_id, payload)
    return ApiResponse(
        data=CustomizationResponse.model_validate(customization),
        message="Customization updated successfully",
    )


@router.delete("/{customization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customization(
    customization_id: str,
    service: CustomizationService = Depends(get_customization_service),
) -> None:
    """Delete a customization and its pieces."""
    await service.delete_customization(customization_id)
