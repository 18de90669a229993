"""Payload validation for customization create/update requests.

Invariants:
    - Pure functions: no IO, no exceptions for malformed input
    - Every violation is collected; nothing short-circuits after the first error
    - A typed command is only built once the payload has passed every rule,
      so unchecked client data never reaches the repository
"""

import base64
import binascii
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from app.application.schemas import CustomizationCreate, CustomizationUpdate
from app.domain.entities import PieceColor, PieceType

MAX_IMAGE_SIZE_BYTES = 100 * 1024

PIECE_TYPES: tuple[str, ...] = tuple(t.value for t in PieceType)
PIECE_COLORS: tuple[str, ...] = tuple(c.value for c in PieceColor)

_DATA_URI_PREFIX = re.compile(r"^data:[^;]+;base64,")
_BASE64_ALPHABET = re.compile(r"[A-Za-z0-9+/]*={0,2}")

_UPDATABLE_FIELDS = ("name", "description", "boardImage", "pieces")


@dataclass
class ValidationResult:
    """Outcome of validating a payload; ``command`` is set only when valid."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    command: BaseModel | None = None


def _strip_data_uri(value: str) -> str:
    return _DATA_URI_PREFIX.sub("", value, count=1)


def is_valid_base64(value: Any) -> bool:
    """Check that ``value`` is a non-empty, well-formed base64 string.

    An optional ``data:<mediatype>;base64,`` prefix is ignored.
    """
    if not value or not isinstance(value, str):
        return False

    data = _strip_data_uri(value)
    if not _BASE64_ALPHABET.fullmatch(data):
        return False
    if len(data) % 4 != 0:
        return False

    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def decoded_size(value: str) -> int:
    """Number of bytes ``value`` decodes to, computed from its length and padding."""
    data = _strip_data_uri(value)
    padding = len(data) - len(data.rstrip("="))
    return len(data) * 3 // 4 - min(padding, 2)


def is_valid_image_size(value: Any) -> bool:
    """Check that a base64 image decodes to at most 100 KiB."""
    if not value or not isinstance(value, str):
        return False
    return decoded_size(value) <= MAX_IMAGE_SIZE_BYTES


def _validate_image(value: Any, label: str) -> list[str]:
    errors: list[str] = []
    if not is_valid_base64(value):
        errors.append(f"{label} must be valid base64 format")
    if not is_valid_image_size(value):
        errors.append(f"{label} exceeds maximum size limit of 100KB")
    return errors


def _validate_piece(piece: Any, index: int) -> list[str]:
    prefix = f"Piece at index {index}:"

    if not isinstance(piece, dict):
        return [f"{prefix} must be an object"]

    errors: list[str] = []
    if piece.get("type") not in PIECE_TYPES:
        errors.append(f"{prefix} type must be one of: {', '.join(PIECE_TYPES)}")
    if piece.get("color") not in PIECE_COLORS:
        errors.append(f"{prefix} color must be one of: {', '.join(PIECE_COLORS)}")

    image_data = piece.get("imageData")
    if not image_data or not isinstance(image_data, str):
        errors.append(f"{prefix} imageData is required and must be a string")
    else:
        errors.extend(_validate_image(image_data, f"{prefix} imageData"))
    return errors


def _validate_pieces(pieces: Any, *, required: bool) -> list[str]:
    suffix = "" if required else " if provided"
    if not isinstance(pieces, list):
        return [f"Pieces must be an array{suffix}"]
    if not pieces:
        if required:
            return ["At least one chess piece is required"]
        return ["At least one chess piece is required if pieces array is provided"]

    errors: list[str] = []
    for index, piece in enumerate(pieces):
        errors.extend(_validate_piece(piece, index))
    return errors


def _validate_optional_fields(payload: dict) -> list[str]:
    """Rules for ``description`` and ``boardImage`` shared by create and update."""
    errors: list[str] = []
    if "description" in payload and not isinstance(payload["description"], str):
        errors.append("Description must be a string if provided")

    if "boardImage" in payload:
        board_image = payload["boardImage"]
        if not isinstance(board_image, str):
            errors.append("Board image must be a string if provided")
        else:
            errors.extend(_validate_image(board_image, "Board image"))
    return errors


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_create(payload: Any) -> ValidationResult:
    """Validate a create payload; on success ``command`` is a CustomizationCreate."""
    if not isinstance(payload, dict):
        return ValidationResult(is_valid=False, errors=["Request body is required"])

    errors: list[str] = []
    if not _is_non_empty_string(payload.get("name")):
        errors.append("Name is required and must be a non-empty string")
    errors.extend(_validate_pieces(payload.get("pieces"), required=True))
    errors.extend(_validate_optional_fields(payload))

    if errors:
        return ValidationResult(is_valid=False, errors=errors)
    return ValidationResult(is_valid=True, command=CustomizationCreate.model_validate(payload))


def validate_update(payload: Any) -> ValidationResult:
    """Validate an update payload; on success ``command`` is a CustomizationUpdate."""
    if not isinstance(payload, dict):
        return ValidationResult(is_valid=False, errors=["Request body is required"])

    errors: list[str] = []
    if not any(key in payload for key in _UPDATABLE_FIELDS):
        errors.append(
            "At least one field (name, description, boardImage, or pieces) "
            "must be provided for update"
        )

    if "name" in payload and not _is_non_empty_string(payload["name"]):
        errors.append("Name must be a non-empty string if provided")
    errors.extend(_validate_optional_fields(payload))
    if "pieces" in payload:
        errors.extend(_validate_pieces(payload["pieces"], required=False))

    if errors:
        return ValidationResult(is_valid=False, errors=errors)
    return ValidationResult(is_valid=True, command=CustomizationUpdate.model_validate(payload))
