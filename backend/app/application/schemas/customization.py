"""Pydantic DTOs (Data Transfer Objects) for the Customization feature.

Field names are snake_case in Python and camelCase on the wire
(``boardImage``, ``imageData``, ``createdAt``...).

Commands accept the camelCase keys only: a snake_case ``board_image`` in a
request body is an unknown key, never a second way past the validator.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities import PieceColor, PieceType

_COMMAND_CONFIG = ConfigDict(alias_generator=to_camel)

_RESPONSE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class ChessPieceSchema(BaseModel):
    """A single piece as accepted from the client."""

    model_config = _COMMAND_CONFIG

    type: PieceType = Field(..., examples=["pawn"])
    color: PieceColor = Field(..., examples=["white"])
    image_data: str = Field(..., examples=["PHN2Zz48L3N2Zz4="])


class ChessPieceResponse(BaseModel):
    """A single piece as returned to the client."""

    model_config = _RESPONSE_CONFIG

    type: PieceType
    color: PieceColor
    image_data: str


class CustomizationCreate(BaseModel):
    """Command for creating a customization — only built from an already validated payload."""

    model_config = _COMMAND_CONFIG

    name: str = Field(..., examples=["Classic Wooden Set"])
    description: str | None = None
    board_image: str | None = None
    pieces: list[ChessPieceSchema]


class CustomizationUpdate(BaseModel):
    """Command for updating a customization — all fields optional.

    ``model_fields_set`` tells which fields the client actually supplied;
    only those are written.
    """

    model_config = _COMMAND_CONFIG

    name: str | None = None
    description: str | None = None
    board_image: str | None = None
    pieces: list[ChessPieceSchema] | None = None


class CustomizationResponse(BaseModel):
    """Schema returned to the client."""

    model_config = _RESPONSE_CONFIG

    id: str
    name: str
    description: str | None
    board_image: str | None
    pieces: list[ChessPieceResponse]
    created_at: datetime
    updated_at: datetime
