"""Domain entities — a chess customization and the pieces it owns."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class PieceType(str, Enum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


class PieceColor(str, Enum):
    WHITE = "white"
    BLACK = "black"


@dataclass
class ChessPiece:
    """A single piece image. Has no identity outside its customization."""

    type: PieceType
    color: PieceColor
    image_data: str


@dataclass
class Customization:
    """Core domain entity — a named chess set with an ordered list of pieces.

    ``board_image`` and every ``ChessPiece.image_data`` hold base64 content.
    """

    name: str
    pieces: list[ChessPiece] = field(default_factory=list)
    id: str | None = None
    description: str | None = None
    board_image: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
