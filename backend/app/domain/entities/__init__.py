from .customization import ChessPiece, Customization, PieceColor, PieceType

__all__ = [
    "ChessPiece",
    "Customization",
    "PieceColor",
    "PieceType",
]
