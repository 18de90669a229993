from .customization import ChessPieceModel, CustomizationModel

__all__ = [
    "ChessPieceModel",
    "CustomizationModel",
]
