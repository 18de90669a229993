"""SQLAlchemy ORM models for customizations and their chess pieces."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.entities import PieceColor, PieceType
from app.infrastructure.database.base import Base


def _in_clause(column: str, values: type) -> str:
    allowed = ", ".join(f"'{member.value}'" for member in values)
    return f"{column} IN ({allowed})"


class CustomizationModel(Base):
    """ORM model — maps to the 'customizations' table."""

    __tablename__ = "customizations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    board_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    # Refreshed by every UPDATE of the row, whichever columns it touches
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_customizations_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<CustomizationModel(id={self.id}, name='{self.name}')>"


class ChessPieceModel(Base):
    """ORM model — maps to the 'chess_pieces' table.

    The serial ``id`` records insertion order, which is the piece order.
    """

    __tablename__ = "chess_pieces"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    customization_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("customizations.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    color: Mapped[str] = mapped_column(String(5), nullable=False)
    image_data: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint(_in_clause("type", PieceType), name="ck_chess_pieces_type"),
        CheckConstraint(_in_clause("color", PieceColor), name="ck_chess_pieces_color"),
        Index("idx_chess_pieces_customization_id", "customization_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ChessPieceModel(id={self.id}, customization_id={self.customization_id}, "
            f"type='{self.type}', color='{self.color}')>"
        )
