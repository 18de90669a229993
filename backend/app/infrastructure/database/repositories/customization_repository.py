"""Concrete repository for customizations backed by SQLAlchemy.

Invariants:
    - A customization row and its piece rows are written in one transaction
    - Each operation opens its own session and closes it on every exit path
    - Store exceptions are logged and re-raised as StorageError naming the operation
    - Malformed identifiers read as "absent", never as errors
"""

import logging
import re
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from sqlalchemy import Row, delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces import CustomizationRepository
from app.application.schemas import ChessPieceSchema, CustomizationCreate, CustomizationUpdate
from app.domain.entities import ChessPiece, Customization, PieceColor, PieceType
from app.domain.exceptions import StorageError
from app.infrastructure.database.models import ChessPieceModel, CustomizationModel

logger = logging.getLogger(__name__)

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)

# Parent-row columns a partial update may touch; command fields share their names
_UPDATABLE_COLUMNS = ("name", "description", "board_image")


def is_valid_uuid(value: str) -> bool:
    return isinstance(value, str) and bool(_UUID_PATTERN.fullmatch(value))


def _normalize_id(value: str) -> str | None:
    """Stored ids are lowercase; any other UUID spelling maps onto them, non-UUIDs to None."""
    return value.lower() if is_valid_uuid(value) else None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _joined_select():
    """Customizations LEFT JOIN their pieces, one row per piece (or one null-piece row)."""
    return select(
        CustomizationModel.id,
        CustomizationModel.name,
        CustomizationModel.description,
        CustomizationModel.board_image,
        CustomizationModel.created_at,
        CustomizationModel.updated_at,
        ChessPieceModel.type,
        ChessPieceModel.color,
        ChessPieceModel.image_data,
    ).outerjoin(ChessPieceModel, ChessPieceModel.customization_id == CustomizationModel.id)


def _fold_rows(rows: Iterable[Row]) -> list[Customization]:
    """Fold the flat join stream into one Customization per id, keeping first-seen order."""
    customizations: dict[str, Customization] = {}

    for row in rows:
        customization = customizations.get(row.id)
        if customization is None:
            customization = Customization(
                id=row.id,
                name=row.name,
                description=row.description,
                board_image=row.board_image,
                created_at=_as_utc(row.created_at),
                updated_at=_as_utc(row.updated_at),
            )
            customizations[row.id] = customization

        # A customization without pieces yields a single row of NULL piece columns
        if row.type is not None and row.color is not None and row.image_data is not None:
            customization.pieces.append(
                ChessPiece(
                    type=PieceType(row.type),
                    color=PieceColor(row.color),
                    image_data=row.image_data,
                )
            )

    return list(customizations.values())


def _piece_models(
    customization_id: str, pieces: Sequence[ChessPieceSchema]
) -> list[ChessPieceModel]:
    return [
        ChessPieceModel(
            customization_id=customization_id,
            type=piece.type.value,
            color=piece.color.value,
            image_data=piece.image_data,
        )
        for piece in pieces
    ]


def _storage_error(operation: str, description: str, exc: Exception) -> StorageError:
    logger.error("Error %s chess customization: %s", description, exc)
    return StorageError(operation, f"Failed to {operation} chess customization: {exc}")


class SQLAlchemyCustomizationRepository(CustomizationRepository):
    """Implements the CustomizationRepository port using SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, data: CustomizationCreate) -> Customization:
        async with self._session_factory() as session:
            try:
                model = CustomizationModel(
                    name=data.name,
                    description=data.description,
                    board_image=data.board_image,
                )
                session.add(model)
                await session.flush()

                # Added in payload order; the serial id then preserves it
                session.add_all(_piece_models(model.id, data.pieces))
                await session.flush()
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise _storage_error("create", "creating", exc) from exc

        # The rows were just written; echo the caller's pieces instead of re-reading
        return Customization(
            id=model.id,
            name=model.name,
            description=model.description,
            board_image=model.board_image,
            pieces=[
                ChessPiece(type=p.type, color=p.color, image_data=p.image_data)
                for p in data.pieces
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_all(self) -> list[Customization]:
        stmt = _joined_select().order_by(
            CustomizationModel.created_at.desc(), ChessPieceModel.id
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return _fold_rows(result.all())
        except SQLAlchemyError as exc:
            raise _storage_error("get", "getting all", exc) from exc

    async def get_by_id(self, customization_id: str) -> Customization | None:
        customization_id = _normalize_id(customization_id)
        if customization_id is None:
            return None

        stmt = (
            _joined_select()
            .where(CustomizationModel.id == customization_id)
            .order_by(ChessPieceModel.id)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                customizations = _fold_rows(result.all())
        except SQLAlchemyError as exc:
            raise _storage_error("get", "getting", exc) from exc

        return customizations[0] if customizations else None

    async def update(
        self, customization_id: str, data: CustomizationUpdate
    ) -> Customization | None:
        customization_id = _normalize_id(customization_id)
        if customization_id is None:
            return None

        supplied = data.model_fields_set
        async with self._session_factory() as session:
            try:
                found = await session.scalar(
                    select(CustomizationModel.id).where(CustomizationModel.id == customization_id)
                )
                if found is None:
                    await session.rollback()
                    return None

                values = {
                    column: getattr(data, column)
                    for column in _UPDATABLE_COLUMNS
                    if column in supplied
                }
                if values:
                    await session.execute(
                        update(CustomizationModel)
                        .where(CustomizationModel.id == customization_id)
                        .values(values)
                    )

                # A supplied piece list replaces the stored one wholesale
                if "pieces" in supplied and data.pieces is not None:
                    await session.execute(
                        delete(ChessPieceModel).where(
                            ChessPieceModel.customization_id == customization_id
                        )
                    )
                    session.add_all(_piece_models(customization_id, data.pieces))
                    await session.flush()

                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise _storage_error("update", "updating", exc) from exc

        return await self.get_by_id(customization_id)

    async def delete(self, customization_id: str) -> bool:
        customization_id = _normalize_id(customization_id)
        if customization_id is None:
            return False

        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    delete(CustomizationModel).where(CustomizationModel.id == customization_id)
                )
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise _storage_error("delete", "deleting", exc) from exc

        return bool(result.rowcount)

    async def exists(self, customization_id: str) -> bool:
        customization_id = _normalize_id(customization_id)
        if customization_id is None:
            return False

        try:
            async with self._session_factory() as session:
                found = await session.scalar(
                    select(CustomizationModel.id).where(CustomizationModel.id == customization_id)
                )
        except SQLAlchemyError as exc:
            raise _storage_error("check", "checking existence of", exc) from exc
        return found is not None

    async def count(self) -> int:
        try:
            async with self._session_factory() as session:
                total = await session.scalar(
                    select(func.count()).select_from(CustomizationModel)
                )
        except SQLAlchemyError as exc:
            raise _storage_error("count", "counting", exc) from exc
        return int(total or 0)

    async def clear(self) -> None:
        async with self._session_factory() as session:
            try:
                await session.execute(delete(CustomizationModel))
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise _storage_error("clear", "clearing", exc) from exc
