"""Unit tests for SQLAlchemyCustomizationRepository against in-memory SQLite."""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from app.application.schemas import CustomizationCreate, CustomizationUpdate
from app.config import get_settings
from app.domain.entities import ChessPiece, PieceColor, PieceType
from app.domain.exceptions import StorageError
from app.infrastructure.database import ChessPieceModel, build_engine, build_session_factory
from app.infrastructure.database.repositories import SQLAlchemyCustomizationRepository
from app.infrastructure.database.repositories.customization_repository import is_valid_uuid


def _create_command(make_payload, **overrides) -> CustomizationCreate:
    return CustomizationCreate.model_validate(make_payload(**overrides))


def _pieces(valid_image: str, *specs: tuple[str, str]) -> list[dict]:
    return [{"type": t, "color": c, "imageData": valid_image} for t, c in specs]


async def _piece_row_count(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(ChessPieceModel))


@pytest.mark.asyncio
async def test_create_returns_full_customization(repository, make_payload, valid_image):
    created = await repository.create(_create_command(make_payload))

    assert is_valid_uuid(created.id)
    assert created.name == "Test Chess Set"
    assert created.description == "A test chess set"
    assert created.board_image == valid_image
    assert created.pieces == [
        ChessPiece(PieceType.PAWN, PieceColor.WHITE, valid_image),
        ChessPiece(PieceType.KING, PieceColor.BLACK, valid_image),
    ]
    assert created.created_at is not None
    assert created.updated_at is not None


@pytest.mark.asyncio
async def test_create_then_get_round_trips(repository, make_payload, valid_image):
    created = await repository.create(_create_command(make_payload))

    fetched = await repository.get_by_id(created.id)

    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.name == created.name
    assert fetched.description == created.description
    assert fetched.board_image == created.board_image
    assert fetched.pieces == created.pieces


@pytest.mark.asyncio
async def test_create_without_optional_fields(repository, valid_image):
    command = CustomizationCreate.model_validate(
        {"name": "Bare", "pieces": _pieces(valid_image, ("queen", "white"))}
    )

    created = await repository.create(command)
    fetched = await repository.get_by_id(created.id)

    assert fetched.description is None
    assert fetched.board_image is None
    assert [p.type for p in fetched.pieces] == [PieceType.QUEEN]


@pytest.mark.asyncio
async def test_get_all_is_newest_first_with_pieces_in_order(repository, make_payload, valid_image):
    first = await repository.create(_create_command(make_payload, name="First"))
    second = await repository.create(
        _create_command(
            make_payload,
            name="Second",
            pieces=_pieces(valid_image, ("rook", "white"), ("knight", "black"), ("bishop", "white")),
        )
    )

    customizations = await repository.get_all()

    assert [c.id for c in customizations] == [second.id, first.id]
    assert [p.type for p in customizations[0].pieces] == [
        PieceType.ROOK,
        PieceType.KNIGHT,
        PieceType.BISHOP,
    ]
    assert len(customizations[1].pieces) == 2


@pytest.mark.asyncio
async def test_get_all_on_empty_store(repository):
    assert await repository.get_all() == []


@pytest.mark.asyncio
async def test_customization_without_piece_rows_has_empty_pieces(
    repository, session_factory, make_payload
):
    created = await repository.create(_create_command(make_payload))
    async with session_factory() as session:
        await session.execute(
            ChessPieceModel.__table__.delete().where(ChessPieceModel.customization_id == created.id)
        )
        await session.commit()

    fetched = await repository.get_by_id(created.id)

    assert fetched is not None
    assert fetched.pieces == []


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["not-a-uuid", "", "12345", "g" * 36])
async def test_malformed_ids_read_as_absent(repository, bad_id):
    assert await repository.get_by_id(bad_id) is None
    assert await repository.exists(bad_id) is False
    assert await repository.delete(bad_id) is False
    assert await repository.update(bad_id, CustomizationUpdate(name="x")) is None


@pytest.mark.asyncio
async def test_update_only_touches_supplied_fields(repository, make_payload, valid_image):
    created = await repository.create(_create_command(make_payload))

    updated = await repository.update(created.id, CustomizationUpdate.model_validate({"name": "Renamed"}))

    assert updated.name == "Renamed"
    assert updated.description == "A test chess set"
    assert updated.board_image == valid_image
    assert updated.pieces == created.pieces


@pytest.mark.asyncio
async def test_update_refreshes_updated_at(repository, make_payload):
    created = await repository.create(_create_command(make_payload))
    before = await repository.get_by_id(created.id)

    updated = await repository.update(created.id, CustomizationUpdate.model_validate({"description": "new"}))

    assert updated.description == "new"
    assert updated.updated_at > before.updated_at
    assert updated.created_at == before.created_at


@pytest.mark.asyncio
async def test_update_replaces_pieces_wholesale(repository, session_factory, make_payload, valid_image):
    created = await repository.create(_create_command(make_payload))
    replacement = _pieces(valid_image, ("queen", "black"), ("pawn", "black"), ("rook", "white"))

    updated = await repository.update(
        created.id, CustomizationUpdate.model_validate({"pieces": replacement})
    )

    assert [(p.type.value, p.color.value) for p in updated.pieces] == [
        ("queen", "black"),
        ("pawn", "black"),
        ("rook", "white"),
    ]
    assert updated.name == created.name
    assert await _piece_row_count(session_factory) == 3


@pytest.mark.asyncio
async def test_update_missing_customization_returns_none(repository):
    assert await repository.update(str(uuid4()), CustomizationUpdate(name="x")) is None


@pytest.mark.asyncio
async def test_delete_cascades_to_pieces(repository, session_factory, make_payload):
    created = await repository.create(_create_command(make_payload))
    assert await _piece_row_count(session_factory) == 2

    assert await repository.delete(created.id) is True

    assert await repository.get_by_id(created.id) is None
    assert await repository.exists(created.id) is False
    assert await _piece_row_count(session_factory) == 0


@pytest.mark.asyncio
async def test_delete_never_created_returns_false(repository):
    assert await repository.delete(str(uuid4())) is False


@pytest.mark.asyncio
async def test_exists(repository, make_payload):
    created = await repository.create(_create_command(make_payload))

    assert await repository.exists(created.id) is True
    assert await repository.exists(str(uuid4())) is False


@pytest.mark.asyncio
async def test_count_ignores_piece_rows(repository, make_payload, valid_image):
    assert await repository.count() == 0

    await repository.create(_create_command(make_payload))
    await repository.create(
        _create_command(make_payload, pieces=_pieces(valid_image, *[("pawn", "white")] * 8))
    )
    await repository.create(_create_command(make_payload))

    assert await repository.count() == 3


@pytest.mark.asyncio
async def test_clear_removes_everything(repository, session_factory, make_payload):
    await repository.create(_create_command(make_payload))
    await repository.create(_create_command(make_payload))

    await repository.clear()

    assert await repository.count() == 0
    assert await _piece_row_count(session_factory) == 0


@pytest.mark.asyncio
async def test_store_failures_are_wrapped_with_operation_name(make_payload):
    # An engine whose schema was never created fails every statement
    engine = build_engine(get_settings(), "sqlite+aiosqlite:///:memory:")
    repository = SQLAlchemyCustomizationRepository(build_session_factory(engine))
    try:
        with pytest.raises(StorageError) as create_exc:
            await repository.create(_create_command(make_payload))
        with pytest.raises(StorageError) as list_exc:
            await repository.get_all()
        with pytest.raises(StorageError) as count_exc:
            await repository.count()
    finally:
        await engine.dispose()

    assert create_exc.value.operation == "create"
    assert create_exc.value.message.startswith("Failed to create chess customization")
    assert list_exc.value.operation == "get"
    assert count_exc.value.operation == "count"


@pytest.mark.asyncio
async def test_uppercase_id_matches_stored_customization(repository, make_payload):
    created = await repository.create(_create_command(make_payload))
    upper_id = created.id.upper()

    assert await repository.exists(upper_id) is True
    assert (await repository.get_by_id(upper_id)).id == created.id

    updated = await repository.update(upper_id, CustomizationUpdate.model_validate({"name": "Loud"}))
    assert updated.id == created.id
    assert updated.name == "Loud"

    assert await repository.delete(upper_id) is True
    assert await repository.exists(created.id) is False


@pytest.mark.asyncio
async def test_read_timestamps_are_utc_and_match_create(repository, make_payload):
    created = await repository.create(_create_command(make_payload))

    fetched = await repository.get_by_id(created.id)

    assert fetched.created_at.tzinfo is not None
    assert fetched.created_at.utcoffset() == timedelta(0)
    assert fetched.created_at == created.created_at
    assert fetched.updated_at == created.updated_at
