"""Tests for MoveRecord."""

from dataclasses import FrozenInstanceError

import pytest

from omegachess.core.enums import Color, MoveFlag, PieceType
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.notation import STARTING_FEN, position_from_fen
from omegachess.core.piece import Piece
from omegachess.core.types import D7, D8, E2, E3, E4, E7, E8, F8, parse_square
from omegachess.game.record import MoveRecord


class TestFromMove:
    def test_snapshot_of_result(self) -> None:
        start = position_from_fen(STARTING_FEN)
        record = MoveRecord.from_move(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert record.piece == Piece(Color.WHITE, PieceType.PAWN)
        assert record.mover == Color.WHITE
        assert record.en_passant == E3
        assert record.board[E4] == record.piece
        # The source position is left alone.
        assert start.board[E2] is not None

    def test_capture(self) -> None:
        pos = position_from_fen("r3k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        record = MoveRecord.from_move(pos, Move(parse_square("a1"), parse_square("a8")))
        assert record.is_capture
        assert record.captured == Piece(Color.BLACK, PieceType.ROOK)

    def test_promotion(self) -> None:
        pos = position_from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
        record = MoveRecord.from_move(
            pos, Move(E7, E8, MoveFlag.PROMOTION), promotion=PieceType.QUEEN
        )
        assert record.promotion == PieceType.QUEEN
        assert str(record) == "e7e8q"

    def test_summon_only(self) -> None:
        pos = position_from_fen("4K3/8/8/8/8/8/8/k7 w - - 0 1")
        placement = SummonPlacement(PieceType.BISHOP, F8)
        record = MoveRecord.from_move(pos, Move(E8, F8, MoveFlag.SUMMON), summon=placement)
        assert record.from_sq == record.to_sq == E8
        assert record.is_summon_only
        assert record.summon == placement
        assert str(record) == "e8@f8"

    def test_king_move_with_summon_text(self) -> None:
        pos = position_from_fen("8/3K4/8/8/8/8/8/k7 w - - 0 1")
        record = MoveRecord.from_move(
            pos, Move(D7, E8), summon=SummonPlacement(PieceType.KNIGHT, D8)
        )
        assert str(record) == "d7e8@d8"

    def test_empty_origin_raises(self) -> None:
        with pytest.raises(ValueError):
            MoveRecord.from_move(position_from_fen(STARTING_FEN), Move(E4, E3))


class TestSameMove:
    def test_equal_moves(self) -> None:
        start = position_from_fen(STARTING_FEN)
        a = MoveRecord.from_move(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        b = MoveRecord.from_move(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert a.same_move(b)

    def test_different_moves(self) -> None:
        start = position_from_fen(STARTING_FEN)
        a = MoveRecord.from_move(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        b = MoveRecord.from_move(start, Move(E2, E3))
        assert not a.same_move(b)

    def test_immutable(self) -> None:
        record = MoveRecord.from_move(
            position_from_fen(STARTING_FEN), Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        )
        with pytest.raises(FrozenInstanceError):
            record.to_sq = E3  # type: ignore[misc]
