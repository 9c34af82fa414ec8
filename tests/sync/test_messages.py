"""Tests for sync messages and the record codec."""

from __future__ import annotations

import json

import pytest

from omegachess.core.enums import Color, MoveFlag, PieceType
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from omegachess.core.types import D7, D8, E2, E4, E8
from omegachess.game.record import MoveRecord
from omegachess.sync.messages import (
    MessageType,
    SyncMessage,
    record_from_dict,
    record_to_dict,
)


def _summon_record() -> MoveRecord:
    before = position_from_fen("8/3K4/8/8/8/8/8/k7 w - - 0 1")
    return MoveRecord.from_move(
        before, Move(D7, E8), summon=SummonPlacement(PieceType.ROOK, D8)
    )


class TestRecordCodec:
    def test_wire_shape(self) -> None:
        record = MoveRecord.from_move(
            position_from_fen(STARTING_FEN), Move(E2, E4, MoveFlag.DOUBLE_PAWN)
        )
        data = record_to_dict(record)
        assert data["from"] == "e2"
        assert data["to"] == "e4"
        assert data["piece"] == "P"
        assert data["mover"] == "w"
        assert data["flag"] == "DOUBLE_PAWN"
        assert "summon" not in data

    def test_summon_record_survives(self) -> None:
        record = _summon_record()
        decoded = record_from_dict(json.loads(json.dumps(record_to_dict(record))))
        assert decoded.same_move(record)
        assert decoded.summon == SummonPlacement(PieceType.ROOK, D8)
        assert decoded.king_states == record.king_states
        assert position_to_fen(decoded.position) == position_to_fen(record.position)
        assert decoded.mover == Color.WHITE

    @pytest.mark.parametrize(
        "patch",
        [
            {"mover": "x"},
            {"flag": "TELEPORT"},
            {"from": "z9"},
            {"piece": "?"},
            {"position": {"fen": "not a fen"}},
            {"position": {"fen": STARTING_FEN, "king_states": [[True]]}},
            {"summon": {"piece": "KING?", "square": "d8"}},
        ],
    )
    def test_bad_fields_raise_value_error(self, patch: dict[str, object]) -> None:
        data = record_to_dict(_summon_record())
        data.update(patch)
        with pytest.raises(ValueError):
            record_from_dict(data)

    def test_missing_field_raises_value_error(self) -> None:
        data = record_to_dict(_summon_record())
        del data["to"]
        with pytest.raises(ValueError):
            record_from_dict(data)


class TestSyncMessage:
    def test_move_json(self) -> None:
        message = SyncMessage.move(_summon_record(), "abc")
        raw = json.loads(message.to_json())
        assert raw["type"] == "move"
        assert raw["senderId"] == "abc"
        decoded = SyncMessage.from_json(message.to_json())
        assert decoded.type == MessageType.MOVE
        assert decoded.sender_id == "abc"
        assert str(decoded.record()) == "d7e8@d8"

    def test_reset_carries_fen(self) -> None:
        message = SyncMessage.from_json(SyncMessage.reset("abc", STARTING_FEN).to_json())
        assert message.type == MessageType.RESET
        assert message.payload == {"fen": STARTING_FEN}
        assert SyncMessage.reset("abc").payload == {}

    def test_undo_has_no_record(self) -> None:
        with pytest.raises(ValueError):
            SyncMessage.undo("abc").record()

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            json.dumps({"type": "castle", "senderId": "abc"}),
            json.dumps({"type": "undo"}),
            json.dumps({"type": "undo", "senderId": 7}),
            json.dumps({"type": "move", "senderId": "abc", "payload": [1, 2]}),
        ],
    )
    def test_malformed_json(self, text: str) -> None:
        with pytest.raises(ValueError):
            SyncMessage.from_json(text)
