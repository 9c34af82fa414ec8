"""Sync messages and their JSON codec.

Records travel as plain dicts: squares by name (``"e4"``), pieces as FEN
characters, the resulting position as FEN plus both king summon states.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from omegachess.core.abilities import KingSummonState
from omegachess.core.enums import Color, MoveFlag, PieceType
from omegachess.core.move import SummonPlacement
from omegachess.core.notation import position_from_fen, position_to_fen
from omegachess.core.piece import Piece
from omegachess.core.position import Position
from omegachess.core.types import parse_square, square_name
from omegachess.game.record import MoveRecord


class MessageType(StrEnum):
    MOVE = "move"
    UNDO = "undo"
    RESET = "reset"


# ── Record codec ────────────────────────────────────────────────────────────


def _state_to_list(state: KingSummonState) -> list[bool]:
    return [state.has_summoned, state.needs_return, state.returned_home]


def _state_from_list(raw: Any) -> KingSummonState:
    if not isinstance(raw, list) or len(raw) != 3:
        raise ValueError(f"Invalid king summon state: {raw!r}")
    return KingSummonState(bool(raw[0]), bool(raw[1]), bool(raw[2]))


def position_to_dict(position: Position) -> dict[str, Any]:
    return {
        "fen": position_to_fen(position),
        "king_states": [_state_to_list(s) for s in position.king_states],
    }


def position_from_dict(data: dict[str, Any]) -> Position:
    position = position_from_fen(data["fen"])
    states = data.get("king_states")
    if states is not None:
        if not isinstance(states, list) or len(states) != 2:
            raise ValueError(f"Invalid king summon states: {states!r}")
        position.king_states = (_state_from_list(states[0]), _state_from_list(states[1]))
    return position


def record_to_dict(record: MoveRecord) -> dict[str, Any]:
    data: dict[str, Any] = {
        "from": square_name(record.from_sq),
        "to": square_name(record.to_sq),
        "piece": str(record.piece),
        "mover": "w" if record.mover == Color.WHITE else "b",
        "flag": record.flag.name,
        "position": position_to_dict(record.position),
    }
    if record.captured is not None:
        data["captured"] = str(record.captured)
    if record.promotion is not None:
        data["promotion"] = record.promotion.name
    if record.summon is not None:
        data["summon"] = {
            "piece": record.summon.piece_type.name,
            "square": square_name(record.summon.square),
        }
    return data


def _enum_member(enum_cls: Any, name: Any) -> Any:
    try:
        return enum_cls[name]
    except KeyError:
        raise ValueError(f"Invalid {enum_cls.__name__}: {name!r}") from None


def record_from_dict(data: dict[str, Any]) -> MoveRecord:
    """Inverse of :func:`record_to_dict`. Raises ValueError on bad data."""
    try:
        mover_text = data["mover"]
        if mover_text not in ("w", "b"):
            raise ValueError(f"Invalid mover: {mover_text!r}")
        summon: SummonPlacement | None = None
        if "summon" in data:
            summon = SummonPlacement(
                _enum_member(PieceType, data["summon"]["piece"]),
                parse_square(data["summon"]["square"]),
            )
        return MoveRecord(
            from_sq=parse_square(data["from"]),
            to_sq=parse_square(data["to"]),
            piece=Piece.from_char(data["piece"]),
            mover=Color.WHITE if mover_text == "w" else Color.BLACK,
            position=position_from_dict(data["position"]),
            flag=_enum_member(MoveFlag, data["flag"]),
            captured=Piece.from_char(data["captured"]) if "captured" in data else None,
            promotion=(
                _enum_member(PieceType, data["promotion"]) if "promotion" in data else None
            ),
            summon=summon,
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed move record: {exc}") from exc


# ── Messages ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SyncMessage:
    """One action mirrored between views of the same game."""

    type: MessageType
    sender_id: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def move(cls, record: MoveRecord, sender_id: str) -> SyncMessage:
        return cls(MessageType.MOVE, sender_id, record_to_dict(record))

    @classmethod
    def undo(cls, sender_id: str) -> SyncMessage:
        return cls(MessageType.UNDO, sender_id)

    @classmethod
    def reset(cls, sender_id: str, fen: str | None = None) -> SyncMessage:
        return cls(MessageType.RESET, sender_id, {"fen": fen} if fen else {})

    def record(self) -> MoveRecord:
        """Decode the payload of a MOVE message."""
        if self.type != MessageType.MOVE:
            raise ValueError(f"{self.type} message carries no move record")
        return record_from_dict(self.payload)

    def to_json(self) -> str:
        return json.dumps(
            {
                "type": self.type.value,
                "senderId": self.sender_id,
                "payload": self.payload,
                "timestamp": self.timestamp,
            }
        )

    @classmethod
    def from_json(cls, text: str) -> SyncMessage:
        try:
            raw = json.loads(text)
            msg_type = MessageType(raw["type"])
            sender_id = raw["senderId"]
            payload = raw.get("payload") or {}
            timestamp = float(raw.get("timestamp", 0.0))
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed sync message: {exc}") from exc
        if not isinstance(sender_id, str) or not isinstance(payload, dict):
            raise ValueError(f"Malformed sync message: {text!r}")
        return cls(msg_type, sender_id, payload, timestamp)
