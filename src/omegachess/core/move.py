"""Move value objects (tagged by :class:`MoveFlag`)."""

from __future__ import annotations

from dataclasses import dataclass

from omegachess.core.enums import MoveFlag, PieceType
from omegachess.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object for one pseudo-legal or legal move.

    ``PROMOTION`` moves are generated with ``promotion=None``; the piece type
    is chosen later and carried by the committed record.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.STEP
    promotion: PieceType | None = None

    def __str__(self) -> str:
        if self.flag == MoveFlag.SUMMON:
            return f"{square_name(self.from_sq)}@{square_name(self.to_sq)}"
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def is_summon(self) -> bool:
        return self.flag == MoveFlag.SUMMON

    @property
    def is_castle(self) -> bool:
        return self.flag.is_castle


@dataclass(frozen=True, slots=True)
class SummonPlacement:
    """A piece type a king summoned and the square it was placed on."""

    piece_type: PieceType
    square: Square
