"""Per-side ability state: king summon state machine and castling rights."""

from __future__ import annotations

from dataclasses import dataclass

from omegachess.core.enums import CastlingRights, Color
from omegachess.core.types import Square, make_square


@dataclass(frozen=True, slots=True)
class KingSummonState:
    """Three-flag summon state of one king.

    Fresh (F, F, F) → Summoned (T, T, F) on summoning → Ready (F, F, T) once the
    king stands on its own home rank again. Ready is eligible like Fresh.
    """

    has_summoned: bool = False
    needs_return: bool = False
    returned_home: bool = False

    @property
    def can_summon(self) -> bool:
        """Eligibility, ignoring where the king currently stands."""
        return not self.has_summoned and (not self.needs_return or self.returned_home)

    def summoned(self) -> KingSummonState:
        return KingSummonState(has_summoned=True, needs_return=True, returned_home=False)

    def reached_home(self) -> KingSummonState:
        """State after the king is seen on its own home rank."""
        if not self.needs_return:
            return self
        return KingSummonState(has_summoned=False, needs_return=False, returned_home=True)


FRESH_SUMMON_STATE = KingSummonState()


# ── Castling ────────────────────────────────────────────────────────────────

ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


def castling_right(color: Color, kingside: bool) -> CastlingRights:
    if color == Color.WHITE:
        return CastlingRights.WHITE_KINGSIDE if kingside else CastlingRights.WHITE_QUEENSIDE
    return CastlingRights.BLACK_KINGSIDE if kingside else CastlingRights.BLACK_QUEENSIDE


def both_rights(color: Color) -> CastlingRights:
    return CastlingRights.WHITE_BOTH if color == Color.WHITE else CastlingRights.BLACK_BOTH


def revoke_rights(
    rights: CastlingRights,
    *,
    king_color: Color | None,
    touched: tuple[Square, ...],
) -> CastlingRights:
    """Rights left after a move.

    *king_color* is the colour whose king moved (or None); *touched* are the
    squares a move left or landed on. A rook corner that is touched loses its
    right, which covers both rook moves and rook captures. Rights are never
    granted back.
    """
    if king_color is not None:
        rights &= ~both_rights(king_color)
    for sq in touched:
        corner = ROOK_CORNERS.get(sq)
        if corner is not None:
            rights &= ~corner
    return rights
