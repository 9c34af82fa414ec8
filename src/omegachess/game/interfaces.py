"""Value types shared by the game layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from omegachess.core.move import Move
    from omegachess.core.position import Position
    from omegachess.core.types import Square
    from omegachess.game.record import MoveRecord


# ── View FSM states ─────────────────────────────────────────────────────────


class ViewMode(IntEnum):
    """What the visible board reflects."""

    PLAYING = auto()
    REVIEWING = auto()
    ANALYZING = auto()


# ── Pending choices ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move waiting for the promotion piece."""

    move: Move


@dataclass(frozen=True, slots=True)
class PendingSummon:
    """A king move onto the enemy home rank waiting for a summon choice.

    *staged* shows the king on its new square with the turn not yet passed.
    """

    move: Move
    targets: tuple[Square, ...]
    staged: Position

    @property
    def king_square(self) -> Square:
        return self.move.to_sq


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of :meth:`GameController.attempt_move`.

    *applied* is True only when a record was committed.
    """

    applied: bool
    record: MoveRecord | None = None
    pending_promotion: PendingPromotion | None = None
    pending_summon: PendingSummon | None = None

    @property
    def is_pending(self) -> bool:
        return self.pending_promotion is not None or self.pending_summon is not None


REJECTED = MoveResult(applied=False)
