"""MoveRecord — the immutable unit of game history."""

from __future__ import annotations

from dataclasses import dataclass

from omegachess.core.abilities import KingSummonState
from omegachess.core.board import Board
from omegachess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.piece import Piece
from omegachess.core.position import Position
from omegachess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One committed move and the position it produced.

    A summon-only record (the king summons where it already stands) has
    ``from_sq == to_sq`` and ``flag == SUMMON``. *position* is owned by the
    record and must not be mutated; consumers work on ``position.copy()``.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    mover: Color
    position: Position
    flag: MoveFlag = MoveFlag.STEP
    captured: Piece | None = None
    promotion: PieceType | None = None
    summon: SummonPlacement | None = None

    @classmethod
    def from_move(
        cls,
        before: Position,
        move: Move,
        *,
        promotion: PieceType | None = None,
        summon: SummonPlacement | None = None,
    ) -> MoveRecord:
        """Play *move* on a copy of *before* and record the result."""
        mover = before.side_to_move
        piece = before.board[move.from_sq]
        to_sq = move.from_sq if move.is_summon else move.to_sq
        if piece is None:
            raise ValueError(f"No piece to move on {move.from_sq}")

        after = before.copy()
        captured = after.make_move(move, promotion=promotion, summon=summon)
        return cls(
            from_sq=move.from_sq,
            to_sq=to_sq,
            piece=piece,
            mover=mover,
            position=after,
            flag=move.flag,
            captured=captured,
            promotion=promotion if move.flag == MoveFlag.PROMOTION else None,
            summon=summon,
        )

    # ── Convenience ──────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def castling(self) -> CastlingRights:
        return self.position.castling

    @property
    def en_passant(self) -> Square | None:
        return self.position.en_passant

    @property
    def king_states(self) -> tuple[KingSummonState, KingSummonState]:
        return self.position.king_states

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_summon_only(self) -> bool:
        return self.flag == MoveFlag.SUMMON

    def same_move(self, other: MoveRecord) -> bool:
        """Do both records describe the same action by the same side?"""
        return (
            self.from_sq == other.from_sq
            and self.to_sq == other.to_sq
            and self.flag == other.flag
            and self.mover == other.mover
            and self.promotion == other.promotion
            and self.summon == other.summon
        )

    def __str__(self) -> str:
        """UCI-like text; a summon appends ``@<square>`` (``e8@d8``, ``e7e8@d8``)."""
        if self.is_summon_only:
            text = square_name(self.from_sq)
        else:
            text = str(Move(self.from_sq, self.to_sq, self.flag, self.promotion))
        if self.summon is not None:
            text += f"@{square_name(self.summon.square)}"
        return text
