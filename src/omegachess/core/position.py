"""Position — complete game state (board + metadata) for one point of a game."""

from __future__ import annotations

from omegachess.core.abilities import FRESH_SUMMON_STATE, KingSummonState, revoke_rights
from omegachess.core.board import Board
from omegachess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from omegachess.core.keys import position_key
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.piece import Piece
from omegachess.core.types import Square, file_of, home_rank, make_square, rank_of

# king destination file -> (rook from file, rook to file)
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


def castle_rook_squares(flag: MoveFlag, rank: int) -> tuple[Square, Square]:
    """Rook origin and destination for a castle on *rank*."""
    rook_from, rook_to = _CASTLE_ROOK_FILES[flag]
    return make_square(rook_from, rank), make_square(rook_to, rank)


def en_passant_capture_square(move: Move) -> Square:
    """Square of the pawn removed by an en-passant capture."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


class Position:
    """Full game position: board, side to move, castling, en passant, king
    summon states, clocks and the repetition counts of the line leading here.

    Positions are snapshots. :meth:`make_move` mutates in place, so callers
    that hold a position attached to history always work on a :meth:`copy`.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "king_states",
        "halfmove_clock",
        "fullmove_number",
        "_key",
        "_key_counts",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        king_states: tuple[KingSummonState, KingSummonState] | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self.king_states: tuple[KingSummonState, KingSummonState] = (
            king_states
            if king_states is not None
            else (FRESH_SUMMON_STATE, FRESH_SUMMON_STATE)
        )
        self._key = self._compute_key()
        self._key_counts: dict[str, int] = {self._key: 1}

    # ── Core move operation ──────────────────────────────────────────────

    def make_move(
        self,
        move: Move,
        *,
        promotion: PieceType | None = None,
        summon: SummonPlacement | None = None,
    ) -> Piece | None:
        """Apply *move* for the side to move and pass the turn.

        *promotion* completes a ``PROMOTION`` move; *summon* places a summoned
        piece after the move (or, for a ``SUMMON`` move, instead of one).
        Returns the captured piece, if any.
        """
        mover = self.side_to_move
        board = self.board
        captured: Piece | None = None
        capture_sq = move.to_sq
        moved: Piece | None = None

        if move.flag != MoveFlag.SUMMON:
            moved = board[move.from_sq]
            if moved is None:
                raise ValueError(f"No piece on {move.from_sq}")

            if move.flag == MoveFlag.EN_PASSANT:
                capture_sq = en_passant_capture_square(move)
                captured = board[capture_sq]
                board[capture_sq] = None
                board.move_piece(move.from_sq, move.to_sq)
            else:
                captured = board.move_piece(move.from_sq, move.to_sq)

            if move.flag == MoveFlag.PROMOTION:
                chosen = promotion if promotion is not None else move.promotion
                if chosen is None:
                    raise ValueError(f"Promotion piece missing for {move}")
                board[move.to_sq] = Piece(mover, chosen)
            elif move.flag.is_castle:
                rook_from, rook_to = castle_rook_squares(move.flag, rank_of(move.from_sq))
                board.move_piece(rook_from, rook_to)
        elif summon is None:
            raise ValueError(f"Summon placement missing for {move}")

        states = list(self.king_states)
        if summon is not None:
            board[summon.square] = Piece(mover, summon.piece_type)
            states[mover] = states[mover].summoned()
        king_sq = board.king_square(mover)
        if king_sq is not None and rank_of(king_sq) == home_rank(mover):
            states[mover] = states[mover].reached_home()
        self.king_states = (states[0], states[1])

        # En passant target for the opponent
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )
        else:
            self.en_passant = None

        if moved is not None:
            self.castling = revoke_rights(
                self.castling,
                king_color=mover if moved.piece_type == PieceType.KING else None,
                touched=(move.from_sq, move.to_sq, capture_sq),
            )

        # Clocks
        pawn_moved = moved is not None and moved.piece_type == PieceType.PAWN
        if pawn_moved or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if mover == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = mover.opposite
        self._key = self._compute_key()
        self._key_counts[self._key] = self._key_counts.get(self._key, 0) + 1
        return captured

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy, repetition counts included."""
        pos = Position.__new__(Position)
        pos.board = self.board.copy()
        pos.side_to_move = self.side_to_move
        pos.castling = self.castling
        pos.en_passant = self.en_passant
        pos.king_states = self.king_states
        pos.halfmove_clock = self.halfmove_clock
        pos.fullmove_number = self.fullmove_number
        pos._key = self._key
        pos._key_counts = self._key_counts.copy()
        return pos

    def king_state(self, color: Color) -> KingSummonState:
        return self.king_states[int(color)]

    @property
    def key(self) -> str:
        """Canonical key of this position (see :func:`position_key`)."""
        return self._key

    def repetition_count(self) -> int:
        """How many times the current key occurred along the line to here."""
        return self._key_counts.get(self._key, 0)

    def continue_from(self, previous: Position) -> None:
        """Replace the repetition counts with *previous*'s plus this position.

        Used when a snapshot produced elsewhere is attached after *previous*.
        """
        counts = previous._key_counts.copy()
        counts[self._key] = counts.get(self._key, 0) + 1
        self._key_counts = counts

    def same_state(self, other: Position) -> bool:
        """Equality of everything except clocks and repetition counts."""
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.king_states == other.king_states
        )

    def _compute_key(self) -> str:
        return position_key(self.board, self.side_to_move, self.castling, self.en_passant)

    def __repr__(self) -> str:
        return f"Position({self._key!r})"
