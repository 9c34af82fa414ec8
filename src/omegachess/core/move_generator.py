"""Pseudo-legal move generation, attack detection and the legality filter.

Layering (strictly one-directional):

1. per-piece pseudo-legal generators (no notion of check),
2. attack detection built only on layer 1, with kings excluded as attackers,
3. the legality filter, which simulates each candidate on a copied board and
   asks layer 2 whether the mover's king is attacked afterwards.

King steps consult layer 2 directly and never the filter.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from omegachess.core.abilities import castling_right
from omegachess.core.board import Board
from omegachess.core.enums import Color, MoveFlag, PieceType
from omegachess.core.geometry import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    ORTHOGONAL_TARGETS,
    ROOK_RAYS,
    SIGHT_LINES,
)
from omegachess.core.move import Move
from omegachess.core.piece import Piece
from omegachess.core.position import castle_rook_squares, en_passant_capture_square
from omegachess.core.types import (
    Square,
    are_adjacent,
    file_of,
    forward,
    home_rank,
    make_square,
    offset_square,
    rank_of,
)

if TYPE_CHECKING:
    from omegachess.core.position import Position

_KING_FILE = 4


# -- Layer 1: per-piece pseudo-legal generators ------------------------------


def pawn_moves(
    board: Board, sq: Square, pawn: Piece, en_passant: Square | None = None
) -> list[Move]:
    """Pawn steps: any empty neighbour, enemy captures on diagonals only,
    a double advance from the starting rank and en passant onto *en_passant*.
    """
    moves: list[Move] = []
    fwd = forward(pawn.color)
    far_rank = home_rank(pawn.color.opposite)

    for to_sq in KING_TARGETS[sq]:
        target = board[to_sq]
        diagonal = file_of(to_sq) != file_of(sq) and rank_of(to_sq) != rank_of(sq)
        if (
            to_sq == en_passant
            and target is None
            and diagonal
            and rank_of(to_sq) - rank_of(sq) == fwd
        ):
            moves.append(Move(sq, to_sq, MoveFlag.EN_PASSANT))
        elif target is None or (diagonal and pawn.is_enemy_of(target)):
            flag = MoveFlag.PROMOTION if rank_of(to_sq) == far_rank else MoveFlag.STEP
            moves.append(Move(sq, to_sq, flag))

    if rank_of(sq) == home_rank(pawn.color) + fwd:
        one_step = offset_square(sq, 0, fwd)
        two_step = offset_square(sq, 0, 2 * fwd)
        if (
            one_step is not None
            and two_step is not None
            and board.is_empty(one_step)
            and board.is_empty(two_step)
        ):
            moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))
    return moves


def rook_moves(board: Board, sq: Square, rook: Piece) -> list[Move]:
    """Orthogonal slides that may land one square past the first blocker."""
    moves: list[Move] = []
    for ray in ROOK_RAYS[sq]:
        blocker_found = False
        for to_sq in ray:
            target = board[to_sq]
            if blocker_found:
                if target is None or rook.is_enemy_of(target):
                    moves.append(Move(sq, to_sq))
                break
            if target is None:
                moves.append(Move(sq, to_sq))
                continue
            if rook.is_enemy_of(target):
                moves.append(Move(sq, to_sq))
            blocker_found = True
    return moves


def bishop_moves(board: Board, sq: Square, bishop: Piece) -> list[Move]:
    """Diagonal slides plus a single step in any direction."""
    moves: list[Move] = []
    for ray in BISHOP_RAYS[sq]:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
                continue
            if bishop.is_enemy_of(target):
                moves.append(Move(sq, to_sq))
            break
    # Diagonal neighbours are already covered by the slides.
    for to_sq in ORTHOGONAL_TARGETS[sq]:
        target = board[to_sq]
        if target is None or bishop.is_enemy_of(target):
            moves.append(Move(sq, to_sq))
    return moves


def knight_moves(board: Board, sq: Square, knight: Piece) -> list[Move]:
    moves: list[Move] = []
    for to_sq in KNIGHT_TARGETS[sq]:
        target = board[to_sq]
        if target is None or knight.is_enemy_of(target):
            moves.append(Move(sq, to_sq))
    return moves


def queen_moves(board: Board, sq: Square, queen: Piece) -> list[Move]:
    """Every square the queen can see along a straight line at any angle."""
    moves: list[Move] = []
    lines = SIGHT_LINES[sq]
    for to_sq in range(64):
        if to_sq == sq:
            continue
        target = board[to_sq]
        if target is not None and not queen.is_enemy_of(target):
            continue
        if all(board.is_empty(between) for between in lines[to_sq]):
            moves.append(Move(sq, to_sq))
    return moves


def piece_moves(
    board: Board, sq: Square, piece: Piece, en_passant: Square | None = None
) -> list[Move]:
    """Pseudo-legal moves of any non-king piece standing on *sq*."""
    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return pawn_moves(board, sq, piece, en_passant)
    if ptype == PieceType.KNIGHT:
        return knight_moves(board, sq, piece)
    if ptype == PieceType.BISHOP:
        return bishop_moves(board, sq, piece)
    if ptype == PieceType.ROOK:
        return rook_moves(board, sq, piece)
    if ptype == PieceType.QUEEN:
        return queen_moves(board, sq, piece)
    return []


# -- Layer 2: attack detection ------------------------------------------------


def _attacking_pieces(board: Board, by_color: Color) -> Iterator[tuple[Square, Piece]]:
    for from_sq, piece in board.occupied():
        if piece.color == by_color and piece.piece_type != PieceType.KING:
            yield from_sq, piece


def _reaches(board: Board, from_sq: Square, piece: Piece, sq: Square) -> bool:
    return any(m.to_sq == sq for m in piece_moves(board, from_sq, piece))


def attackers_of(board: Board, sq: Square, by_color: Color) -> list[Square]:
    """Squares of *by_color* pieces (kings excluded) that could move to *sq*."""
    return [
        from_sq
        for from_sq, piece in _attacking_pieces(board, by_color)
        if _reaches(board, from_sq, piece, sq)
    ]


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    return any(
        _reaches(board, from_sq, piece, sq)
        for from_sq, piece in _attacking_pieces(board, by_color)
    )


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent? False without a king."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


def simulate(board: Board, move: Move) -> Board:
    """Board after *move*, on a copy. Summons leave the board unchanged."""
    result = board.copy()
    if move.is_summon:
        return result
    if move.flag == MoveFlag.EN_PASSANT:
        result[en_passant_capture_square(move)] = None
    result.move_piece(move.from_sq, move.to_sq)
    if move.is_castle:
        rook_from, rook_to = castle_rook_squares(move.flag, rank_of(move.from_sq))
        result.move_piece(rook_from, rook_to)
    return result


# -- Layer 3: position-aware generation and the legality filter ---------------


class MoveGenerator:
    """Generates pseudo-legal and legal moves for a :class:`Position`.

    The position is only read; every simulation runs on a copied board.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty list for an empty square)."""
        piece = self._board[sq]
        if piece is None:
            return []
        return self.filter_legal(self.pseudo_legal_moves_from(sq), piece.color)

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All legal moves of *color* (default: the side to move)."""
        if color is None:
            color = self._pos.side_to_move
        legal: list[Move] = []
        for sq in self._board.pieces(color):
            legal.extend(self.legal_moves_from(sq))
        return legal

    def has_legal_moves(self, color: Color | None = None) -> bool:
        if color is None:
            color = self._pos.side_to_move
        return any(self.legal_moves_from(sq) for sq in self._board.pieces(color))

    def pseudo_legal_moves_from(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None:
            return []
        if piece.piece_type == PieceType.KING:
            return self._gen_king(sq, piece)
        en_passant = (
            self._pos.en_passant if piece.color == self._pos.side_to_move else None
        )
        return piece_moves(self._board, sq, piece, en_passant)

    def filter_legal(self, moves: list[Move], color: Color) -> list[Move]:
        """Keep the moves after which *color*'s king is not attacked.

        Summon markers pass through. They relocate nothing and are only
        generated for a king that is not in check.
        """
        return [
            move
            for move in moves
            if move.is_summon or not is_in_check(simulate(self._board, move), color)
        ]

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        return is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self._board, sq, by_color)

    def checking_pieces(self, color: Color) -> list[Square]:
        """Squares of the pieces giving check to *color*'s king."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return []
        return attackers_of(self._board, king_sq, color.opposite)

    # -- King ---------------------------------------------------------------

    def summon_targets(self, king_sq: Square) -> list[Square]:
        """Empty squares beside the king on its rank where a piece may appear.

        Run on a board where the king already stands on *king_sq*, so the
        square it arrived from is empty and offered when it is beside it.
        """
        targets: list[Square] = []
        for df in (-1, 1):
            to_sq = offset_square(king_sq, df, 0)
            if to_sq is not None and self._board.is_empty(to_sq):
                targets.append(to_sq)
        return targets

    def can_summon(self, king_sq: Square) -> bool:
        """Whether the king on *king_sq* is eligible to summon where it stands."""
        king = self._board[king_sq]
        if king is None or king.piece_type != PieceType.KING:
            return False
        on_enemy_rank = rank_of(king_sq) == home_rank(king.color.opposite)
        return on_enemy_rank and self._pos.king_state(king.color).can_summon

    def _gen_king(self, sq: Square, king: Piece) -> list[Move]:
        board = self._board
        opponent = king.color.opposite
        enemy_king_sq = board.king_square(opponent)
        moves: list[Move] = []

        for to_sq in KING_TARGETS[sq]:
            target = board[to_sq]
            if target is not None and not king.is_enemy_of(target):
                continue
            if enemy_king_sq is not None and are_adjacent(to_sq, enemy_king_sq):
                continue
            stepped = board.copy()
            stepped.move_piece(sq, to_sq)
            if not is_square_attacked(stepped, to_sq, opponent):
                moves.append(Move(sq, to_sq))

        if self.can_summon(sq) and not is_in_check(board, king.color):
            moves.extend(Move(sq, t, MoveFlag.SUMMON) for t in self.summon_targets(sq))

        self._gen_castling(sq, king, moves)
        return moves

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        rank = home_rank(king.color)
        if king_sq != make_square(_KING_FILE, rank):
            return

        board = self._board
        opponent = king.color.opposite
        rook = Piece(king.color, PieceType.ROOK)

        # (flag, right, files that must be empty, files that must be safe)
        options = (
            (MoveFlag.CASTLE_KINGSIDE, True, (5, 6), (4, 5, 6)),
            (MoveFlag.CASTLE_QUEENSIDE, False, (1, 2, 3), (4, 3, 2)),
        )
        for flag, kingside, empty_files, safe_files in options:
            if not self._pos.castling & castling_right(king.color, kingside):
                continue
            rook_from, _ = castle_rook_squares(flag, rank)
            if board[rook_from] != rook:
                continue
            if not all(board.is_empty(make_square(f, rank)) for f in empty_files):
                continue
            if any(
                is_square_attacked(board, make_square(f, rank), opponent)
                for f in safe_files
            ):
                continue
            king_to = make_square(6 if kingside else 2, rank)
            moves.append(Move(king_sq, king_to, flag))
