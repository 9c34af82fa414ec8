"""Canonical position keys used for repetition counting."""

from __future__ import annotations

from omegachess.core.board import Board
from omegachess.core.enums import CastlingRights, Color
from omegachess.core.types import Square, make_square, square_name

_RIGHTS_CHARS: tuple[tuple[CastlingRights, str], ...] = (
    (CastlingRights.WHITE_KINGSIDE, "K"),
    (CastlingRights.WHITE_QUEENSIDE, "Q"),
    (CastlingRights.BLACK_KINGSIDE, "k"),
    (CastlingRights.BLACK_QUEENSIDE, "q"),
)


def placement_text(board: Board) -> str:
    """FEN-style piece placement, rank 8 first."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def castling_text(castling: CastlingRights) -> str:
    return "".join(ch for right, ch in _RIGHTS_CHARS if castling & right) or "-"


def position_key(
    board: Board,
    side_to_move: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> str:
    """Lossless key of board + side to move + castling rights + en passant."""
    side = "w" if side_to_move == Color.WHITE else "b"
    ep = square_name(en_passant) if en_passant is not None else "-"
    return f"{placement_text(board)} {side} {castling_text(castling)} {ep}"
