"""Core enumerations and flags for the Omega chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, StrEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Tag of a move variant.

    ``SUMMON`` moves carry the king square as origin and the placement square
    as destination; they never relocate a piece.
    """

    STEP = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5
    SUMMON = 6

    @property
    def is_castle(self) -> bool:
        return self in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameResult(IntEnum):
    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3


class DrawType(StrEnum):
    """Advisory draw conditions reported after a committed move."""

    INSUFFICIENT_MATERIAL = "insufficient"
    THREEFOLD = "threefold"
    FIFTY_MOVE = "fifty"

    @property
    def message(self) -> str:
        return _DRAW_MESSAGES[self]


_DRAW_MESSAGES: dict[DrawType, str] = {
    DrawType.INSUFFICIENT_MATERIAL: "Draw by insufficient material.",
    DrawType.THREEFOLD: "Draw by threefold repetition.",
    DrawType.FIFTY_MOVE: "Draw by fifty-move rule.",
}
