"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from omegachess.core.enums import Color, PieceType

# piece type → (FEN letter, white glyph, black glyph)
_GLYPHS: dict[PieceType, tuple[str, str, str]] = {
    PieceType.PAWN: ("p", "♙", "♟"),
    PieceType.KNIGHT: ("n", "♘", "♞"),
    PieceType.BISHOP: ("b", "♗", "♝"),
    PieceType.ROOK: ("r", "♖", "♜"),
    PieceType.QUEEN: ("q", "♕", "♛"),
    PieceType.KING: ("k", "♔", "♚"),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {}
_UNICODE: dict[tuple[Color, PieceType], str] = {}
for _ptype, (_letter, _white, _black) in _GLYPHS.items():
    _FEN_CHARS[(Color.WHITE, _ptype)] = _letter.upper()
    _FEN_CHARS[(Color.BLACK, _ptype)] = _letter
    _UNICODE[(Color.WHITE, _ptype)] = _white
    _UNICODE[(Color.BLACK, _ptype)] = _black

_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {v: k for k, v in _FEN_CHARS.items()}
_SYMBOL_MAP: dict[str, tuple[Color, PieceType]] = {v: k for k, v in _UNICODE.items()}

# Pieces a pawn may promote to, and a king may summon.
CHOOSABLE_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.BISHOP,
)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a piece of either side."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece:
        """Create piece from its unicode glyph, e.g. '♕' → white queen."""
        try:
            color, ptype = _SYMBOL_MAP[symbol]
        except KeyError:
            raise ValueError(f"Invalid piece symbol: {symbol!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def is_enemy_of(self, other: Piece | None) -> bool:
        return other is not None and other.color != self.color

    def is_friend_of(self, other: Piece | None) -> bool:
        return other is not None and other.color == self.color
