"""Square type alias and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    ...
    a8=56, b8=57, ..., h8=63

White starts on rank index 0, black on rank index 7.
"""

from __future__ import annotations

from typing import TypeAlias

from omegachess.core.enums import Color

Square: TypeAlias = int  # 0–63

FILES = "abcdefgh"


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return sq >> 3


def make_square(file: int, rank: int) -> Square:
    return rank * 8 + file


def offset_square(sq: Square, df: int, dr: int) -> Square | None:
    """Square reached from *sq* by a (file, rank) offset, or None off-board."""
    f = file_of(sq) + df
    r = rank_of(sq) + dr
    if 0 <= f < 8 and 0 <= r < 8:
        return make_square(f, r)
    return None


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a1', 63 → 'h8'."""
    return FILES[file_of(sq)] + str(rank_of(sq) + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 28."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(FILES.index(name[0]), int(name[1]) - 1)


def home_rank(color: Color) -> int:
    """Back rank a side starts on."""
    return 0 if color == Color.WHITE else 7


def forward(color: Color) -> int:
    """Rank direction a side's pawns advance in."""
    return 1 if color == Color.WHITE else -1


def are_adjacent(a: Square, b: Square) -> bool:
    """Whether two distinct squares touch, diagonals included."""
    return a != b and max(
        abs(file_of(a) - file_of(b)), abs(rank_of(a) - rank_of(b))
    ) <= 1


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
A2, B2, C2, D2, E2, F2, G2, H2 = range(8, 16)
A3, B3, C3, D3, E3, F3, G3, H3 = range(16, 24)
A4, B4, C4, D4, E4, F4, G4, H4 = range(24, 32)
A5, B5, C5, D5, E5, F5, G5, H5 = range(32, 40)
A6, B6, C6, D6, E6, F6, G6, H6 = range(40, 48)
A7, B7, C7, D7, E7, F7, G7, H7 = range(48, 56)
A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)
