"""Board-independent lookup tables shared by the move generators."""

from __future__ import annotations

from omegachess.core.types import Square, file_of, make_square, rank_of

# (file, rank) offsets
KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

DIAGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ORTHOGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# 5x5 neighbourhood without its 3x3 core.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (df, dr)
    for dr in range(-2, 3)
    for df in range(-2, 3)
    if max(abs(df), abs(dr)) == 2
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_of(sq) + df
            ar = rank_of(sq) + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _squares_between(from_sq: Square, to_sq: Square) -> tuple[Square, ...]:
    """Squares whose interior the centre-to-centre segment crosses.

    A square P blocks the line A→B exactly when the perpendicular distance of
    its centre from the line is below the half-width of the square measured
    along the line's normal, i.e. ``|2 * cross(B - A, P - A)| < |dx| + |dy|``.
    Only squares inside the bounding box of A and B can satisfy it, and any
    such square other than A and B is crossed strictly between them.
    """
    fx, fy = file_of(from_sq), rank_of(from_sq)
    tx, ty = file_of(to_sq), rank_of(to_sq)
    dx, dy = tx - fx, ty - fy
    limit = abs(dx) + abs(dy)
    between: list[Square] = []
    for y in range(min(fy, ty), max(fy, ty) + 1):
        for x in range(min(fx, tx), max(fx, tx) + 1):
            sq = make_square(x, y)
            if sq in (from_sq, to_sq):
                continue
            cross = dx * (y - fy) - dy * (x - fx)
            if abs(2 * cross) < limit:
                between.append(sq)
    return tuple(between)


def _build_sight_lines() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    return tuple(
        tuple(_squares_between(a, b) for b in range(64)) for a in range(64)
    )


KING_TARGETS = _build_targets(KING_OFFSETS)
KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
ORTHOGONAL_TARGETS = _build_targets(ORTHOGONAL_DIRS)
ROOK_RAYS = _build_rays(ORTHOGONAL_DIRS)
BISHOP_RAYS = _build_rays(DIAGONAL_DIRS)

# SIGHT_LINES[a][b] -> squares that must be empty for a to see b.
SIGHT_LINES = _build_sight_lines()
