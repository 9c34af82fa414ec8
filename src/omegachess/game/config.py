"""Per-instance game configuration."""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from dataclasses import dataclass, field

from omegachess.core.enums import Color
from omegachess.core.notation import STARTING_FEN

_COLOR_NAMES: dict[str, Color] = {
    "white": Color.WHITE,
    "w": Color.WHITE,
    "black": Color.BLACK,
    "b": Color.BLACK,
}


def new_instance_id() -> str:
    """Random URL-safe token identifying one view of a game."""
    return secrets.token_urlsafe(8)


def parse_color(text: str | None) -> Color | None:
    """``"white"``/``"black"`` (or ``w``/``b``) → Color; anything else → None."""
    if not text:
        return None
    return _COLOR_NAMES.get(text.strip().lower())


def player_color_from(
    query: Mapping[str, str] | None = None,
    stored: str | None = None,
) -> Color | None:
    """Resolve the local colour: the ``color`` query parameter wins over a
    stored preference. None means hot-seat (both sides local).
    """
    if query:
        color = parse_color(query.get("color"))
        if color is not None:
            return color
    return parse_color(stored)


@dataclass(frozen=True, slots=True)
class GameConfig:
    local_color: Color | None = None
    instance_id: str = field(default_factory=new_instance_id)
    start_fen: str = STARTING_FEN
