"""Tests for game configuration helpers."""

import pytest

from omegachess.core.enums import Color
from omegachess.core.notation import STARTING_FEN
from omegachess.game.config import GameConfig, new_instance_id, parse_color, player_color_from


class TestParseColor:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("white", Color.WHITE),
            ("W", Color.WHITE),
            (" Black ", Color.BLACK),
            ("b", Color.BLACK),
            ("red", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, text: str | None, expected: Color | None) -> None:
        assert parse_color(text) == expected


class TestPlayerColor:
    def test_query_wins(self) -> None:
        assert player_color_from({"color": "black"}, stored="white") == Color.BLACK

    def test_stored_fallback(self) -> None:
        assert player_color_from({"color": "purple"}, stored="white") == Color.WHITE
        assert player_color_from(None, stored="b") == Color.BLACK

    def test_hot_seat_default(self) -> None:
        assert player_color_from() is None
        assert player_color_from({}) is None


class TestGameConfig:
    def test_defaults(self) -> None:
        config = GameConfig()
        assert config.local_color is None
        assert config.start_fen == STARTING_FEN
        assert config.instance_id

    def test_instance_ids_differ(self) -> None:
        assert GameConfig().instance_id != GameConfig().instance_id
        assert new_instance_id() != new_instance_id()
