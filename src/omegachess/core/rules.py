"""High-level rules: check, checkmate, stalemate and draw detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from omegachess.core.enums import Color, DrawType, GameResult
from omegachess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from omegachess.core.position import Position


@dataclass(frozen=True, slots=True)
class DrawInfo:
    type: DrawType

    @property
    def message(self) -> str:
        return self.type.message


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Status of the side to move, computed after every committed move.

    Checkmate and stalemate are terminal; *draw* is advisory.
    """

    check: bool = False
    checkmate: bool = False
    stalemate: bool = False
    draw: DrawInfo | None = None
    result: GameResult = GameResult.IN_PROGRESS


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move) and not gen.has_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return not gen.is_in_check(position.side_to_move) and not gen.has_legal_moves()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """Only the two kings are left."""
        return position.board.piece_count() == 2 and all(
            position.board.king_square(color) is not None for color in Color
        )

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_threefold_repetition(position: Position) -> bool:
        return position.repetition_count() >= 3

    @staticmethod
    def draw_info(position: Position) -> DrawInfo | None:
        if Rules.is_insufficient_material(position):
            return DrawInfo(DrawType.INSUFFICIENT_MATERIAL)
        if Rules.is_threefold_repetition(position):
            return DrawInfo(DrawType.THREEFOLD)
        if Rules.is_fifty_move_rule(position):
            return DrawInfo(DrawType.FIFTY_MOVE)
        return None

    @staticmethod
    def status(position: Position) -> GameStatus:
        """Full status of *position* for its side to move."""
        gen = MoveGenerator(position)
        side = position.side_to_move
        check = gen.is_in_check(side)
        if not gen.has_legal_moves():
            if check:
                winner = (
                    GameResult.BLACK_WINS if side == Color.WHITE else GameResult.WHITE_WINS
                )
                return GameStatus(check=True, checkmate=True, result=winner)
            return GameStatus(stalemate=True, result=GameResult.DRAW)
        return GameStatus(check=check, draw=Rules.draw_info(position))

    @staticmethod
    def game_result(position: Position) -> GameResult:
        return Rules.status(position).result
