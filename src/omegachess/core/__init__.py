"""Core rules layer — pure Omega chess logic with zero external dependencies.

Quick start::

    from omegachess.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move)
"""

from omegachess.core.abilities import FRESH_SUMMON_STATE, KingSummonState
from omegachess.core.board import Board
from omegachess.core.enums import (
    CastlingRights,
    Color,
    DrawType,
    GameResult,
    MoveFlag,
    PieceType,
)
from omegachess.core.keys import position_key
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.move_generator import MoveGenerator
from omegachess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from omegachess.core.piece import CHOOSABLE_TYPES, Piece
from omegachess.core.position import Position
from omegachess.core.rules import DrawInfo, GameStatus, Rules
from omegachess.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawType",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "CHOOSABLE_TYPES",
    "DrawInfo",
    "FRESH_SUMMON_STATE",
    "GameStatus",
    "KingSummonState",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "SummonPlacement",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_key",
    "position_to_fen",
]
