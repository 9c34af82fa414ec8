"""GameController — the central orchestrator of an Omega chess game.

Coordinates: GameState (history tree, view mode, pending choice) and
MoveGenerator. Emits events via simple callbacks so the sync layer / UI /
tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from omegachess.core.enums import Color, MoveFlag, PieceType
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.move_generator import MoveGenerator
from omegachess.core.piece import CHOOSABLE_TYPES
from omegachess.core.position import Position
from omegachess.core.rules import GameStatus
from omegachess.core.types import Square, home_rank, rank_of
from omegachess.game.config import GameConfig
from omegachess.game.history import MoveHistory
from omegachess.game.interfaces import (
    REJECTED,
    MoveResult,
    PendingPromotion,
    PendingSummon,
    ViewMode,
)
from omegachess.game.record import MoveRecord
from omegachess.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
UndoCallback = Callable[[], None]
ResetCallback = Callable[[str], None]  # start fen
PositionCallback = Callable[[Position], None]
ModeCallback = Callable[[ViewMode], None]
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event.

    ``on_move_committed``, ``on_undo`` and ``on_reset`` fire for local actions
    only; they are what a sync layer mirrors to other views.
    """

    on_move_committed: list[MoveCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)
    on_position_changed: list[PositionCallback] = field(default_factory=list)
    on_mode_changed: list[ModeCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates and applies moves, drives the history tree, handles the
    promotion and summon choices and mirrors remote actions.

    Normal play never raises: rejected actions return ``False``, ``None`` or
    a :class:`MoveResult` with ``applied=False``.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). Remote actions arrive through the Qt sync bridge
    on that same thread.
    """

    __slots__ = ("_config", "_state", "_selected", "events")

    def __init__(self, config: GameConfig | None = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._state = GameState(self._config.local_color, self._config.start_fen)
        self._selected: Square | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def instance_id(self) -> str:
        return self._config.instance_id

    @property
    def local_color(self) -> Color | None:
        return self._config.local_color

    @property
    def history(self) -> MoveHistory:
        return self._state.history

    @property
    def mode(self) -> ViewMode:
        return self._state.mode

    @property
    def pending(self) -> PendingPromotion | PendingSummon | None:
        return self._state.pending

    @property
    def position(self) -> Position:
        """The visible position. Treat as read-only."""
        return self._state.position

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def is_local_turn(self) -> bool:
        color = self._config.local_color
        return color is None or self._state.live_position.side_to_move == color

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* for the side to move.

        During a pending summon only the king's summon markers are offered.
        Nothing is offered while reviewing, off turn, or after the game ended,
        except on an analysis line where either side may move.
        """
        pending = self._state.pending
        if isinstance(pending, PendingSummon):
            if sq != pending.king_square:
                return []
            return [Move(sq, target, MoveFlag.SUMMON) for target in pending.targets]
        if not self._can_play():
            return []
        position = self._state.position
        piece = position.board[sq]
        if piece is None or piece.color != position.side_to_move:
            return []
        return MoveGenerator(position).legal_moves_from(sq)

    def status(self) -> GameStatus:
        return self._state.status()

    def select(self, sq: Square) -> Square | None:
        """Select the piece on *sq* for moving; None if it cannot be moved."""
        if not self._can_play() or self._state.pending is not None:
            return None
        position = self._state.position
        piece = position.board[sq]
        if piece is None or piece.color != position.side_to_move:
            return None
        self._selected = sq
        return sq

    def clear_selection(self) -> None:
        self._selected = None

    # ── Local play ───────────────────────────────────────────────────────

    def attempt_move(self, from_sq: Square, to_sq: Square) -> MoveResult:
        if self._state.pending is not None or not self._can_play():
            _LOGGER.debug("Move %s-%s rejected: not accepting moves", from_sq, to_sq)
            return REJECTED

        position = self._state.play_position
        move = next(
            (
                m
                for m in self.legal_moves(from_sq)
                if m.to_sq == to_sq and not m.is_summon
            ),
            None,
        )
        if move is None:
            target = position.board[to_sq]
            if target is not None and target.color == position.side_to_move:
                self._selected = to_sq
            _LOGGER.debug("Move %s-%s rejected: illegal", from_sq, to_sq)
            return REJECTED

        self._selected = None
        if move.flag == MoveFlag.PROMOTION:
            promotion = PendingPromotion(move)
            self._state.pending = promotion
            return MoveResult(applied=False, pending_promotion=promotion)

        summon = self._stage_summon(move)
        if summon is not None:
            self._state.pending = summon
            self._emit_position()
            return MoveResult(applied=False, pending_summon=summon)

        return MoveResult(applied=True, record=self._commit(move))

    def resolve_promotion(self, piece_type: PieceType) -> bool:
        pending = self._state.pending
        if not isinstance(pending, PendingPromotion) or piece_type not in CHOOSABLE_TYPES:
            return False
        self._commit(pending.move, promotion=piece_type)
        return True

    def cancel_promotion(self) -> bool:
        if not isinstance(self._state.pending, PendingPromotion):
            return False
        self._state.pending = None
        return True

    def resolve_summon(self, piece_type: PieceType, target: Square) -> bool:
        """Place a summoned piece on *target*.

        Completes a pending summon, or, with nothing pending, lets a king
        that already stands eligible on the enemy home rank summon in place.
        """
        if piece_type not in CHOOSABLE_TYPES:
            return False
        placement = SummonPlacement(piece_type, target)

        pending = self._state.pending
        if isinstance(pending, PendingSummon):
            if target not in pending.targets:
                return False
            self._commit(pending.move, summon=placement)
            return True
        if pending is not None or not self._can_play():
            return False

        position = self._state.play_position
        king_sq = position.board.king_square(position.side_to_move)
        if king_sq is None:
            return False
        marker = Move(king_sq, target, MoveFlag.SUMMON)
        if marker not in self.legal_moves(king_sq):
            return False
        self._commit(marker, summon=placement)
        return True

    def cancel_summon(self) -> bool:
        """Decline a pending summon; the king move is committed on its own."""
        pending = self._state.pending
        if not isinstance(pending, PendingSummon):
            return False
        self._commit(pending.move)
        return True

    # ── Navigation ───────────────────────────────────────────────────────

    def undo(self) -> Position | None:
        """Step back. Retiring one's own latest move is broadcast.

        A pending choice is dropped first and counts as the whole step.
        """
        if self._drop_pending():
            self._emit_position()
            return self._state.position.copy()
        analysis = self._state.analysis
        if analysis is not None:
            return self._after_analysis_step(analysis.undo())
        nav = self._state.history.undo()
        if nav is None:
            return None
        self._selected = None
        if nav.moved_latest:
            self._emit_undo()
        self._after_navigation()
        return self._state.position.copy()

    def redo(self) -> Position | None:
        self._drop_pending()
        analysis = self._state.analysis
        if analysis is not None:
            return self._after_analysis_step(analysis.redo())
        nav = self._state.history.redo()
        if nav is None:
            return None
        self._selected = None
        if nav.moved_latest and nav.node.record is not None:
            self._emit_move(nav.node.record)
        self._after_navigation()
        return self._state.position.copy()

    def jump_to(self, node_id: int) -> Position | None:
        """Show history node *node_id*.

        While analysing, *node_id* is a ply of the analysis line instead,
        0 being the position analysis started from.
        """
        analysis = self._state.analysis
        if analysis is not None:
            if not 0 <= node_id <= len(analysis):
                return None
            self._drop_pending()
            return self._after_analysis_step(analysis.jump_to(node_id))

        history = self._state.history
        node = history.node(node_id)
        if node is None or history.is_retired(node):
            return None
        self._drop_pending()
        history.jump_to(node_id)
        self._selected = None
        self._after_navigation()
        return self._state.position.copy()

    def reset(self, fen: str | None = None) -> None:
        """Start over (optionally from *fen*) and broadcast the reset."""
        self._reset(fen, broadcast=True)

    # ── Analysis ─────────────────────────────────────────────────────────

    def enter_analysis(self) -> bool:
        """Branch a private analysis line off the visible position.

        Moves played there are never recorded in the game or broadcast, and
        either side may move regardless of the local colour.
        """
        if self._state.is_analyzing:
            return False
        self._state.enter_analysis()
        self._selected = None
        self._after_navigation()
        return True

    def exit_analysis(self) -> bool:
        """Discard the analysis line and return to the game."""
        if not self._state.exit_analysis():
            return False
        self._selected = None
        self._after_navigation()
        return True

    # ── Remote actions ───────────────────────────────────────────────────

    def apply_remote(self, record: MoveRecord, sender_id: str) -> bool:
        """Attach a move committed by another view after ``latest``.

        Review and analysis both end: the view jumps to the new move.
        """
        if self._is_echo(sender_id, "move"):
            return False
        self._state.exit_analysis()
        self._drop_pending()
        self._selected = None
        self._state.attach_remote(record)
        self._after_navigation()
        self._check_game_over()
        return True

    def apply_remote_undo(self, sender_id: str) -> bool:
        if self._is_echo(sender_id, "undo"):
            return False
        if self._state.history.remote_undo() is None:
            return False
        self._state.exit_analysis()
        self._drop_pending()
        self._selected = None
        self._after_navigation()
        return True

    def apply_remote_reset(self, sender_id: str, fen: str | None = None) -> bool:
        if self._is_echo(sender_id, "reset"):
            return False
        self._reset(fen, broadcast=False)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _can_play(self) -> bool:
        if self._state.is_analyzing:
            return True
        return (
            self._state.mode == ViewMode.PLAYING
            and self.is_local_turn
            and not self._state.is_game_over
        )

    def _stage_summon(self, move: Move) -> PendingSummon | None:
        """Stage a king arrival on the enemy home rank if a summon is possible."""
        position = self._state.play_position
        king = position.board[move.from_sq]
        if king is None or king.piece_type != PieceType.KING or move.is_castle:
            return None
        if rank_of(move.to_sq) != home_rank(king.color.opposite):
            return None
        if not position.king_state(king.color).can_summon:
            return None

        staged = position.copy()
        staged.board.move_piece(move.from_sq, move.to_sq)
        targets = MoveGenerator(staged).summon_targets(move.to_sq)
        if not targets:
            return None
        return PendingSummon(move, tuple(targets), staged)

    def _commit(
        self,
        move: Move,
        *,
        promotion: PieceType | None = None,
        summon: SummonPlacement | None = None,
    ) -> MoveRecord:
        record = self._state.commit(move, promotion=promotion, summon=summon)
        self._selected = None
        if self._state.is_analyzing:
            self._emit_position()
            return record
        self._after_navigation()
        self._emit_move(record)
        self._check_game_over()
        return record

    def _drop_pending(self) -> bool:
        if self._state.pending is None:
            return False
        self._state.pending = None
        return True

    def _reset(self, fen: str | None, *, broadcast: bool) -> None:
        previous_mode = self._state.mode
        self._state.setup(fen)
        self._selected = None
        _LOGGER.info("Game reset (%s)", "local" if broadcast else "remote")
        if broadcast:
            for cb in self.events.on_reset:
                cb(self._state.start_fen)
        if self._state.mode != previous_mode:
            self._emit_mode(self._state.mode)
        self._emit_position()

    def _is_echo(self, sender_id: str, kind: str) -> bool:
        if sender_id == self._config.instance_id:
            _LOGGER.debug("Ignoring own %s echo", kind)
            return True
        return False

    def _after_navigation(self) -> None:
        if self._state.sync_mode():
            self._emit_mode(self._state.mode)
        self._emit_position()

    def _after_analysis_step(self, position: Position | None) -> Position | None:
        if position is None:
            return None
        self._selected = None
        self._emit_position()
        return position.copy()

    def _check_game_over(self) -> None:
        status = self._state.status_of(self._state.history.latest)
        if status.checkmate or status.stalemate:
            _LOGGER.info("Game over: %s", status.result.name)
            for cb in self.events.on_game_over:
                cb(status)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move_committed:
            cb(record)

    def _emit_undo(self) -> None:
        for cb in self.events.on_undo:
            cb()

    def _emit_position(self) -> None:
        position = self._state.position
        for cb in self.events.on_position_changed:
            cb(position)

    def _emit_mode(self, mode: ViewMode) -> None:
        for cb in self.events.on_mode_changed:
            cb(mode)
