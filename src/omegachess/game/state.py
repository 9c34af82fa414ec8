"""Game state — history tree, view mode, pending choice and status cache."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from omegachess.core.enums import Color, PieceType
from omegachess.core.move import Move, SummonPlacement
from omegachess.core.notation import STARTING_FEN, position_from_fen
from omegachess.core.position import Position
from omegachess.core.rules import GameStatus, Rules
from omegachess.game.analysis import AnalysisLine
from omegachess.game.history import HistoryNode, MoveHistory
from omegachess.game.interfaces import PendingPromotion, PendingSummon, ViewMode
from omegachess.game.record import MoveRecord


@dataclass
class GameState:
    """Manages the game's data: history, mode, pending choice.

    This is a pure data/logic class: no legality checks, no events.
    """

    local_color: Color | None = None
    start_fen: str = STARTING_FEN
    history: MoveHistory = field(init=False)
    mode: ViewMode = field(default=ViewMode.PLAYING, init=False)
    pending: PendingPromotion | PendingSummon | None = field(default=None, init=False)
    analysis: AnalysisLine | None = field(default=None, init=False)
    _status_cache: dict[int, GameStatus] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.history = MoveHistory(position_from_fen(self.start_fen), self.local_color)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game."""
        if fen is not None:
            self.start_fen = fen
        self.history.reset(position_from_fen(self.start_fen))
        self.mode = ViewMode.PLAYING
        self.pending = None
        self.analysis = None
        self._status_cache.clear()

    # ── Positions ────────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        """The visible position (staged during a pending summon)."""
        if isinstance(self.pending, PendingSummon):
            return self.pending.staged
        if self.analysis is not None:
            return self.analysis.position
        return self.history.current.position

    @property
    def live_position(self) -> Position:
        """Position at the ``latest`` cursor, where the next move is played."""
        return self.history.latest.position

    @property
    def play_position(self) -> Position:
        """Where the next move goes: the analysis line, else ``latest``."""
        if self.analysis is not None:
            return self.analysis.position
        return self.live_position

    @property
    def side_to_move(self) -> Color:
        return self.history.current.position.side_to_move

    # ── Analysis ─────────────────────────────────────────────────────────

    @property
    def is_analyzing(self) -> bool:
        return self.analysis is not None

    def enter_analysis(self) -> AnalysisLine:
        """Start a fresh analysis line from the visible history node."""
        self.pending = None
        self.analysis = AnalysisLine(self.history.current.position)
        return self.analysis

    def exit_analysis(self) -> bool:
        if self.analysis is None:
            return False
        self.analysis = None
        self.pending = None
        return True

    # ── Commits ──────────────────────────────────────────────────────────

    def commit(
        self,
        move: Move,
        *,
        promotion: PieceType | None = None,
        summon: SummonPlacement | None = None,
    ) -> MoveRecord:
        """Play a validated move at ``latest`` (or on the analysis line).

        Caller is responsible for legality check.
        """
        record = MoveRecord.from_move(
            self.play_position, move, promotion=promotion, summon=summon
        )
        self.pending = None
        if self.analysis is not None:
            return self.analysis.record(record)
        node = self.history.record(record)
        return node.record if node.record is not None else record

    def attach_remote(self, record: MoveRecord) -> MoveRecord:
        """Attach a record played elsewhere after ``latest``.

        The record's position gets the repetition counts of the local line.
        """
        position = record.position.copy()
        position.continue_from(self.live_position)
        record = replace(record, position=position)
        self.history.remote_apply(record)
        self.pending = None
        return record

    # ── Status ───────────────────────────────────────────────────────────

    def status(self) -> GameStatus:
        """Status of the visible board (cached per history node)."""
        if self.analysis is not None:
            return Rules.status(self.analysis.position)
        return self.status_of(self.history.current)

    def status_of(self, node: HistoryNode) -> GameStatus:
        # Node ids are never reused within one tree.
        cached = self._status_cache.get(node.id)
        if cached is None:
            cached = Rules.status(node.position)
            self._status_cache[node.id] = cached
        return cached

    @property
    def is_game_over(self) -> bool:
        """Checkmate or stalemate at ``latest``."""
        status = self.status_of(self.history.latest)
        return status.checkmate or status.stalemate

    def sync_mode(self) -> bool:
        """Derive the view mode from the cursors. Returns True if it changed."""
        if self.analysis is not None:
            mode = ViewMode.ANALYZING
        elif self.history.at_latest:
            mode = ViewMode.PLAYING
        else:
            mode = ViewMode.REVIEWING
        changed = mode != self.mode
        self.mode = mode
        return changed
