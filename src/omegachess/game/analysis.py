"""Analysis line — a private, linear detour from a position in the game.

Moves played while analysing never enter the history tree and are never
broadcast. The line keeps a cursor so it can be stepped back and forth;
playing a move behind the cursor truncates everything after it.
"""

from __future__ import annotations

from omegachess.core.position import Position
from omegachess.game.record import MoveRecord


class AnalysisLine:
    """Linear move list started from a copy of *start*."""

    __slots__ = ("_index", "_records", "_start")

    def __init__(self, start: Position) -> None:
        self._start = start.copy()
        self._records: list[MoveRecord] = []
        self._index = 0

    @property
    def start(self) -> Position:
        return self._start

    @property
    def position(self) -> Position:
        """Position after the move under the cursor (``start`` at ply 0)."""
        if self._index == 0:
            return self._start
        return self._records[self._index - 1].position

    @property
    def records(self) -> list[MoveRecord]:
        return list(self._records)

    @property
    def ply(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def record(self, record: MoveRecord) -> MoveRecord:
        del self._records[self._index :]
        self._records.append(record)
        self._index = len(self._records)
        return record

    def undo(self) -> Position | None:
        if not self.can_undo:
            return None
        self._index -= 1
        return self.position

    def redo(self) -> Position | None:
        if not self.can_redo:
            return None
        self._index += 1
        return self.position

    def jump_to(self, ply: int) -> Position | None:
        """Move the cursor to *ply* (0 is the starting position)."""
        if not 0 <= ply <= len(self._records):
            return None
        self._index = ply
        return self.position
