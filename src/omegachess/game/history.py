"""Branching move history with undo, redo and jump-to-node review.

The tree is rooted at the starting position. Two cursors walk it:

* ``latest``: the deepest node reached by forward play,
* ``current``: the node the visible board reflects.

Undoing one's own latest move *retires* it: both cursors step back and the
node is pushed onto a stack of retired nodes, so consecutive retiring undos
are redone in order. Playing any other move afterwards detaches every
retired node together with its subtree. Every other undo only moves
``current`` (review).
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from omegachess.core.enums import Color
from omegachess.core.position import Position
from omegachess.game.record import MoveRecord

_LOGGER = logging.getLogger(__name__)


@dataclass(eq=False, slots=True)
class HistoryNode:
    """One node of the history tree. The root carries no record."""

    id: int
    position: Position
    record: MoveRecord | None = None
    parent: HistoryNode | None = None
    children: list[HistoryNode] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def __repr__(self) -> str:
        label = "root" if self.record is None else str(self.record)
        return f"HistoryNode(id={self.id}, {label})"


@dataclass(frozen=True, slots=True)
class Navigation:
    """Where a navigation step landed and whether ``latest`` moved with it."""

    node: HistoryNode
    moved_latest: bool = False


class MoveHistory:
    """Move tree plus the ``latest``/``current`` cursors and retired stack.

    *local_color* decides which records count as played here for the
    retire-on-undo rule; ``None`` treats every record as local.
    """

    __slots__ = (
        "_ids",
        "_nodes",
        "_retired",
        "current",
        "latest",
        "local_color",
        "root",
    )

    def __init__(self, start: Position, local_color: Color | None = None) -> None:
        self.local_color = local_color
        self._ids = itertools.count()
        self._nodes: dict[int, HistoryNode] = {}
        self.root = self._new_node(start, None, None)
        self.latest = self.root
        self.current = self.root
        self._retired: list[HistoryNode] = []

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def redo_candidate(self) -> HistoryNode | None:
        """The most recently retired node, re-entered by the next redo."""
        return self._retired[-1] if self._retired else None

    @property
    def at_latest(self) -> bool:
        return self.current is self.latest

    @property
    def can_undo(self) -> bool:
        return self.current.parent is not None

    @property
    def can_redo(self) -> bool:
        return self._next_for_redo()[0] is not None

    def node(self, node_id: int) -> HistoryNode | None:
        return self._nodes.get(node_id)

    def is_retired(self, node: HistoryNode) -> bool:
        """Whether *node* sits on or below a retired node."""
        return any(n in self._retired for n in self.path_to(node))

    def __contains__(self, node: object) -> bool:
        return isinstance(node, HistoryNode) and self._nodes.get(node.id) is node

    def __len__(self) -> int:
        return len(self._nodes)

    def path_to(self, node: HistoryNode) -> list[HistoryNode]:
        """Nodes from the root down to *node*, both included."""
        path: list[HistoryNode] = []
        walker: HistoryNode | None = node
        while walker is not None:
            path.append(walker)
            walker = walker.parent
        path.reverse()
        return path

    def mainline(self) -> list[MoveRecord]:
        """Records from the root to ``latest``."""
        return [n.record for n in self.path_to(self.latest) if n.record is not None]

    def iter_nodes(self) -> Iterator[HistoryNode]:
        """Depth-first walk of the attached tree."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    # ── Local play ───────────────────────────────────────────────────────

    def record(self, record: MoveRecord) -> HistoryNode:
        """Append *record* under ``current`` and advance both cursors.

        The redo candidate is re-entered when it hangs under ``current`` and
        describes the same move; otherwise every retired node is detached.
        """
        parent = self.current
        candidate = self.redo_candidate
        if candidate is not None:
            if (
                candidate.parent is parent
                and candidate.record is not None
                and candidate.record.same_move(record)
            ):
                self._retired.pop()
                self.latest = self.current = candidate
                return candidate
            self._drop_retired()

        node = self._new_node(record.position, record, parent)
        self.latest = self.current = node
        return node

    def undo(self) -> Navigation | None:
        """Step ``current`` back one node; None at the root."""
        node = self.current
        parent = node.parent
        if parent is None:
            return None

        if node is self.latest and self._is_local(node.record):
            self.latest = self.current = parent
            self._retired.append(node)
            _LOGGER.debug("Retired %r", node)
            return Navigation(parent, moved_latest=True)

        self.current = parent
        return Navigation(parent)

    def redo(self) -> Navigation | None:
        """Step ``current`` forward; None when there is nowhere to go."""
        target, via_candidate = self._next_for_redo()
        if target is None:
            return None
        if via_candidate:
            self._retired.pop()
            self.latest = self.current = target
            return Navigation(target, moved_latest=True)
        self.current = target
        return Navigation(target)

    def jump_to(self, node_id: int) -> HistoryNode | None:
        node = self._nodes.get(node_id)
        if node is None or self.is_retired(node):
            return None
        self.current = node
        return node

    # ── Remote play ──────────────────────────────────────────────────────

    def remote_apply(self, record: MoveRecord) -> HistoryNode:
        """Append a record played elsewhere under ``latest``."""
        self._drop_retired()
        node =self._new_node(record.position, record, self.latest)
        self.latest = self.current = node
        return node

    def remote_undo(self) -> HistoryNode | None:
        """Detach ``latest`` (nothing is retired); None at the root."""
        node = self.latest
        parent = node.parent
        if parent is None:
            return None
        self._detach(node)
        self._retired = [n for n in self._retired if n in self]
        self.latest = self.current = parent
        return parent

    def reset(self, start: Position) -> None:
        """Discard the tree and start a fresh one at *start*."""
        self._ids = itertools.count()
        self._nodes = {}
        self.root = self._new_node(start, None, None)
        self.latest = self.current = self.root
        self._retired = []

    # ── Internal ─────────────────────────────────────────────────────────

    def _is_local(self, record: MoveRecord | None) -> bool:
        if record is None:
            return False
        return self.local_color is None or record.mover == self.local_color

    def _next_for_redo(self) -> tuple[HistoryNode | None, bool]:
        current = self.current
        candidate = self.redo_candidate
        if candidate is not None and candidate.parent is current:
            return candidate, True
        line = self.path_to(self.latest)
        if current in line[:-1]:
            return line[line.index(current) + 1], False
        children = [n for n in current.children if n not in self._retired]
        if not children:
            return None, False
        return children[0], False

    def _new_node(
        self,
        position: Position,
        record: MoveRecord | None,
        parent: HistoryNode | None,
    ) -> HistoryNode:
        node = HistoryNode(next(self._ids), position, record, parent)
        self._nodes[node.id] = node
        if parent is not None:
            parent.children.append(node)
        return node

    def _drop_retired(self) -> None:
        for node in reversed(self._retired):
            if node in self:
                self._detach(node)
        self._retired = []

    def _detach(self, node: HistoryNode) -> None:
        """Remove *node* and its whole subtree from the tree."""
        if node.parent is not None and node in node.parent.children:
            node.parent.children.remove(node)
        stack = [node]
        while stack:
            gone = stack.pop()
            if self._nodes.get(gone.id) is gone:
                del self._nodes[gone.id]
            stack.extend(gone.children)
        _LOGGER.debug("Detached %r", node)
