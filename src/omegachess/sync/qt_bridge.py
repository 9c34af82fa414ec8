"""Qt bridge mirroring one controller's local actions to other views."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from omegachess.game.controller import GameController
from omegachess.game.record import MoveRecord
from omegachess.sync.messages import MessageType, SyncMessage

_LOGGER = logging.getLogger(__name__)


class SyncBridge(QObject):
    """Posts a :class:`SyncMessage` for every local commit, retiring undo and
    reset of *controller*, and applies the messages it is handed.

    Wire ``message_posted`` of one bridge to ``deliver`` of another (see
    :func:`link`) or to any transport that ends in ``deliver``.
    """

    message_posted = pyqtSignal(object)
    message_rejected = pyqtSignal(str)

    def __init__(self, controller: GameController, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        events = controller.events
        events.on_move_committed.append(self._on_move_committed)
        events.on_undo.append(self._on_undo)
        events.on_reset.append(self._on_reset)

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def instance_id(self) -> str:
        return self._controller.instance_id

    @pyqtSlot(object)
    def deliver(self, message_obj: object) -> None:
        """Apply an inbound message (a :class:`SyncMessage` or its JSON text)."""
        try:
            if isinstance(message_obj, str):
                message = SyncMessage.from_json(message_obj)
            elif isinstance(message_obj, SyncMessage):
                message = message_obj
            else:
                raise ValueError(f"Unsupported message object: {type(message_obj).__name__}")

            if message.sender_id == self.instance_id:
                _LOGGER.debug("Dropping own %s message", message.type)
                return
            self._dispatch(message)
        except ValueError as exc:
            _LOGGER.warning("Dropping malformed sync message: %s", exc)
            self.message_rejected.emit(str(exc))

    # ── Internal ─────────────────────────────────────────────────────────

    def _dispatch(self, message: SyncMessage) -> None:
        if message.type == MessageType.MOVE:
            self._controller.apply_remote(message.record(), message.sender_id)
        elif message.type == MessageType.UNDO:
            self._controller.apply_remote_undo(message.sender_id)
        elif message.type == MessageType.RESET:
            fen = message.payload.get("fen")
            self._controller.apply_remote_reset(
                message.sender_id, fen if isinstance(fen, str) else None
            )

    def _on_move_committed(self, record: MoveRecord) -> None:
        self.message_posted.emit(SyncMessage.move(record, self.instance_id))

    def _on_undo(self) -> None:
        self.message_posted.emit(SyncMessage.undo(self.instance_id))

    def _on_reset(self, fen: str) -> None:
        self.message_posted.emit(SyncMessage.reset(self.instance_id, fen))


def link(a: SyncBridge, b: SyncBridge) -> None:
    """Mirror two bridges into each other (in-process, direct connection)."""
    a.message_posted.connect(b.deliver)
    b.message_posted.connect(a.deliver)
