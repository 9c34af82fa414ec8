"""Sync layer — mirrors moves, undos and resets between views of a game."""

from omegachess.sync.messages import (
    MessageType,
    SyncMessage,
    record_from_dict,
    record_to_dict,
)
from omegachess.sync.qt_bridge import SyncBridge, link

__all__ = [
    "MessageType",
    "SyncBridge",
    "SyncMessage",
    "link",
    "record_from_dict",
    "record_to_dict",
]
