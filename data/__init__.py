"""Data management module for SocialNet.

Provides:
- PersistenceCodec: Flat record format for users and posts
- StateManager: Whole-graph load and save
- ActivityLogger: Structured append-only activity log
"""

from .codec import (
    PersistenceCodec,
    FieldEncoding,
    EscapedFieldEncoding,
    PlainFieldEncoding,
)
from .state_manager import StateManager
from .logger import (
    ActivityLogger,
    LogReader,
    LogEntry,
    LogEventType,
)

__all__ = [
    # Codec
    "PersistenceCodec",
    "FieldEncoding",
    "EscapedFieldEncoding",
    "PlainFieldEncoding",
    # State management
    "StateManager",
    # Logging
    "ActivityLogger",
    "LogReader",
    "LogEntry",
    "LogEventType",
]
