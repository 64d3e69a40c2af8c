"""Structured append-only activity log.

Records what happened during a run as JSON lines:
- Account events (signup, login, logout)
- Content events (posts, comments)
- Friendship events (requests sent and accepted)
- Persistence events (state loaded and saved)

Passwords are never written to the log.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Iterator
from collections import deque
from enum import Enum
import json
import gzip
from datetime import datetime

from config.schemas import ActivityLogConfig


class LogEventType(Enum):
    """Types of loggable events."""

    USER_SIGNUP = "user_signup"
    LOGIN = "login"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    POST_CREATED = "post_created"
    COMMENT_ADDED = "comment_added"
    FRIEND_REQUEST_SENT = "friend_request_sent"
    FRIEND_REQUEST_ACCEPTED = "friend_request_accepted"
    STATE_LOADED = "state_loaded"
    STATE_SAVED = "state_saved"


@dataclass
class LogEntry:
    """A single log entry.

    Attributes:
        event_type: Type of event
        sequence: Position of the entry within its run
        timestamp: When entry was created
        data: Event-specific data
    """

    event_type: LogEventType
    sequence: int
    timestamp: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type.value,
            "sequence": self.sequence,
            "timestamp": self.timestamp,
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        """Create from dictionary."""
        return cls(
            event_type=LogEventType(data["event_type"]),
            sequence=data["sequence"],
            timestamp=data["timestamp"],
            data=data.get("data", {}),
        )

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> "LogEntry":
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))


def _log_path(log_dir: Path, run_id: str, use_compression: bool) -> Path:
    ext = ".jsonl.gz" if use_compression else ".jsonl"
    return log_dir / f"{run_id}{ext}"


def _open_log(path: Path, mode: str) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, mode + "t", encoding="utf-8")
    return open(path, mode, encoding="utf-8")


def _iterate_file(path: Path, event_types: list[LogEventType] | None) -> Iterator[LogEntry]:
    if not path.exists():
        return
    with _open_log(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue

            entry = LogEntry.from_json(line)
            if event_types and entry.event_type not in event_types:
                continue
            yield entry


class ActivityLogger:
    """Buffered append-only logger for social network activity."""

    def __init__(
        self,
        log_dir: str | Path,
        run_id: str | None = None,
        buffer_size: int = 50,
        use_compression: bool = False,
    ):
        """Initialize logger.

        Args:
            log_dir: Directory to store log files
            run_id: Identifier for this run, used as the file name
            buffer_size: Number of entries to buffer before writing
            use_compression: Whether to use gzip compression
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.run_id = run_id or datetime.now().strftime("%Y%m%d_%H%M%S")
        self.buffer_size = buffer_size
        self.use_compression = use_compression

        self._buffer: deque[LogEntry] = deque()
        self._closed = False

        # Statistics
        self._total_entries = 0
        self._entries_by_type: dict[LogEventType, int] = {t: 0 for t in LogEventType}

    @classmethod
    def from_config(cls, config: ActivityLogConfig, run_id: str | None = None) -> "ActivityLogger":
        """Create a logger from configuration."""
        return cls(
            log_dir=config.log_dir,
            run_id=run_id,
            buffer_size=config.buffer_size,
            use_compression=config.use_compression,
        )

    @property
    def log_path(self) -> Path:
        """Path of the file this run appends to."""
        return _log_path(self.log_dir, self.run_id, self.use_compression)

    def _flush_buffer(self) -> None:
        """Flush buffer to disk."""
        if not self._buffer:
            return
        entries = list(self._buffer)
        self._buffer.clear()
        with _open_log(self.log_path, "a") as f:
            for entry in entries:
                f.write(entry.to_json() + "\n")

    def log(self, event_type: LogEventType, data: dict[str, Any] | None = None) -> LogEntry:
        """Log an event.

        Args:
            event_type: Type of event
            data: Event data

        Returns:
            The buffered entry
        """
        if self._closed:
            raise RuntimeError("Activity logger is closed")

        self._total_entries += 1
        entry = LogEntry(
            event_type=event_type,
            sequence=self._total_entries,
            timestamp=datetime.now().isoformat(),
            data=data or {},
        )

        self._buffer.append(entry)
        self._entries_by_type[event_type] += 1

        if len(self._buffer) >= self.buffer_size:
            self._flush_buffer()
        return entry

    def log_post_created(self, author: str, post_number: int, content: str) -> None:
        """Log a post creation event."""
        self.log(
            LogEventType.POST_CREATED,
            {"author": author, "post_number": post_number, "content_length": len(content)},
        )

    def log_comment_added(self, author: str, post_number: int, comment_number: int) -> None:
        """Log a comment event."""
        self.log(
            LogEventType.COMMENT_ADDED,
            {"author": author, "post_number": post_number, "comment_number": comment_number},
        )

    def log_state(self, event_type: LogEventType, summary: dict[str, Any]) -> None:
        """Log a load or save of the whole graph.

        Args:
            event_type: STATE_LOADED or STATE_SAVED
            summary: Graph statistics, plus any integrity findings on load
        """
        self.log(event_type, dict(summary))

    def flush(self) -> None:
        """Force flush all buffered entries to disk."""
        self._flush_buffer()

    def close(self) -> None:
        """Close logger and flush remaining entries."""
        if self._closed:
            return
        self._flush_buffer()
        self._closed = True

    def get_statistics(self) -> dict[str, Any]:
        """Get logging statistics."""
        return {
            "run_id": self.run_id,
            "total_entries": self._total_entries,
            "entries_by_type": {
                t.value: c for t, c in self._entries_by_type.items() if c > 0
            },
            "buffered": len(self._buffer),
        }

    def iterate_entries(
        self,
        event_types: list[LogEventType] | None = None,
    ) -> Iterator[LogEntry]:
        """Iterate over logged entries, flushing the buffer first."""
        self._flush_buffer()
        yield from _iterate_file(self.log_path, event_types)


class LogReader:
    """Read-only interface for activity logs.

    Use this for analysis without risk of modifying logs.
    """

    def __init__(self, log_dir: str | Path, run_id: str):
        """Initialize log reader.

        Args:
            log_dir: Directory containing logs
            run_id: Run to read
        """
        self.log_dir = Path(log_dir)
        self.run_id = run_id

        # Detect compression
        self.use_compression = _log_path(self.log_dir, run_id, True).exists()

    def iterate_entries(
        self,
        event_types: list[LogEventType] | None = None,
    ) -> Iterator[LogEntry]:
        """Iterate over logged entries with an optional type filter.

        Yields:
            Matching LogEntry objects
        """
        yield from _iterate_file(_log_path(self.log_dir, self.run_id, self.use_compression), event_types)

    def count_entries(self) -> int:
        """Count total entries in the log."""
        return sum(1 for _ in self.iterate_entries())

    def count_by_type(self) -> dict[str, int]:
        """Count entries per event type."""
        counts: dict[str, int] = {}
        for entry in self.iterate_entries():
            key = entry.event_type.value
            counts[key] = counts.get(key, 0) + 1
        return counts
