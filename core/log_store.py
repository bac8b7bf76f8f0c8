"""In-memory, append-only log of completed captures."""

import logging
from typing import Callable, List, Optional, Tuple

from core.utils import CaptureRecord, LogListener

logger = logging.getLogger(__name__)


class LogStore:
    """Ordered capture log, oldest first, kept for the lifetime of the process.

    Appends happen on the UI thread only; readers get immutable snapshots.
    """

    def __init__(self):
        self._records: List[CaptureRecord] = []
        self._listeners: List[LogListener] = []

    def append(self, record: CaptureRecord) -> None:
        """Add a record to the end of the log and notify subscribers."""
        if not isinstance(record, CaptureRecord):
            raise TypeError(f"Expected CaptureRecord, got {type(record).__name__}")
        self._records.append(record)
        logger.debug("Logged capture %s: %s", record.identifier, record.prediction)
        for listener in list(self._listeners):
            listener(record)

    def all(self) -> Tuple[CaptureRecord, ...]:
        """Snapshot of every record in insertion order."""
        return tuple(self._records)

    def get_by_id(self, identifier: str) -> Optional[CaptureRecord]:
        """Get a single record by its identifier."""
        for record in self._records:
            if record.identifier == identifier:
                return record
        return None

    def count(self) -> int:
        """Get total number of records."""
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def subscribe(self, listener: LogListener) -> Callable[[], None]:
        """Call listener after every append. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


# Module-level singleton
_log_store: Optional[LogStore] = None


def get_log_store() -> LogStore:
    """Get the global LogStore instance."""
    global _log_store
    if _log_store is None:
        _log_store = LogStore()
    return _log_store
