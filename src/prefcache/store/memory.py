"""In-memory preferences store.

Suitable for tests and for tools that want preference semantics without a
backing file. Everything lives in a dictionary; ``flush`` only counts syncs.
"""

import threading
from typing import Optional

from loguru import logger

from prefcache.store.base import ConfigStore


class InMemoryStore(ConfigStore):
    """Thread-safe dictionary-backed store.

    Attributes:
        _entries: Stored text keyed by path.
        flush_count: Number of successful ``flush`` calls so far.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        """Initialize the store.

        Args:
            initial: Optional path → text entries to preload.
        """
        self._entries: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()
        self.flush_count = 0

    def _get(self, path: str) -> Optional[str]:
        with self._lock:
            text = self._entries.get(path)
        if text is None:
            logger.debug(f"Store MISS: {path}")
        else:
            logger.debug(f"Store HIT: {path}")
        return text

    def _put(self, path: str, text: str) -> bool:
        with self._lock:
            self._entries[path] = text
        logger.debug(f"Store SET: {path}={text!r}")
        return True

    def _remove(self, path: str) -> bool:
        with self._lock:
            if path not in self._entries:
                return False
            del self._entries[path]
        logger.debug(f"Store DELETE: {path}")
        return True

    def flush(self) -> bool:
        with self._lock:
            self.flush_count += 1
        return True

    def snapshot(self) -> dict[str, str]:
        """Copy of the stored text, keyed by path."""
        with self._lock:
            return dict(self._entries)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
        logger.info("Store cleared")

    def stats(self) -> dict[str, int]:
        """Get store statistics.

        Returns:
            Dictionary with entry count and flush count.
        """
        with self._lock:
            return {
                "total_entries": len(self._entries),
                "flush_count": self.flush_count,
            }
