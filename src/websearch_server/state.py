"""Mutable server state: search history and resource subscriptions.

Both containers are shared by concurrently running requests and serialize
their mutations with a lock. Neither is persisted.
"""

import threading
from collections import deque

from shared.logging import get_logger
from shared.models import HistoryEntry
from websearch_server.constants import HISTORY_CAPACITY

logger = get_logger(__name__)


class SearchHistory:
    """
    Bounded log of past search queries, oldest first.

    Backed by a ``deque`` with ``maxlen`` so the capacity bound holds on
    every insert: appending to a full log evicts the oldest entry in the
    same locked step.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self.capacity = capacity
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def append(self, query: str) -> HistoryEntry:
        """
        Record a query.

        Args:
            query: Search query text

        Returns:
            The stored entry
        """
        with self._lock:
            entry = HistoryEntry(query=query)
            evicted = len(self._entries) == self.capacity
            self._entries.append(entry)
        if evicted:
            logger.debug("Search history full, evicted oldest entry", capacity=self.capacity)
        return entry

    def snapshot(self) -> list[HistoryEntry]:
        """Return a copy of the log, oldest entry first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SubscriptionRegistry:
    """Set of resource URIs a client has subscribed to."""

    def __init__(self) -> None:
        self._uris: set[str] = set()
        self._lock = threading.Lock()

    def add(self, uri: str) -> None:
        with self._lock:
            self._uris.add(uri)

    def remove(self, uri: str) -> bool:
        """
        Drop a subscription.

        Returns:
            True if the URI was subscribed, False otherwise
        """
        with self._lock:
            if uri in self._uris:
                self._uris.discard(uri)
                return True
            return False

    def snapshot(self) -> list[str]:
        """Subscribed URIs in sorted order."""
        with self._lock:
            return sorted(self._uris)

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._uris

    def __len__(self) -> int:
        with self._lock:
            return len(self._uris)
