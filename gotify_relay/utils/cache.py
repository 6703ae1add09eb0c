"""Time-windowed dedup cache."""

import time
from typing import Callable, Dict, List

from loguru import logger

# Entries older than this are evicted by the next sweep.
TTL_SECONDS = 2 * 60
SWEEP_INTERVAL_SECONDS = 1.0

EvictionListener = Callable[[str, float], None]


class DedupCache:
    """
    Ledger of sent notifications, keyed by fingerprint.

    Maps each fingerprint to the instant (epoch seconds) its notification was
    dispatched. Reads do not check expiry: a stale entry is reported present
    until a sweep removes it.

    Not thread-safe. All access is expected from a single event loop, where
    each method runs without suspension.
    """

    def __init__(self, ttl: float = TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self.clock = clock
        self._entries: Dict[str, float] = {}
        self._listeners: List[EvictionListener] = []

    def contains(self, fingerprint: str) -> bool:
        return fingerprint in self._entries

    def record(self, fingerprint: str, now: float | None = None) -> None:
        """Insert or overwrite the last-seen instant for a fingerprint."""
        self._entries[fingerprint] = self.clock() if now is None else now

    def last_seen(self, fingerprint: str) -> float | None:
        return self._entries.get(fingerprint)

    def sweep(self, now: float | None = None) -> List[str]:
        """
        Remove every entry whose age has reached the TTL.
        Returns the evicted fingerprints.
        """
        now = self.clock() if now is None else now
        expired = [
            (fingerprint, seen)
            for fingerprint, seen in self._entries.items()
            if now - seen >= self.ttl
        ]

        for fingerprint, _ in expired:
            del self._entries[fingerprint]
            logger.info(f"🧹 Removed from cache: {fingerprint}")

        for fingerprint, seen in expired:
            for listener in self._listeners:
                try:
                    listener(fingerprint, seen)
                except Exception:
                    logger.exception(f"Eviction listener failed for {fingerprint}")

        return [fingerprint for fingerprint, _ in expired]

    def add_listener(self, listener: EvictionListener) -> None:
        """Register a callback invoked with (fingerprint, last_seen) on eviction."""
        self._listeners.append(listener)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, fingerprint: str) -> bool:
        return self.contains(fingerprint)

    def __len__(self) -> int:
        return len(self._entries)
