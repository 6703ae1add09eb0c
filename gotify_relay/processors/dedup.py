"""Deduplication processor."""

from typing import Optional

from loguru import logger

from gotify_relay.schemas import Alert
from gotify_relay.utils.cache import DedupCache
from .fingerprint import generate_fingerprint


class DedupProcessor:
    """Drops alerts whose notification was sent within the cache TTL."""

    def __init__(self, cache: DedupCache):
        self.cache = cache

    def process(self, alert: Alert) -> Optional[str]:
        """
        Return the alert's fingerprint, or None if it is a duplicate.
        A duplicate leaves the cache untouched.
        """
        fingerprint = generate_fingerprint(alert)
        if self.cache.contains(fingerprint):
            logger.info(f"🔁 Duplicate detected, skipped: {fingerprint}")
            return None
        return fingerprint

    def remember(self, fingerprint: str) -> None:
        """Mark a fingerprint as sent at the current instant."""
        self.cache.record(fingerprint, self.cache.clock())
