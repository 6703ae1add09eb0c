"""Periodic eviction of expired dedup entries."""

import asyncio
from typing import Optional

from loguru import logger

from gotify_relay.utils.cache import DedupCache, SWEEP_INTERVAL_SECONDS


class CacheSweeper:
    """Runs DedupCache.sweep on a fixed interval, independent of traffic."""

    def __init__(self, cache: DedupCache, interval: float = SWEEP_INTERVAL_SECONDS):
        self.cache = cache
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self._task and not self._task.done():
            return
        self._running = True
        self._task = asyncio.create_task(self.run())
        logger.debug(f"Cache sweeper started (interval: {self.interval}s)")

    async def stop(self) -> None:
        self._running = False
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug("Cache sweeper stopped")

    async def run(self) -> None:
        while self._running:
            await asyncio.sleep(self.interval)
            try:
                self.cache.sweep()
            except Exception as e:
                logger.error(f"Error in cache sweep: {e}")
