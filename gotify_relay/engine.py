"""Alert ingestion pipeline."""

import asyncio
from contextlib import nullcontext
from typing import Any, Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from gotify_relay.errors import ValidationError
from gotify_relay.notifiers.base import BaseNotifier
from gotify_relay.processors.dedup import DedupProcessor
from gotify_relay.schemas import Alert, AlertBatch, AlertOutcome, BatchResult
from gotify_relay.services.sweeper import CacheSweeper
from gotify_relay.utils.cache import DedupCache

INVALID_PAYLOAD = "Invalid payload: alerts missing or not an array"


def _log_failure(task: asyncio.Task) -> None:
    """Retrieve and log a failed alert task, including those after the first error."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(f"Alert dispatch failed: {error}")


def parse_alerts(payload: Any) -> AlertBatch:
    """Validate a webhook body. Alert order is preserved."""
    alerts = payload.get("alerts") if isinstance(payload, dict) else None
    if not isinstance(alerts, list):
        raise ValidationError(INVALID_PAYLOAD)

    parsed = []
    for index, raw in enumerate(alerts):
        try:
            parsed.append(Alert.model_validate(raw))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid payload: alert at index {index} is malformed") from e
    return AlertBatch(alerts=parsed)


class RelayEngine:
    """
    Dedup-check, dispatch and record every alert of a webhook batch.

    The engine owns the dedup cache for the process lifetime and shares it
    with the background sweeper.
    """

    def __init__(
        self,
        notifier: BaseNotifier,
        cache: Optional[DedupCache] = None,
        max_concurrency: int = 0,
    ):
        self.notifier = notifier
        self.cache = cache if cache is not None else DedupCache()
        self.dedup = DedupProcessor(self.cache)
        self.sweeper = CacheSweeper(self.cache)
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None

    @property
    def running(self) -> bool:
        return self.sweeper.running

    async def start(self) -> None:
        self.sweeper.start()
        logger.info("Relay engine started")

    async def stop(self) -> None:
        await self.sweeper.stop()
        await self.notifier.close()
        logger.info("Relay engine stopped")

    async def handle_batch(self, payload: Any) -> BatchResult:
        """
        Process all alerts of a payload concurrently.

        Raises ValidationError before any processing if the payload is
        malformed. The first dispatch error propagates as soon as it is raised; the
        other alerts of the batch are not cancelled.
        """
        alerts = parse_alerts(payload).alerts
        tasks = [asyncio.create_task(self._process_alert(alert)) for alert in alerts]
        for task in tasks:
            task.add_done_callback(_log_failure)
        outcomes = await asyncio.gather(*tasks)

        return BatchResult(
            received=len(alerts),
            sent=outcomes.count(AlertOutcome.SENT),
            duplicates=outcomes.count(AlertOutcome.DUPLICATE),
        )

    async def _process_alert(self, alert: Alert) -> AlertOutcome:
        fingerprint = self.dedup.process(alert)
        if fingerprint is None:
            return AlertOutcome.DUPLICATE

        # Recorded on dispatch initiation: a failed delivery stays cached.
        self.dedup.remember(fingerprint)
        async with self._semaphore or nullcontext():
            await self.notifier.notify(alert, fingerprint)
        return AlertOutcome.SENT
