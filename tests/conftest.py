"""Shared test fixtures."""

import asyncio
from typing import Any, Iterable, List, Optional

import pytest

from gotify_relay.errors import DeliveryError
from gotify_relay.notifiers.base import BaseNotifier
from gotify_relay.schemas import Alert, GotifyMessage
from gotify_relay.utils.cache import DedupCache

GOTIFY_URL = "http://gotify.example.com/message"


class FakeClock:
    """Manually advanced clock, in epoch seconds."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, status: int = 200, text: str = ""):
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession and records posted payloads."""

    def __init__(self, status: int = 200, text: str = "", error: Optional[Exception] = None):
        self.status = status
        self.text = text
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    def post(self, url: str, json: Any = None):
        self.calls.append((url, json))
        if self.error:
            raise self.error
        return FakeResponse(self.status, self.text)

    async def close(self) -> None:
        self.closed = True


class RecordingNotifier(BaseNotifier):
    """Notifier that keeps sent messages in memory."""

    def __init__(self, fail_on: Iterable[str] = ()):
        self.sent: List[tuple] = []
        self.fail_on = set(fail_on)
        self.closed = False

    async def send(self, message: GotifyMessage, fingerprint: str) -> None:
        self.sent.append((fingerprint, message))
        if fingerprint in self.fail_on:
            raise DeliveryError("Gotify responded with HTTP 500: boom", fingerprint=fingerprint)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return DedupCache(clock=clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def sample_alert():
    return Alert(
        status="firing",
        labels={"alertname": "TestAlert", "instance": "test-instance"},
        annotations={"description": "Test description"},
        startsAt="2025-06-06T10:00:00Z",
        endsAt="2025-06-06T10:05:00Z",
    )


@pytest.fixture
def sample_payload(sample_alert):
    return {"alerts": [sample_alert.model_dump()]}


class GatedNotifier(BaseNotifier):
    """Notifier whose sends block until released, tracking peak concurrency."""

    def __init__(self):
        self.release = asyncio.Event()
        self.in_flight = 0
        self.peak = 0
        self.sent: List[str] = []

    async def send(self, message: GotifyMessage, fingerprint: str) -> None:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await self.release.wait()
        finally:
            self.in_flight -= 1
        self.sent.append(fingerprint)
