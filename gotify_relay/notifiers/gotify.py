"""Gotify notifier."""

import asyncio
from typing import Optional

import aiohttp
from loguru import logger

from gotify_relay.errors import ConfigurationError, DeliveryError
from gotify_relay.schemas import GotifyMessage
from .base import BaseNotifier


class GotifyNotifier(BaseNotifier):
    """Posts messages to a Gotify server. No retries, no timeout."""

    def __init__(self, url: Optional[str], session: Optional[aiohttp.ClientSession] = None):
        self.url = url
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def send(self, message: GotifyMessage, fingerprint: str) -> None:
        if not self.url:
            raise ConfigurationError("Gotify URL not configured")

        session = await self._get_session()
        try:
            async with session.post(self.url, json=message.model_dump()) as response:
                if not 200 <= response.status < 300:
                    error = await response.text()
                    raise DeliveryError(
                        f"Gotify responded with HTTP {response.status}: {error}",
                        fingerprint=fingerprint,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryError(f"Gotify request failed: {e}", fingerprint=fingerprint) from e

        logger.info(f"✅ Sent: {fingerprint}")
