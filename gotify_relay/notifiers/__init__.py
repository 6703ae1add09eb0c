"""Notification delivery."""

from .base import BaseNotifier
from .gotify import GotifyNotifier

__all__ = ["BaseNotifier", "GotifyNotifier"]
