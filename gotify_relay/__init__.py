"""Gotify relay - Alertmanager webhook to Gotify push notifications."""

__version__ = "1.1.0"
