"""Relay error taxonomy."""

from typing import Optional


class RelayError(Exception):
    """Base class for errors surfaced to the webhook caller."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """Inbound payload is malformed."""

    status_code = 400


class ConfigurationError(RelayError):
    """Downstream notification URL is not configured."""

    status_code = 500


class DeliveryError(RelayError):
    """Downstream notification call failed."""

    status_code = 502

    def __init__(self, message: str, fingerprint: Optional[str] = None):
        super().__init__(message)
        self.fingerprint = fingerprint
