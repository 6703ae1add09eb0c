"""Base notifier interface."""

from abc import ABC, abstractmethod

from gotify_relay.schemas import Alert, GotifyMessage

FIRING_TITLE = "🚨 New alert"
RESOLVED_TITLE = "✅ Resolved"
FIRING_PRIORITY = 5
RESOLVED_PRIORITY = 1
DEFAULT_ALERTNAME = "Alert"
DEFAULT_BODY = "No description"


class BaseNotifier(ABC):
    """Interface for sending one push notification per alert."""

    @abstractmethod
    async def send(self, message: GotifyMessage, fingerprint: str) -> None:
        """Deliver a formatted message. Raises on failure."""
        pass

    async def notify(self, alert: Alert, fingerprint: str) -> GotifyMessage:
        """Format and deliver an alert. Returns the message sent."""
        message = self.create_message(alert)
        await self.send(message, fingerprint)
        return message

    def create_message(self, alert: Alert) -> GotifyMessage:
        """Convert Alert to a Gotify message."""
        alertname = alert.labels.get("alertname") or DEFAULT_ALERTNAME
        body = (
            alert.annotations.get("description")
            or alert.annotations.get("summary")
            or DEFAULT_BODY
        )

        if alert.is_firing:
            title, priority = FIRING_TITLE, FIRING_PRIORITY
        else:
            title, priority = RESOLVED_TITLE, RESOLVED_PRIORITY

        return GotifyMessage(title=title, message=f"{alertname}: {body}", priority=priority)

    async def close(self) -> None:
        """Release any transport resources."""
        pass
