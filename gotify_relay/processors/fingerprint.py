"""Alert fingerprinting."""

from gotify_relay.schemas import Alert

SEPARATOR = "|"


def generate_fingerprint(alert: Alert) -> str:
    """
    Build the dedup key for an alert.

    Same alertname, same instance and same status means the same alert;
    annotations and timestamps are ignored.
    """
    return SEPARATOR.join([
        alert.labels.get("alertname") or "",
        alert.labels.get("instance") or "",
        alert.status or "",
    ])
