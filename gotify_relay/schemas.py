"""Core data models."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AlertStatus(str, Enum):
    """State reported by Alertmanager."""

    FIRING = "firing"
    RESOLVED = "resolved"


class Alert(BaseModel):
    """Single alert as posted by Alertmanager."""

    # Kept as a plain string: an empty or unknown status must still fingerprint.
    status: str = Field("", description="firing or resolved")
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    startsAt: Optional[str] = None
    endsAt: Optional[str] = None
    generatorURL: Optional[str] = None

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def is_firing(self) -> bool:
        return self.status == AlertStatus.FIRING.value


class AlertBatch(BaseModel):
    """Alertmanager webhook body."""

    alerts: List[Alert]

    model_config = {"extra": "ignore"}


class GotifyMessage(BaseModel):
    """Payload accepted by the Gotify message endpoint."""

    title: str
    message: str
    priority: int


class AlertOutcome(str, Enum):
    """What the pipeline did with one alert."""

    SENT = "sent"
    DUPLICATE = "duplicate"


class BatchResult(BaseModel):
    """Per-batch counters returned by the ingestion pipeline."""

    received: int = 0
    sent: int = 0
    duplicates: int = 0
