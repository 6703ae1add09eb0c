"""Alert processors."""

from .dedup import DedupProcessor
from .fingerprint import generate_fingerprint

__all__ = ["DedupProcessor", "generate_fingerprint"]
