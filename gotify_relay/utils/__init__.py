"""Utilities for the relay."""

from .cache import DedupCache
from .network import get_local_ip

__all__ = ["DedupCache", "get_local_ip"]
