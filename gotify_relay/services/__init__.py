"""Background services."""

from .sweeper import CacheSweeper

__all__ = ["CacheSweeper"]
