"""Saved job records."""

from .store import JobStore

__all__ = ["JobStore"]
