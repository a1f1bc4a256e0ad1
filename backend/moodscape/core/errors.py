"""Error kinds raised by the mood store and its callers."""

from __future__ import annotations


class MoodStoreError(Exception):
    """Base class for mood store errors."""


class StorageUnavailable(MoodStoreError):
    """Raised when the underlying database cannot be read or written."""


class NotFound(MoodStoreError):
    """Raised by explicit get-by-key lookups when the key is absent."""


class InvalidInput(MoodStoreError):
    """Raised when caller-supplied data fails validation."""
