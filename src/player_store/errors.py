"""Exceptions raised by the player store.

Missing rows are not errors: lookups return ``None`` for them. Everything
below surfaces synchronously to the caller and is never retried here.
"""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base exception for player store failures."""


class UnsupportedKind(StoreError):
    """Raised when a setting kind has not been registered with the codec."""


class DecodeError(StoreError):
    """Raised when a stored setting payload cannot be decoded as the requested kind.

    The offending row is left in place.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Cannot decode setting {key!r}: {reason}")
        self.key = key
        self.reason = reason


class StorageUnavailable(StoreError):
    """Raised when the backing database cannot be reached or a unit of work fails to commit."""
