"""In-memory bidirectional username index.

The cache is derived state: every rebuild scans the persisted
``username_cache`` relation and publishes a brand new immutable snapshot, so
readers always see both directions from the same scan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from threading import Lock
from types import MappingProxyType
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsernameSnapshot:
    """One generation of the identity <-> username index."""

    by_identity: Mapping[UUID, str] = field(default_factory=lambda: MappingProxyType({}))
    by_username: Mapping[str, UUID] = field(default_factory=lambda: MappingProxyType({}))
    generation: int = 0

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[UUID, str]], generation: int) -> UsernameSnapshot:
        """Build a snapshot from ``(identity, username)`` pairs.

        When two identities share a username the later row wins the reverse lookup.
        """
        by_identity = dict(rows)
        by_username = {username: identity for identity, username in by_identity.items()}
        return cls(
            by_identity=MappingProxyType(by_identity),
            by_username=MappingProxyType(by_username),
            generation=generation,
        )

    def __len__(self) -> int:
        return len(self.by_identity)


class UsernameCache:
    """Holds the current :class:`UsernameSnapshot` and swaps it atomically."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._snapshot = UsernameSnapshot()

    @property
    def snapshot(self) -> UsernameSnapshot:
        """Return the most recently published snapshot."""
        return self._snapshot

    def rebuild(self, rows: Iterable[tuple[UUID, str]]) -> UsernameSnapshot:
        """Replace the cache contents with ``rows``."""
        with self._lock:
            snapshot = UsernameSnapshot.from_rows(rows, self._snapshot.generation + 1)
            self._snapshot = snapshot
        logger.debug(
            "Rebuilt username cache generation %d with %d entries",
            snapshot.generation,
            len(snapshot),
        )
        return snapshot

    def lookup_username(self, identity: UUID) -> str | None:
        """Return the last-known username for ``identity``."""
        return self._snapshot.by_identity.get(identity)

    def lookup_identity(self, username: str) -> UUID | None:
        """Return the identity that last logged in as ``username``."""
        return self._snapshot.by_username.get(username)
