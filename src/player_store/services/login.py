"""Hooks run when a player connects to the network."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Final
from uuid import UUID

from player_store.core.settings import Settings
from player_store.services.storage import Store

# Nicknames containing this placeholder follow the username, so they survive renames.
USERNAME_PLACEHOLDER: Final[str] = "<username>"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginSummary:
    """What a login changed and what the player should be told about."""

    unread: int
    nickname_cleared: bool = False


class LoginService:
    """Keeps cached usernames and nicknames in step with player logins.

    Events arrive in connection order: :meth:`on_pre_connect` when the player
    connects, then :meth:`on_login` once they are in. The pre-connect hook
    remembers the name it replaced in the cache, so a rename is still seen by
    the login hook that follows it.
    """

    def __init__(self, store: Store, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or store.settings
        self._replaced: dict[UUID, str] = {}
        self._lock = Lock()

    def on_pre_connect(self, identity: UUID, username: str) -> None:
        """Record the username a player is connecting with."""
        previous = self.store.lookup_username(identity)
        self.store.ensure_cached_username(identity, username)
        with self._lock:
            if previous is not None and previous != username:
                self._replaced[identity] = previous
            else:
                self._replaced.pop(identity, None)

    def on_login(self, identity: UUID, username: str) -> LoginSummary:
        """Apply login side effects and report the unread mail count."""
        with self._lock:
            previous = self._replaced.pop(identity, None)
        if previous is None:
            previous = self.store.lookup_username(identity)

        unread = self.store.count_unread(identity)
        cleared = self._clear_stale_nickname(identity, previous, username)
        return LoginSummary(unread=unread, nickname_cleared=cleared)

    def _clear_stale_nickname(self, identity: UUID, previous: str | None, username: str) -> bool:
        if not self.settings.clear_nickname_on_change:
            return False
        if previous is None or previous == username:
            return False
        nickname = self.store.get_nickname(identity)
        if nickname is None or USERNAME_PLACEHOLDER in nickname:
            return False
        self.store.remove_nickname(identity)
        logger.info("Cleared nickname of %s after rename from %s to %s", identity, previous, username)
        return True
