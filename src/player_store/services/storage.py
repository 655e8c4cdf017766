"""Persistence façade for per-player state.

The :class:`Store` owns the engine for the backing SQLite file and the
username cache. Every public method runs exactly one unit of work and returns
plain values; a missing row is reported as ``None``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock
from typing import TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from player_store.core.settings import Settings
from player_store.db.session import (
    create_session_factory,
    create_store_engine,
    create_tables,
    session_scope,
)
from player_store.db.time import epoch_seconds
from player_store.errors import StorageUnavailable, UnsupportedKind
from player_store.models import About, Mail, Nick, SettingEntry, UsernameCacheEntry
from player_store.schemas.mail import MailboxItem, MailMessage
from player_store.schemas.settings import SettingModel
from player_store.services.codec import RawSetting, SettingRegistry, default_registry
from player_store.services.username_cache import UsernameCache

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=SettingModel)


class Store:
    """Profile, nickname, setting, username and mailbox storage for players."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        registry: SettingRegistry | None = None,
    ) -> None:
        """Open the backing database and create missing tables.

        Args:
            settings: Storage configuration. A fresh :class:`Settings` is read
                from the environment when omitted.
            registry: Setting kinds this store can encode and decode.
        """
        self.settings = settings or Settings()
        self.registry = registry or default_registry
        self.usernames = UsernameCache()
        self._cache_write_lock = Lock()

        url = self.settings.effective_database_url
        try:
            self.engine = create_store_engine(
                url,
                echo=self.settings.sql_debug,
                busy_timeout=self.settings.sqlite_busy_timeout,
            )
            create_tables(self.engine)
        except SQLAlchemyError as exc:
            logger.error("Could not open player store at %s: %s", url, exc)
            raise StorageUnavailable(f"Could not open player store: {exc}") from exc
        self._session_factory = create_session_factory(self.engine)
        logger.info("Opened player store at %s", url)

        if self.settings.prime_username_cache:
            self.refresh_username_cache()

    def close(self) -> None:
        """Release the database engine."""
        self.engine.dispose()
        logger.info("Closed player store")

    def __enter__(self) -> Store:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @contextmanager
    def _unit_of_work(self) -> Iterator[Session]:
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Player store unit of work failed: %s", exc)
            raise StorageUnavailable(str(exc)) from exc

    # --- Profile ----------------------------------------------------------------
    def set_profile(self, identity: UUID, text: str) -> None:
        """Store the profile text for ``identity``, replacing any previous text."""
        stmt = insert(About).values({About.uuid: str(identity), About.about: text})
        stmt = stmt.on_conflict_do_update(index_elements=[About.uuid], set_={About.about: text})
        with self._unit_of_work() as session:
            session.execute(stmt)

    def get_profile(self, identity: UUID) -> str | None:
        """Return the profile text for ``identity``."""
        with self._unit_of_work() as session:
            return session.scalar(select(About.about).where(About.uuid == str(identity)))

    # --- Nicknames --------------------------------------------------------------
    def set_nickname(self, identity: UUID, nickname: str) -> None:
        """Store the display nickname for ``identity``."""
        stmt = insert(Nick).values({Nick.uuid: str(identity), Nick.nick: nickname})
        stmt = stmt.on_conflict_do_update(index_elements=[Nick.uuid], set_={Nick.nick: nickname})
        with self._unit_of_work() as session:
            session.execute(stmt)

    def get_nickname(self, identity: UUID) -> str | None:
        """Return the display nickname for ``identity``."""
        with self._unit_of_work() as session:
            return session.scalar(select(Nick.nick).where(Nick.uuid == str(identity)))

    def remove_nickname(self, identity: UUID) -> bool:
        """Delete the nickname for ``identity``.

        Returns:
            True if a nickname was removed, False if there was none.
        """
        with self._unit_of_work() as session:
            result = session.execute(delete(Nick).where(Nick.uuid == str(identity)))
            return result.rowcount > 0

    # --- Settings ---------------------------------------------------------------
    def set_setting(self, identity: UUID, kind: type[S], value: S) -> None:
        """Encode ``value`` and store it under ``kind``'s key for ``identity``.

        Raises:
            UnsupportedKind: If ``kind`` is not registered or ``value`` is not a ``kind``.
        """
        key = self.registry.key_for(kind)
        if not isinstance(value, kind):
            raise UnsupportedKind(f"{type(value).__name__} cannot be stored as setting {key!r}")
        payload = self.registry.encode(value)

        stmt = insert(SettingEntry).values(
            {SettingEntry.uuid: str(identity), SettingEntry.key: key, SettingEntry.value: payload}
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SettingEntry.uuid, SettingEntry.key],
            set_={SettingEntry.value: payload},
        )
        with self._unit_of_work() as session:
            session.execute(stmt)

    def get_raw_setting(self, identity: UUID, key: str) -> bytes | None:
        """Return the stored payload for ``key`` without decoding it."""
        with self._unit_of_work() as session:
            return session.scalar(
                select(SettingEntry.value).where(
                    SettingEntry.uuid == str(identity),
                    SettingEntry.key == key,
                )
            )

    def get_setting(self, identity: UUID, kind: type[S]) -> S | None:
        """Return the ``kind`` setting for ``identity``.

        Raises:
            UnsupportedKind: If ``kind`` is not registered.
            DecodeError: If a row exists but does not decode as ``kind``.
        """
        payload = self.get_raw_setting(identity, self.registry.key_for(kind))
        if payload is None:
            return None
        return self.registry.decode(payload, kind)

    def get_all_settings(self, identity: UUID) -> dict[str, RawSetting]:
        """Return every stored setting for ``identity`` keyed by setting key."""
        with self._unit_of_work() as session:
            rows = session.execute(
                select(SettingEntry.key, SettingEntry.value)
                .where(SettingEntry.uuid == str(identity))
                .order_by(SettingEntry.key)
            ).all()
        return {
            key: RawSetting(key=key, payload=value, registry=self.registry) for key, value in rows
        }

    def unset_setting(self, identity: UUID, key: str) -> None:
        """Delete the setting stored under ``key`` for ``identity``, if any."""
        with self._unit_of_work() as session:
            session.execute(
                delete(SettingEntry).where(
                    SettingEntry.uuid == str(identity),
                    SettingEntry.key == key,
                )
            )

    # --- Username cache ---------------------------------------------------------
    def ensure_cached_username(self, identity: UUID, username: str) -> None:
        """Record ``username`` as the latest name of ``identity`` and rebuild the cache.

        The rebuild scans the whole relation on every call; it has completed by
        the time this method returns.
        """
        stmt = insert(UsernameCacheEntry).values(
            {UsernameCacheEntry.uuid: str(identity), UsernameCacheEntry.username: username}
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UsernameCacheEntry.uuid],
            set_={UsernameCacheEntry.username: username},
        )
        with self._cache_write_lock:
            with self._unit_of_work() as session:
                session.execute(stmt)
                rows = self._scan_usernames(session)
            self.usernames.rebuild(rows)

    def refresh_username_cache(self) -> None:
        """Rebuild the username cache from every persisted row."""
        with self._cache_write_lock:
            with self._unit_of_work() as session:
                rows = self._scan_usernames(session)
            self.usernames.rebuild(rows)

    @staticmethod
    def _scan_usernames(session: Session) -> list[tuple[UUID, str]]:
        result = session.execute(
            select(UsernameCacheEntry.uuid, UsernameCacheEntry.username).order_by(
                UsernameCacheEntry.uuid
            )
        )
        return [(UUID(uuid), username) for uuid, username in result]

    def lookup_username(self, identity: UUID) -> str | None:
        """Return the cached username for ``identity``."""
        return self.usernames.lookup_username(identity)

    def lookup_identity(self, username: str) -> UUID | None:
        """Return the cached identity for ``username``."""
        return self.usernames.lookup_identity(username)

    # --- Mailbox ----------------------------------------------------------------
    def send_message(self, sender: UUID, recipient: UUID, message: str) -> int:
        """Leave an unread message for ``recipient``.

        Returns:
            The id assigned to the new message.
        """
        mail = Mail(
            timestamp=epoch_seconds(),
            sender=str(sender),
            recipient=str(recipient),
            read=False,
            message=message,
        )
        with self._unit_of_work() as session:
            session.add(mail)
            session.flush()
            mail_id = mail.id
        logger.debug("Stored mail %d for %s", mail_id, recipient)
        return mail_id

    def list_messages(self, recipient: UUID) -> list[MailboxItem]:
        """Return every message addressed to ``recipient``, newest first."""
        with self._unit_of_work() as session:
            mails = session.scalars(
                select(Mail)
                .where(Mail.recipient == str(recipient))
                .order_by(Mail.timestamp.desc(), Mail.id.desc())
            ).all()
            return [
                MailboxItem(
                    id=mail.id,
                    timestamp=mail.timestamp,
                    sender=UUID(mail.sender),
                    read=mail.read,
                )
                for mail in mails
            ]

    def count_unread(self, recipient: UUID) -> int:
        """Return how many messages addressed to ``recipient`` are still unread."""
        with self._unit_of_work() as session:
            return session.scalar(
                select(func.count())
                .select_from(Mail)
                .where(Mail.recipient == str(recipient), Mail.read.is_(False))
            ) or 0

    def read_message(self, recipient: UUID, mail_id: int) -> MailMessage | None:
        """Return a message and mark it read.

        Only messages addressed to ``recipient`` match; any other id yields
        ``None`` exactly as a missing id does.
        """
        with self._unit_of_work() as session:
            mail = session.scalars(
                select(Mail).where(Mail.id == mail_id, Mail.recipient == str(recipient))
            ).first()
            if mail is None:
                return None
            session.execute(
                update(Mail)
                .where(Mail.id == mail_id, Mail.read.is_(False))
                .values({Mail.read: True})
            )
            return MailMessage(sender=UUID(mail.sender), message=mail.message)
