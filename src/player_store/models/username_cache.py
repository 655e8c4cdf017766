# src/player_store/models/username_cache.py
"""Persisted mirror of the last-known username per identity."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from player_store.db.session import Base


class UsernameCacheEntry(Base):
    """Latest username observed for an identity at login."""

    __tablename__ = "username_cache"

    uuid: Mapped[str] = mapped_column("cache_user", String(36), primary_key=True)
    username: Mapped[str] = mapped_column("cache_username", String(16), nullable=False, index=True)
