# src/player_store/models/__init__.py
"""SQLAlchemy models for the player store."""

from .about import About
from .mail import Mail
from .nick import Nick
from .setting import SettingEntry
from .username_cache import UsernameCacheEntry

__all__ = [
    "About",
    "Mail",
    "Nick",
    "SettingEntry",
    "UsernameCacheEntry",
]
