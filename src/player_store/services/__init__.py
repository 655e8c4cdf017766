"""Storage services for the player store."""

from .codec import RawSetting, SettingKind, SettingRegistry, default_registry
from .login import LoginService, LoginSummary
from .storage import Store
from .username_cache import UsernameCache, UsernameSnapshot

__all__ = [
    "RawSetting",
    "SettingKind",
    "SettingRegistry",
    "default_registry",
    "LoginService",
    "LoginSummary",
    "Store",
    "UsernameCache",
    "UsernameSnapshot",
]
