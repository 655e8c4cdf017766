"""Shared helpers for the test suite."""

from pathlib import Path

from player_store.core.settings import Settings
from player_store.schemas.settings import SettingModel


class VolumeSetting(SettingModel):
    """Extra setting kind used to exercise the registry."""

    level: int
    muted: bool = False


def build_settings(path: Path, **overrides) -> Settings:
    """Return settings bound to a SQLite file, ignoring any DATABASE_URL in the environment."""
    return Settings(storage_path=str(path), database_url=None, **overrides)
