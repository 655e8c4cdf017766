# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from player_store.core.settings import Settings
from player_store.schemas.settings import SpySetting
from player_store.services.codec import SettingRegistry
from player_store.services.storage import Store
from tests.helpers import VolumeSetting, build_settings


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "storage.db"


@pytest.fixture()
def test_settings(db_path: Path) -> Settings:
    """Provide settings pointing at a per-test database file."""
    return build_settings(db_path)


@pytest.fixture()
def registry() -> SettingRegistry:
    """Return a registry holding the built-in kinds plus ``VolumeSetting``."""
    return SettingRegistry({"spy": SpySetting, "volume": VolumeSetting})


@pytest.fixture()
def store(test_settings: Settings) -> Iterator[Store]:
    """Open a store with the default setting registry."""
    with Store(test_settings) as opened:
        yield opened


@pytest.fixture()
def extended_store(test_settings: Settings, registry: SettingRegistry) -> Iterator[Store]:
    """Open a store that also knows ``VolumeSetting``."""
    with Store(test_settings, registry=registry) as opened:
        yield opened


@pytest.fixture()
def alice() -> UUID:
    return uuid4()


@pytest.fixture()
def bob() -> UUID:
    return uuid4()


@pytest.fixture()
def carol() -> UUID:
    return uuid4()
