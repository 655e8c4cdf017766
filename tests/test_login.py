"""Tests for the login hooks."""

import pytest

from player_store.services.login import LoginService, LoginSummary
from player_store.services.storage import Store
from tests.helpers import build_settings


@pytest.fixture()
def clearing_store(db_path):
    with Store(build_settings(db_path, clear_nickname_on_change=True)) as opened:
        yield opened


def test_pre_connect_caches_username(store, alice) -> None:
    LoginService(store).on_pre_connect(alice, "Alice")
    assert store.lookup_identity("Alice") == alice


def test_login_reports_unread_mail(store, alice, bob) -> None:
    store.send_message(bob, alice, "one")
    read_id = store.send_message(bob, alice, "two")
    store.read_message(alice, read_id)

    summary = LoginService(store).on_login(alice, "Alice")

    assert summary == LoginSummary(unread=1, nickname_cleared=False)


def test_rename_clears_nickname_when_enabled(clearing_store, alice) -> None:
    service = LoginService(clearing_store)
    service.on_pre_connect(alice, "Alice")
    clearing_store.set_nickname(alice, "<gold>Queen Alice</gold>")

    summary = service.on_login(alice, "Alicia")

    assert summary.nickname_cleared is True
    assert clearing_store.get_nickname(alice) is None


def test_rename_keeps_nickname_with_username_placeholder(clearing_store, alice) -> None:
    service = LoginService(clearing_store)
    service.on_pre_connect(alice, "Alice")
    clearing_store.set_nickname(alice, "<gold><username></gold>")

    summary = service.on_login(alice, "Alicia")

    assert summary.nickname_cleared is False
    assert clearing_store.get_nickname(alice) == "<gold><username></gold>"


def test_same_username_keeps_nickname(clearing_store, alice) -> None:
    service = LoginService(clearing_store)
    service.on_pre_connect(alice, "Alice")
    clearing_store.set_nickname(alice, "Ally")

    assert service.on_login(alice, "Alice").nickname_cleared is False
    assert clearing_store.get_nickname(alice) == "Ally"


def test_first_login_keeps_nickname(clearing_store, alice) -> None:
    clearing_store.set_nickname(alice, "Ally")

    assert LoginService(clearing_store).on_login(alice, "Alice").nickname_cleared is False
    assert clearing_store.get_nickname(alice) == "Ally"


def test_rename_keeps_nickname_when_disabled(store, alice) -> None:
    service = LoginService(store)
    service.on_pre_connect(alice, "Alice")
    store.set_nickname(alice, "Ally")

    assert service.on_login(alice, "Alicia").nickname_cleared is False
    assert store.get_nickname(alice) == "Ally"


def test_rename_is_seen_when_pre_connect_runs_first(clearing_store, alice) -> None:
    """The usual order: pre-connect refreshes the cache, then login follows."""
    service = LoginService(clearing_store)
    service.on_pre_connect(alice, "Alice")
    clearing_store.set_nickname(alice, "Ally")

    service.on_pre_connect(alice, "Alicia")
    summary = service.on_login(alice, "Alicia")

    assert summary.nickname_cleared is True
    assert clearing_store.get_nickname(alice) is None
    assert clearing_store.lookup_username(alice) == "Alicia"


def test_reconnect_under_same_name_forgets_rename(clearing_store, alice) -> None:
    service = LoginService(clearing_store)
    service.on_pre_connect(alice, "Alice")
    service.on_pre_connect(alice, "Alicia")
    assert service.on_login(alice, "Alicia").nickname_cleared is False

    clearing_store.set_nickname(alice, "Ally")
    service.on_pre_connect(alice, "Alicia")

    assert service.on_login(alice, "Alicia").nickname_cleared is False
    assert clearing_store.get_nickname(alice) == "Ally"
