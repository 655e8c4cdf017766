"""Tests for the username cache and its persisted mirror."""

from uuid import uuid4

import pytest

from player_store.services.storage import Store
from player_store.services.username_cache import UsernameCache, UsernameSnapshot
from tests.helpers import build_settings


def test_rebuild_publishes_both_directions() -> None:
    cache = UsernameCache()
    alice, bob = uuid4(), uuid4()

    snapshot = cache.rebuild([(alice, "Alice"), (bob, "Bob")])

    assert snapshot is cache.snapshot
    assert cache.lookup_username(alice) == "Alice"
    assert cache.lookup_identity("Bob") == bob
    assert cache.lookup_identity("Carol") is None


def test_rebuild_replaces_snapshot_without_touching_the_old_one() -> None:
    cache = UsernameCache()
    alice = uuid4()

    old = cache.rebuild([(alice, "Alice")])
    new = cache.rebuild([(alice, "Bob")])

    assert new.generation == old.generation + 1
    assert old.by_username == {"Alice": alice}
    assert new.by_username == {"Bob": alice}


def test_snapshot_is_read_only() -> None:
    snapshot = UsernameSnapshot.from_rows([(uuid4(), "Alice")], generation=1)
    with pytest.raises(TypeError):
        snapshot.by_username["Mallory"] = uuid4()


def test_empty_cache_resolves_nothing() -> None:
    cache = UsernameCache()
    assert len(cache.snapshot) == 0
    assert cache.lookup_username(uuid4()) is None


def test_ensure_cached_username_updates_both_lookups(store, alice) -> None:
    store.ensure_cached_username(alice, "Alice")

    assert store.lookup_username(alice) == "Alice"
    assert store.lookup_identity("Alice") == alice


def test_rename_drops_the_old_reverse_entry(store, alice) -> None:
    store.ensure_cached_username(alice, "Alice")
    store.ensure_cached_username(alice, "Bob")

    assert store.lookup_username(alice) == "Bob"
    assert store.lookup_identity("Bob") == alice
    assert store.lookup_identity("Alice") is None


def test_cache_covers_every_persisted_row(store, alice, bob) -> None:
    store.ensure_cached_username(alice, "Alice")
    store.ensure_cached_username(bob, "Bob")

    assert dict(store.usernames.snapshot.by_identity) == {alice: "Alice", bob: "Bob"}


def test_store_primes_cache_on_open(test_settings, alice) -> None:
    with Store(test_settings) as first:
        first.ensure_cached_username(alice, "Alice")

    with Store(test_settings) as second:
        assert second.lookup_identity("Alice") == alice


def test_priming_can_be_disabled(db_path, alice) -> None:
    with Store(build_settings(db_path)) as first:
        first.ensure_cached_username(alice, "Alice")

    with Store(build_settings(db_path, prime_username_cache=False)) as lazy:
        assert lazy.lookup_identity("Alice") is None
        lazy.refresh_username_cache()
        assert lazy.lookup_identity("Alice") == alice
