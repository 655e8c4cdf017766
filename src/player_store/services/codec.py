"""Serialization of typed setting values.

Settings are stored as ``(identity, key, blob)`` rows so new kinds never need
a schema migration. This module owns the registration table that maps each
setting kind to its stable key and turns values into JSON payloads and back.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, TypeVar

from pydantic import ValidationError

from player_store.errors import DecodeError, UnsupportedKind
from player_store.schemas.settings import SettingModel, SpySetting

logger = logging.getLogger(__name__)

MAX_KEY_LENGTH: Final[int] = 16

S = TypeVar("S", bound=SettingModel)


@dataclass(frozen=True)
class SettingKind:
    """Registration entry pairing a setting model with its storage key."""

    key: str
    model: type[SettingModel]


class SettingRegistry:
    """Explicit table of the setting kinds the store can encode and decode."""

    def __init__(self, kinds: Mapping[str, type[SettingModel]] | None = None) -> None:
        self._by_key: dict[str, SettingKind] = {}
        self._by_model: dict[type[SettingModel], SettingKind] = {}
        for key, model in (kinds or {}).items():
            self.add(key, model)

    def add(self, key: str, model: type[SettingModel]) -> SettingKind:
        """Register ``model`` under ``key``.

        Raises:
            ValueError: If the key is empty, too long, or already taken, or the
                model is already registered under another key.
        """
        if not key or len(key) > MAX_KEY_LENGTH:
            raise ValueError(f"Setting key must be 1-{MAX_KEY_LENGTH} characters: {key!r}")
        if key in self._by_key:
            raise ValueError(f"Setting key {key!r} is already registered")
        if model in self._by_model:
            raise ValueError(f"{model.__name__} is already registered as {self._by_model[model].key!r}")

        kind = SettingKind(key=key, model=model)
        self._by_key[key] = kind
        self._by_model[model] = kind
        return kind

    def register(self, key: str):
        """Class decorator form of :meth:`add`."""

        def decorator(model: type[S]) -> type[S]:
            self.add(key, model)
            return model

        return decorator

    def __contains__(self, model: object) -> bool:
        return model in self._by_model

    def __iter__(self) -> Iterator[SettingKind]:
        return iter(self._by_key.values())

    def key_for(self, kind: type[SettingModel]) -> str:
        """Return the storage key for ``kind``."""
        try:
            return self._by_model[kind].key
        except (KeyError, TypeError):
            raise UnsupportedKind(f"Unsupported setting kind: {kind!r}") from None

    def kind_for(self, key: str) -> type[SettingModel] | None:
        """Return the model registered under ``key``, if any."""
        entry = self._by_key.get(key)
        return entry.model if entry else None

    def encode(self, value: SettingModel) -> bytes:
        """Serialize ``value`` to a JSON payload."""
        self.key_for(type(value))
        return value.model_dump_json(indent=4).encode("utf-8")

    def decode(self, payload: bytes, kind: type[S]) -> S:
        """Rebuild a ``kind`` instance from ``payload``.

        Raises:
            UnsupportedKind: If ``kind`` is not registered.
            DecodeError: If the payload is malformed or does not match ``kind``.
        """
        key = self.key_for(kind)
        try:
            return kind.model_validate_json(payload.decode("utf-8"))
        except (UnicodeDecodeError, ValidationError) as exc:
            logger.warning("Setting payload for %r failed validation: %s", key, exc)
            raise DecodeError(key, str(exc)) from exc


@dataclass(frozen=True)
class RawSetting:
    """A stored setting whose concrete kind has not been chosen yet.

    ``registry`` is the table of the store that read the row; it is used by
    :meth:`decode` when the caller does not pass one.
    """

    key: str
    payload: bytes
    registry: SettingRegistry | None = field(default=None, compare=False, repr=False)

    @property
    def data(self) -> Any:
        """Return the payload parsed as plain JSON data."""
        try:
            return json.loads(self.payload)
        except ValueError as exc:
            raise DecodeError(self.key, str(exc)) from exc

    def decode(self, kind: type[S], registry: SettingRegistry | None = None) -> S:
        """Decode the payload as ``kind`` once the caller knows it.

        Raises:
            UnsupportedKind: If ``kind`` is not registered.
            DecodeError: If ``kind`` is stored under another key, or the payload
                does not validate.
        """
        registry = registry or self.registry or default_registry
        expected = registry.key_for(kind)
        if expected != self.key:
            logger.warning("Setting %r requested as %r", self.key, expected)
            raise DecodeError(self.key, f"stored under {self.key!r}, not {expected!r}")
        return registry.decode(self.payload, kind)


default_registry = SettingRegistry({"spy": SpySetting})


def key_for(kind: type[SettingModel]) -> str:
    """Return the storage key for ``kind`` in the default registry."""
    return default_registry.key_for(kind)


def encode(value: SettingModel) -> bytes:
    """Encode ``value`` with the default registry."""
    return default_registry.encode(value)


def decode(payload: bytes, kind: type[S]) -> S:
    """Decode ``payload`` as ``kind`` with the default registry."""
    return default_registry.decode(payload, kind)
