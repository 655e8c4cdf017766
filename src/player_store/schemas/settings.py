# src/player_store/schemas/settings.py
"""Typed setting kinds stored per identity.

Each kind is a pydantic model. Unknown fields are ignored on decode so rows
written by a newer release still load, and new optional fields can be added
without touching stored rows. Keys are assigned in ``services.codec``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SettingModel(BaseModel):
    """Base class for all setting kinds."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class SpySetting(SettingModel):
    """Whether the player sees other players' commands."""

    enabled: bool
