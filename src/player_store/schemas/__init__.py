# src/player_store/schemas/__init__.py
"""Pydantic schemas for setting kinds and mailbox results."""

from .mail import MailboxItem, MailMessage
from .settings import SettingModel, SpySetting

__all__ = ["MailboxItem", "MailMessage", "SettingModel", "SpySetting"]
