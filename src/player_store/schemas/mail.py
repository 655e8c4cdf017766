# src/player_store/schemas/mail.py
"""Mailbox result schemas."""

from __future__ import annotations

from typing import NamedTuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MailboxItem(BaseModel):
    """Summary of one message in a player's mailbox."""

    id: int = Field(..., description="Strictly increasing mail identifier")
    timestamp: int = Field(..., description="Send time in epoch seconds")
    sender: UUID
    read: bool

    model_config = ConfigDict(frozen=True)


class MailMessage(NamedTuple):
    """Sender and body of a message returned by a successful read."""

    sender: UUID
    message: str
