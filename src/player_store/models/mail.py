# src/player_store/models/mail.py
"""Models describing mailbox messages between players."""

from sqlalchemy import Boolean, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column

from player_store.db.session import Base


class Mail(Base):
    """Directed text message left for a player to read later.

    Ids come from SQLite AUTOINCREMENT so they are never reused, even after
    rows are removed by external archival.
    """

    __tablename__ = "mail"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column("mail_id", Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[int] = mapped_column("mail_timestamp", Integer, nullable=False)
    sender: Mapped[str] = mapped_column("mail_sender", String(36), nullable=False, index=True)
    recipient: Mapped[str] = mapped_column("mail_recipient", String(36), nullable=False, index=True)
    # Flips to true once, on the first successful read.
    read: Mapped[bool] = mapped_column(
        "mail_read", Boolean, nullable=False, default=False, server_default=false()
    )
    message: Mapped[str] = mapped_column("mail_message", String(512), nullable=False)
