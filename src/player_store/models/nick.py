# src/player_store/models/nick.py
"""Model storing display nicknames."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from player_store.db.session import Base


class Nick(Base):
    """Display nickname for a player.

    The nickname is stored as rendered markup and may be long, hence the wide column.
    """

    __tablename__ = "nick"

    uuid: Mapped[str] = mapped_column("nick_uuid", String(36), primary_key=True)
    nick: Mapped[str] = mapped_column("nick_nick", String(2048), nullable=False)
