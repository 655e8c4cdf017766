# src/player_store/models/about.py
"""Model storing free-text profile blurbs."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from player_store.db.session import Base


class About(Base):
    """Profile text shown for a player, one row per identity."""

    __tablename__ = "about"

    uuid: Mapped[str] = mapped_column("about_uuid", String(36), primary_key=True)
    about: Mapped[str] = mapped_column("about_about", String(512), nullable=False)
