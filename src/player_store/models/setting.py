# src/player_store/models/setting.py
"""Model storing opaque per-identity settings."""

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from player_store.db.session import Base


class SettingEntry(Base):
    """Encoded setting value keyed by (identity, setting key).

    The value is never interpreted at this layer; see ``services.codec``.
    """

    __tablename__ = "setting"

    uuid: Mapped[str] = mapped_column("setting_uuid", String(36), primary_key=True, index=True)
    key: Mapped[str] = mapped_column("setting_key", String(16), primary_key=True, index=True)
    value: Mapped[bytes] = mapped_column("setting_value", LargeBinary, nullable=False)
