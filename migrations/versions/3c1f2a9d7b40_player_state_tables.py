"""player state tables

Revision ID: 3c1f2a9d7b40
Revises:
Create Date: 2026-10-18 09:12:44.518306

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the five player state tables."""
    op.create_table(
        "about",
        sa.Column("about_uuid", sa.String(length=36), nullable=False),
        sa.Column("about_about", sa.String(length=512), nullable=False),
        sa.PrimaryKeyConstraint("about_uuid"),
    )
    op.create_table(
        "mail",
        sa.Column("mail_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mail_timestamp", sa.Integer(), nullable=False),
        sa.Column("mail_sender", sa.String(length=36), nullable=False),
        sa.Column("mail_recipient", sa.String(length=36), nullable=False),
        sa.Column("mail_read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("mail_message", sa.String(length=512), nullable=False),
        sa.PrimaryKeyConstraint("mail_id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_mail_mail_sender", "mail", ["mail_sender"])
    op.create_index("ix_mail_mail_recipient", "mail", ["mail_recipient"])
    op.create_table(
        "nick",
        sa.Column("nick_uuid", sa.String(length=36), nullable=False),
        sa.Column("nick_nick", sa.String(length=2048), nullable=False),
        sa.PrimaryKeyConstraint("nick_uuid"),
    )
    op.create_table(
        "username_cache",
        sa.Column("cache_user", sa.String(length=36), nullable=False),
        sa.Column("cache_username", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("cache_user"),
    )
    op.create_index("ix_username_cache_cache_username", "username_cache", ["cache_username"])
    op.create_table(
        "setting",
        sa.Column("setting_uuid", sa.String(length=36), nullable=False),
        sa.Column("setting_key", sa.String(length=16), nullable=False),
        sa.Column("setting_value", sa.LargeBinary(), nullable=False),
        sa.PrimaryKeyConstraint("setting_uuid", "setting_key"),
    )
    op.create_index("ix_setting_setting_uuid", "setting", ["setting_uuid"])
    op.create_index("ix_setting_setting_key", "setting", ["setting_key"])


def downgrade() -> None:
    """Drop the player state tables."""
    op.drop_index("ix_setting_setting_key", table_name="setting")
    op.drop_index("ix_setting_setting_uuid", table_name="setting")
    op.drop_table("setting")
    op.drop_index("ix_username_cache_cache_username", table_name="username_cache")
    op.drop_table("username_cache")
    op.drop_table("nick")
    op.drop_index("ix_mail_mail_recipient", table_name="mail")
    op.drop_index("ix_mail_mail_sender", table_name="mail")
    op.drop_table("mail")
    op.drop_table("about")
