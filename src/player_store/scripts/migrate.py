# src/player_store/scripts/migrate.py
"""Apply alembic migrations to the configured player store."""
from __future__ import annotations

import logging
import os

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from player_store.core.settings import settings
from player_store.db.session import Base

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_config(url: str | None = None) -> Config:
    """Return an alembic config pointing at the bundled migrations."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", url or settings.effective_database_url)
    return cfg


def is_unversioned_store(url: str) -> bool:
    """Return True if every store table exists but alembic has never run.

    A :class:`~player_store.services.storage.Store` creates its tables on
    open, so storage files it has used carry the head schema without a
    revision row.
    """
    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    return "alembic_version" not in tables and set(Base.metadata.tables) <= tables


def run_upgrade_head(url: str | None = None) -> None:
    cfg = build_config(url)
    target = cfg.get_main_option("sqlalchemy.url")
    if is_unversioned_store(target):
        logger.info("Stamping existing player store at %s as head", target)
        command.stamp(cfg, "head")
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
