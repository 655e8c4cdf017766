"""Utility script to create, reset or inspect the configured player store."""
from __future__ import annotations

import argparse
import logging
import sys
from uuid import UUID

from player_store.core.settings import Settings, settings
from player_store.db.session import drop_tables
from player_store.errors import StoreError
from player_store.services.storage import Store


def describe_player(store: Store, identity: UUID) -> list[str]:
    """Return a human-readable summary of everything stored for ``identity``."""
    lines = [
        f"identity: {identity}",
        f"username: {store.lookup_username(identity)}",
        f"nickname: {store.get_nickname(identity)}",
        f"about: {store.get_profile(identity)}",
    ]
    for key, raw in store.get_all_settings(identity).items():
        lines.append(f"setting {key}: {raw.data}")
    messages = store.list_messages(identity)
    unread = sum(1 for item in messages if not item.read)
    lines.append(f"mail: {len(messages)} total, {unread} unread")
    return lines


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Ensure, reset or inspect the player store")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every player store table before recreating them.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    parser.add_argument(
        "--inspect",
        type=UUID,
        default=None,
        metavar="UUID",
        help="Print the stored state of one player.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    config = settings
    if args.url:
        config = Settings(database_url=args.url)

    try:
        if args.drop_tables:
            with Store(config) as store:
                drop_tables(store.engine)
            print("[ensure_db] dropped all player store tables")
        with Store(config) as store:
            print(f"[ensure_db] tables ready at {config.effective_database_url}")
            if args.inspect is not None:
                for line in describe_player(store, args.inspect):
                    print(line)
    except StoreError as exc:
        print(f"[ensure_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
