# src/player_store/db/time.py
"""Time utilities for database models."""

import time


def epoch_seconds() -> int:
    """Return the current server time as whole seconds since the epoch."""
    return int(time.time())
