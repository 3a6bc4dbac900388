"""Epoch-seconds clock used for item expiry."""

import time


def in_seconds() -> int:
    """Return the current Unix timestamp in whole seconds."""
    return int(time.time())
