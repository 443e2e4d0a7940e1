"""Default time source for locktime checks."""

from __future__ import annotations

import time


def unix_now() -> int:
    """Current UNIX timestamp in whole seconds."""
    return int(time.time())
