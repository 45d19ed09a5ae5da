# ==============================================================================
# Expiration Timestamps
# ==============================================================================
"""
Helpers for turning TTLs into Unix-second expiration timestamps.

All functions take `now` explicitly so that callers read the clock once per
operation.
"""

import time
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], float]

DEFAULT_FOREVER_YEARS = 5


def current_timestamp(clock: Clock = time.time) -> int:
    """Current Unix time in whole seconds."""
    return int(clock())


def to_timestamp(seconds: int, now: int) -> int:
    """
    Expiration timestamp for a TTL.

    A non-positive TTL yields `now`, which readers treat as already expired.
    """
    return now + seconds if seconds > 0 else now


def forever_timestamp(now: int, years: int = DEFAULT_FOREVER_YEARS) -> int:
    """Timestamp `years` calendar years after `now`, used for 'indefinite' entries."""
    moment = datetime.fromtimestamp(now, tz=timezone.utc)
    try:
        later = moment.replace(year=moment.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        later = moment.replace(year=moment.year + years, day=28)
    return int(later.timestamp())
