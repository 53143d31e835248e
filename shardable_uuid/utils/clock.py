"""Wall-clock source for identifier timestamps."""

import time
from typing import Optional

from shardable_uuid.database.schema import Stamp


def stamp(epoch: int = 0, now: Optional[float] = None) -> Stamp:
    """Returns the whole seconds since ``epoch`` and the millisecond-of-second.

    Args:
        epoch: Reference epoch in Unix seconds.
        now: Unix time in seconds to stamp instead of the current time.

    Returns:
        A Stamp with ``sec`` and ``msec`` (0-999).
    """
    if now is None:
        millis = time.time_ns() // 1_000_000
    else:
        millis = round(now * 1000)
    sec, msec = divmod(millis, 1000)
    return Stamp(sec=sec - epoch, msec=msec)
