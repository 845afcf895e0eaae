"""Resource age calculation."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]

SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # Naive timestamps are assumed to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_in_days(created_at: datetime, now: datetime) -> int:
    """Whole days elapsed between creation and now.

    Computed as floor((now - created_at) / 86400 seconds). A creation time in
    the future yields a negative age.

    Args:
        created_at: Resource creation time
        now: Reference time

    Returns:
        Elapsed days, floored
    """
    elapsed = as_utc(now) - as_utc(created_at)
    return int(elapsed.total_seconds() // SECONDS_PER_DAY)
