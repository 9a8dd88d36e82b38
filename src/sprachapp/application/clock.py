"""Time helpers. Timestamps are epoch milliseconds; day keys are UTC ISO dates."""

import time
from datetime import date, datetime, timezone


def now_ms() -> int:
    return int(time.time() * 1000)


def day_key(ts_ms: int) -> str:
    """Return the UTC calendar day (YYYY-MM-DD) of an epoch-milliseconds timestamp."""
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc).date().isoformat()


def days_between(earlier: str, later: str) -> int:
    """Whole calendar days from one day key to another (negative if `later` is earlier)."""
    return (date.fromisoformat(later) - date.fromisoformat(earlier)).days
