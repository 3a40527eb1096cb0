"""Epoch-millisecond timestamp helpers.

Every place that groups or displays sales by day uses ``utc_day`` so the
daily chart, the CSV ledger and the audit pack always agree on which day a
sale belongs to.
"""

import time
from datetime import UTC, date, datetime


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def to_utc_datetime(timestamp_ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def utc_day(timestamp_ms: int) -> date:
    """Truncate epoch milliseconds to the UTC calendar day."""
    return to_utc_datetime(timestamp_ms).date()


def utc_today() -> date:
    return utc_day(now_ms())


def to_iso(timestamp_ms: int) -> str:
    """Render epoch milliseconds as ISO-8601 with a trailing Z."""
    return to_utc_datetime(timestamp_ms).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )
