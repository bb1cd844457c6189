"""UTC datetime utilities."""

import math
from datetime import datetime, timezone

_SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp from the row API; naive values are taken as UTC."""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def time_ago(created_at: datetime, now: datetime | None = None) -> str:
    """Listing-card age label.

    Days are rounded up, so anything within the last 24h reads "1 day ago".
    """
    now = now or utc_now()
    diff_seconds = abs((now - created_at).total_seconds())
    diff_days = math.ceil(diff_seconds / _SECONDS_PER_DAY)

    if diff_days == 1:
        return "1 day ago"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    return f"{diff_days // 30} months ago"
