from datetime import datetime, timezone
from typing import Any

SECONDS_PER_DAY = 86400


def iso_to_ts(value: Any) -> float:
    """Parse an ISO-8601 date/datetime string to epoch seconds.

    Naive values are read as UTC, a trailing "Z" is accepted.
    Returns 0 for missing or unparsable input.

    Examples:
        `2024-01-01` -> `1704067200.0`
        `2024-01-01T09:00:00+09:00` -> `1704067200.0`
    """
    if not isinstance(value, str) or not value.strip():
        return 0
    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return 0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def age_days(ts: float, now_ts: float) -> float:
    """Age in days of `ts` relative to `now_ts`; future dates count as 0."""
    return max(0.0, now_ts - ts) / SECONDS_PER_DAY
