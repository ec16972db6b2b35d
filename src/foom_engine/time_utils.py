from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo


DEFAULT_TZ = "Africa/Nairobi"

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_SECONDS = 24 * 60 * 60


def now_local(tz_name: str = DEFAULT_TZ) -> datetime:
    return datetime.now(tz=ZoneInfo(tz_name))


def ms_to_hours(ms: float) -> float:
    return ms / HOUR_MS


def days_until(target: datetime, now: datetime) -> float:
    """Fractional days from ``now`` to ``target``; negative when overdue."""
    return (target - now).total_seconds() / DAY_SECONDS


def whole_days_since(start: datetime, now: datetime) -> int:
    return (now - start) // timedelta(days=1)
