from __future__ import annotations

import re

from foom_engine.time_utils import HOUR_MS, MINUTE_MS

DURATION_PATTERN = re.compile(r"^(?:(?P<hours>\d+(?:\.\d+)?)h)?(?:(?P<minutes>\d+)m)?$")


class DurationParseError(ValueError):
    pass


def parse_screen_time_ms(raw: str) -> int:
    """Parse ``6h30m``, ``7.5h``, ``90m`` or bare hours like ``6`` into milliseconds."""
    value = raw.strip().lower()
    if not value:
        raise DurationParseError("Screen time is required")

    if " " in value:
        raise DurationParseError("Use compact duration format like 6h30m")

    if re.fullmatch(r"\d+(?:\.\d+)?", value):
        return int(round(float(value) * HOUR_MS))

    match = DURATION_PATTERN.fullmatch(value)
    if not match or not (match.group("hours") or match.group("minutes")):
        raise DurationParseError("Invalid screen time. Examples: 6h30m, 7.5h, 90m, 6")

    hours = float(match.group("hours")) if match.group("hours") else 0.0
    minutes = int(match.group("minutes")) if match.group("minutes") else 0
    return int(round(hours * HOUR_MS)) + minutes * MINUTE_MS
