from __future__ import annotations

import math

from foom_engine.config import EngineConfig, effective_config
from foom_engine.time_utils import MINUTE_MS


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like the mobile client does: halves always go up, never to even."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))


def tokens_to_currency(tokens: float, config: EngineConfig | None = None) -> float:
    return tokens * effective_config(config).currency_per_token


def currency_to_tokens(amount: float, config: EngineConfig | None = None) -> int:
    """Whole tokens affordable for ``amount``; fractions are dropped."""
    rate = effective_config(config).currency_per_token
    if rate <= 0:
        return 0
    return max(0, math.floor(amount / rate))


def format_currency(amount: float, config: EngineConfig | None = None) -> str:
    code = effective_config(config).currency_code
    rounded = round_half_up(amount, 2)
    if rounded == int(rounded):
        return f"{code} {int(rounded):,}"
    return f"{code} {rounded:,.2f}".rstrip("0")


def format_duration_ms(ms: int) -> str:
    sign = "-" if ms < 0 else ""
    total = abs(int(ms)) // MINUTE_MS
    h, m = divmod(total, 60)
    if h == 0:
        return f"{sign}{m}m"
    return f"{sign}{h}h {m}m"
