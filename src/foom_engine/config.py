from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    tokens_per_hour_saved: int = 10
    daily_goal_hours: float = 8.0
    currency_per_token: float = 0.1
    currency_code: str = "KES"
    days_per_month: int = 30
    # (minimum streak days, bonus tokens), highest first
    streak_bonus_tiers: tuple[tuple[int, int], ...] = ((30, 50), (21, 35), (14, 25), (7, 15), (3, 5), (2, 2))
    # (minimum percent under goal, bonus tokens), highest first
    milestone_tiers: tuple[tuple[float, int], ...] = ((50.0, 20), (25.0, 10))
    # (minimum challenge reward, payout multiplier), highest first
    challenge_multipliers: tuple[tuple[int, float], ...] = ((50, 1.5), (25, 1.2))
    productive_categories: tuple[str, ...] = ("Productivity", "Education")
    productive_tokens_per_hour: int = 2
    social_media_category: str = "Social Media"
    social_media_free_hours: float = 2.0
    social_media_penalty_per_hour: int = 3
    reasonable_monthly_goal: float = 10000.0
    low_daily_tokens_threshold: int = 30
    default_average_daily_tokens: int = 20
    default_long_term_rate_percent: float = 9.0


DEFAULT_CONFIG = EngineConfig()

_TIER_KEYS = {"streak_bonus_tiers", "milestone_tiers", "challenge_multipliers"}
_POSITIVE_KEYS = {"tokens_per_hour_saved", "currency_per_token", "days_per_month"}


@dataclass(frozen=True)
class Settings:
    config: EngineConfig
    config_path: Path
    log_level: str
    tz: str


def effective_config(config: EngineConfig | None) -> EngineConfig:
    return config if config is not None else DEFAULT_CONFIG


def _coerce(name: str, raw: Any, default: Any) -> Any:
    if name in _TIER_KEYS:
        if not isinstance(raw, (list, tuple)):
            raise TypeError(name)
        kind = type(default[0][1])
        tiers = [(type(default[0][0])(item[0]), kind(item[1])) for item in raw]
        return tuple(sorted(tiers, key=lambda tier: tier[0], reverse=True))
    if name == "productive_categories":
        if isinstance(raw, str):
            return tuple(part.strip() for part in raw.split(",") if part.strip())
        return tuple(str(item) for item in raw)
    value = type(default)(raw)
    if name in _POSITIVE_KEYS and value <= 0:
        raise ValueError(name)
    return value


def config_from_mapping(raw: dict[str, Any], base: EngineConfig | None = None) -> EngineConfig:
    cfg = effective_config(base)
    known = {f.name for f in fields(EngineConfig)}
    updates: dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key)
        if name not in known:
            logger.debug("ignoring unknown config key %s", name)
            continue
        default = getattr(DEFAULT_CONFIG, name)
        try:
            updates[name] = _coerce(name, value, default)
        except (TypeError, ValueError, IndexError):
            logger.warning("ignoring invalid config value for %s: %r", name, value)
    return replace(cfg, **updates)


def load_config(path: Path) -> EngineConfig:
    if not path.exists():
        return DEFAULT_CONFIG
    raw = yaml.safe_load(path.read_text()) or {}
    if not isinstance(raw, dict):
        logger.warning("config file %s is not a mapping, using defaults", path)
        return DEFAULT_CONFIG
    return config_from_mapping(raw)


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        raw = line.strip()
        if not raw or raw.startswith("#") or "=" not in raw:
            continue
        key, value = raw.split("=", maxsplit=1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    goal = os.getenv("FOOM_DAILY_GOAL_HOURS")
    if goal:
        overrides["daily_goal_hours"] = goal
    rate = os.getenv("FOOM_CURRENCY_PER_TOKEN")
    if rate:
        overrides["currency_per_token"] = rate
    return overrides


def load_settings(env_file: Path = Path(".env")) -> Settings:
    _load_env_file(env_file)

    config_path = Path(os.getenv("FOOM_CONFIG", "./foom.yaml"))
    config = load_config(config_path)
    overrides = _env_overrides()
    if overrides:
        config = config_from_mapping(overrides, base=config)

    return Settings(
        config=config,
        config_path=config_path,
        log_level=os.getenv("FOOM_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        tz=os.getenv("FOOM_TZ", "Africa/Nairobi"),
    )
