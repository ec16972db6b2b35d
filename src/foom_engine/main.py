from __future__ import annotations

import logging
import math
import sys
from collections.abc import Sequence
from datetime import date

from foom_engine.config import EngineConfig, Settings, load_settings
from foom_engine.duration import DurationParseError, parse_screen_time_ms
from foom_engine.logging_setup import setup_logging
from foom_engine.messages import (
    daily_reward_message,
    event_message,
    investment_message,
    long_term_message,
    scenarios_message,
    weekly_message,
)
from foom_engine.rewards import calculate_daily_reward, calculate_event_bonus, calculate_weekly_performance
from foom_engine.savings import (
    calculate_investment_projection,
    calculate_long_term_savings,
    generate_screen_time_scenarios,
)
from foom_engine.time_utils import now_local

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: foom <command> [args]\n"
    "  daily <screen_time> [streak]\n"
    "  week <day1> [day2 ...]\n"
    "  project <principal> <rate%> <days> [monthly]\n"
    "  scenarios <hours>\n"
    "  longterm <monthly_tokens> <years> [rate%]\n"
    "  event [YYYY-MM-DD]"
)


class CliUsageError(ValueError):
    pass


def _number(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise CliUsageError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise CliUsageError(f"{name} must be a finite number, got {raw!r}")
    return value


def _integer(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise CliUsageError(f"{name} must be a whole number, got {raw!r}") from exc


def _need(args: Sequence[str], low: int, high: int) -> None:
    if not low <= len(args) <= high:
        raise CliUsageError("wrong number of arguments")


def _cmd_daily(args: Sequence[str], cfg: EngineConfig, settings: Settings) -> str:
    _need(args, 1, 2)
    screen_ms = parse_screen_time_ms(args[0])
    streak = _integer(args[1], "streak") if len(args) > 1 else 0
    result = calculate_daily_reward(screen_ms, current_streak=streak, config=cfg)
    return daily_reward_message(result, screen_ms)


def _cmd_week(args: Sequence[str], cfg: EngineConfig, settings: Settings) -> str:
    _need(args, 1, 31)
    days = [parse_screen_time_ms(raw) for raw in args]
    return weekly_message(calculate_weekly_performance(days, config=cfg), len(days))


def _cmd_project(args: Sequence[str], cfg: EngineConfig, settings: Settings) -> str:
    _need(args, 3, 4)
    projection = calculate_investment_projection(
        principal=_number(args[0], "principal"),
        annual_rate_percent=_number(args[1], "rate"),
        time_horizon_days=_integer(args[2], "days"),
        monthly_contribution=_number(args[3], "monthly") if len(args) > 3 else 0,
        config=cfg,
    )
    return investment_message(projection, cfg)


def _cmd_scenarios(args: Sequence[str], cfg: EngineConfig, settings: Settings) -> str:
    _need(args, 1, 1)
    return scenarios_message(generate_screen_time_scenarios(_number(args[0], "hours"), cfg), cfg)


def _cmd_longterm(args: Sequence[str], cfg: EngineConfig, settings: Settings) -> str:
    _need(args, 2, 3)
    savings = calculate_long_term_savings(
        _number(args[0], "monthly_tokens"),
        _integer(args[1], "years"),
        _number(args[2], "rate") if len(args) > 2 else None,
        cfg,
    )
    return long_term_message(savings, cfg)


def _cmd_event(args: Sequence[str], cfg: EngineConfig, settings: Settings) -> str:
    _need(args, 0, 1)
    if args:
        try:
            day = date.fromisoformat(args[0])
        except ValueError as exc:
            raise CliUsageError(f"invalid date {args[0]!r}") from exc
    else:
        day = now_local(settings.tz).date()
    return event_message(calculate_event_bonus(day))


COMMANDS = {
    "daily": _cmd_daily,
    "week": _cmd_week,
    "project": _cmd_project,
    "scenarios": _cmd_scenarios,
    "longterm": _cmd_longterm,
    "event": _cmd_event,
}


def run_cli(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    if not args or args[0] not in COMMANDS:
        print(USAGE, file=sys.stderr)
        return 2

    command, rest = args[0], args[1:]
    logger.debug("running command %s with %s", command, rest)
    try:
        output = COMMANDS[command](rest, settings.config, settings)
    except (CliUsageError, DurationParseError) as exc:
        print(f"Error: {exc}\n\n{USAGE}", file=sys.stderr)
        return 2
    except OverflowError:
        logger.debug("projection overflowed for %s %s", command, rest)
        print("Error: result is too large to project, try a shorter horizon or lower rate", file=sys.stderr)
        return 2

    print(output)
    return 0


def main() -> None:
    raise SystemExit(run_cli())
