from __future__ import annotations

from collections.abc import Sequence

from foom_engine.config import EngineConfig, effective_config
from foom_engine.economy import format_currency, format_duration_ms
from foom_engine.models import (
    EventBonus,
    InvestmentProjection,
    LongTermSavings,
    RewardResult,
    ScreenTimeScenario,
    WeeklyPerformance,
)
from foom_engine.rewards import get_reward_message

PERFORMANCE_LABELS = {
    "excellent": "🏆 Excellent",
    "good": "✅ Good",
    "needs_improvement": "📉 Needs improvement",
}


def _bar(ratio: float, width: int = 20) -> str:
    filled = max(0, min(width, int(round(ratio * width))))
    return "█" * filled + "░" * (width - filled)


def daily_reward_message(result: RewardResult, screen_time_ms: int) -> str:
    lines = [
        f"📱 Screen time: {format_duration_ms(screen_time_ms)}",
        "🎯 Goal met" if result.daily_goal_met else "⛔ Goal missed",
        "",
    ]
    for entry in result.breakdown:
        lines.append(f"  +{entry.tokens} {entry.label}" if entry.tokens >= 0 else f"  {entry.tokens} {entry.label}")
    if result.breakdown:
        lines.append("")
    lines.append(get_reward_message(result))
    return "\n".join(lines)


def weekly_message(perf: WeeklyPerformance, days: int) -> str:
    ratio = perf.goals_met_count / days if days else 0.0
    streak = perf.streak_data
    return "\n".join(
        [
            "📅 Weekly summary",
            f"{_bar(ratio)} {perf.goals_met_count}/{days} goals met",
            f"⏱ Average: {format_duration_ms(int(perf.average_screen_time_ms))}",
            f"🪙 Tokens: {perf.total_tokens_earned}",
            f"🔥 Streak: {streak.current_streak} days | Best: {streak.longest_streak}",
            f"Performance: {PERFORMANCE_LABELS.get(perf.performance, perf.performance)}",
        ]
    )


def investment_message(projection: InvestmentProjection, config: EngineConfig | None = None) -> str:
    cfg = effective_config(config)
    lines = [
        f"💰 Principal: {format_currency(projection.principal, cfg)}",
        f"📈 Projected after {projection.time_horizon_days} days: {format_currency(projection.projected_value, cfg)}",
        f"Return: {format_currency(projection.total_return, cfg)} ({projection.return_percentage:.2f}%)",
    ]
    if projection.monthly_contribution > 0:
        lines.insert(1, f"➕ Monthly: {format_currency(projection.monthly_contribution, cfg)}")
    return "\n".join(lines)


def scenarios_message(scenarios: Sequence[ScreenTimeScenario], config: EngineConfig | None = None) -> str:
    cfg = effective_config(config)
    if not scenarios:
        return "No reduction scenario earns extra tokens at this usage level."
    lines = ["🔮 Screen time scenarios"]
    for s in scenarios:
        lines.append(
            f"  {s.scenario} ({s.difficulty}): {s.target_hours:g}h/day → "
            f"+{s.daily_tokens:g} tokens/day, {format_currency(s.monthly_currency, cfg)}/month, "
            f"{format_currency(s.annual_currency, cfg)}/year"
        )
    return "\n".join(lines)


def long_term_message(savings: LongTermSavings, config: EngineConfig | None = None) -> str:
    cfg = effective_config(config)
    lines = [
        f"🏦 Monthly deposit: {format_currency(savings.monthly_currency_value, cfg)}",
        f"Contributions: {format_currency(savings.total_contributions, cfg)}",
        f"Projected value: {format_currency(savings.projected_value, cfg)}",
        f"Returns: {format_currency(savings.total_returns, cfg)}",
    ]
    for row in savings.breakdown_by_year:
        lines.append(f"  Year {row.year}: {format_currency(row.value, cfg)} (+{format_currency(row.returns, cfg)})")
    return "\n".join(lines)


def event_message(event: EventBonus | None) -> str:
    if event is None:
        return "No seasonal event is running."
    return f"🎊 {event.event_name} ({event.bonus_multiplier:g}x): {event.description}"
