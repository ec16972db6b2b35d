from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date

from foom_engine.config import EngineConfig, effective_config
from foom_engine.models import (
    AppRewardSummary,
    AppUsage,
    EventBonus,
    PotentialEarnings,
    RewardBreakdownEntry,
    RewardResult,
    StreakState,
    UsageSample,
    WeeklyPerformance,
)
from foom_engine.time_utils import HOUR_MS, ms_to_hours

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3

EVENTS = {
    1: EventBonus(
        event_name="New Year Resolution",
        bonus_multiplier=1.5,
        description="Double rewards for building healthy habits in January!",
    ),
    9: EventBonus(
        event_name="Focus Month",
        bonus_multiplier=1.25,
        description="Extra rewards for staying focused during back-to-school season!",
    ),
}


def hours_under_goal(screen_time_hours: float, goal_hours: float) -> float:
    return max(0.0, goal_hours - screen_time_hours)


def raw_base_tokens(screen_time_hours: float, goal_hours: float, config: EngineConfig | None = None) -> float:
    """Unrounded tokens for the time left under the goal.

    Shared by the daily reward (which floors it) and the savings projections
    (which keep the fraction), so both read the same rate.
    """
    cfg = effective_config(config)
    return hours_under_goal(screen_time_hours, goal_hours) * cfg.tokens_per_hour_saved


def percentage_under_goal(screen_time_hours: float, goal_hours: float) -> float:
    if goal_hours <= 0:
        return 0.0
    return (goal_hours - screen_time_hours) / goal_hours * 100


def calculate_streak_bonus(current_streak: int, goal_met: bool, config: EngineConfig | None = None) -> int:
    cfg = effective_config(config)
    if not goal_met:
        return 0
    for threshold, bonus in cfg.streak_bonus_tiers:
        if current_streak >= threshold:
            return bonus
    return 0


def calculate_milestone_bonus(screen_time_hours: float, goal_hours: float, config: EngineConfig | None = None) -> int:
    cfg = effective_config(config)
    if goal_hours <= 0:
        return 0
    percent = percentage_under_goal(screen_time_hours, goal_hours)
    for threshold, bonus in cfg.milestone_tiers:
        if percent >= threshold:
            return bonus
    return 0


def milestone_label(screen_time_hours: float, goal_hours: float, config: EngineConfig | None = None) -> str:
    cfg = effective_config(config)
    percent = percentage_under_goal(screen_time_hours, goal_hours)
    tiers = cfg.milestone_tiers
    if tiers and percent >= tiers[0][0]:
        return f"Exceptional! {tiers[0][0]:g}%+ under goal"
    if len(tiers) > 1 and percent >= tiers[1][0]:
        return f"Great job! {tiers[1][0]:g}%+ under goal"
    return "Milestone achieved"


def calculate_daily_reward(
    screen_time_ms: float,
    goal_hours: float | None = None,
    current_streak: int = 0,
    config: EngineConfig | None = None,
) -> RewardResult:
    cfg = effective_config(config)
    goal = cfg.daily_goal_hours if goal_hours is None else goal_hours
    if screen_time_ms < 0:
        logger.debug("negative screen time %s clamped to 0", screen_time_ms)
    screen_hours = ms_to_hours(max(0, screen_time_ms))

    under = hours_under_goal(screen_hours, goal)
    goal_met = screen_hours <= goal
    breakdown: list[RewardBreakdownEntry] = []

    base = math.floor(raw_base_tokens(screen_hours, goal, cfg))
    if base > 0:
        breakdown.append(RewardBreakdownEntry(kind="base", label=f"{under:.1f} hours under goal", tokens=base))

    streak_bonus = calculate_streak_bonus(current_streak, goal_met, cfg)
    if streak_bonus > 0:
        breakdown.append(
            RewardBreakdownEntry(kind="streak", label=f"{current_streak} day streak bonus", tokens=streak_bonus)
        )

    milestone = calculate_milestone_bonus(screen_hours, goal, cfg)
    if milestone > 0:
        breakdown.append(
            RewardBreakdownEntry(kind="milestone", label=milestone_label(screen_hours, goal, cfg), tokens=milestone)
        )

    return RewardResult(
        tokens_earned=max(0, base),
        hours_under_goal=under,
        daily_goal_met=goal_met,
        streak_bonus=streak_bonus,
        total_reward=sum(entry.tokens for entry in breakdown),
        breakdown=tuple(breakdown),
    )


def performance_level(goals_met: int, total_days: int) -> str:
    if total_days <= 0:
        return "needs_improvement"
    ratio = goals_met / total_days
    if ratio >= 0.8:
        return "excellent"
    if ratio >= 0.5:
        return "good"
    return "needs_improvement"


def calculate_weekly_performance(
    daily_screen_times_ms: Sequence[float],
    goal_hours: float | None = None,
    config: EngineConfig | None = None,
) -> WeeklyPerformance:
    cfg = effective_config(config)
    goal = cfg.daily_goal_hours if goal_hours is None else goal_hours
    if not daily_screen_times_ms:
        return WeeklyPerformance(
            total_tokens_earned=0,
            average_screen_time_ms=0.0,
            goals_met_count=0,
            streak_data=StreakState(),
            performance="needs_improvement",
        )

    total_tokens = 0
    goals_met = 0
    longest = 0
    streak = 0
    for screen_ms in daily_screen_times_ms:
        # A day's streak bonus uses the streak built up to the previous day.
        reward = calculate_daily_reward(screen_ms, goal, streak, cfg)
        total_tokens += reward.total_reward
        if reward.daily_goal_met:
            goals_met += 1
            streak += 1
            longest = max(longest, streak)
        else:
            streak = 0

    days = len(daily_screen_times_ms)
    return WeeklyPerformance(
        total_tokens_earned=total_tokens,
        average_screen_time_ms=sum(daily_screen_times_ms) / days,
        goals_met_count=goals_met,
        streak_data=StreakState(current_streak=streak, longest_streak=longest, goals_met_count=goals_met),
        performance=performance_level(goals_met, days),
    )


def summarize_usage(samples: Sequence[UsageSample]) -> list[AppUsage]:
    """Fold polled samples into one ``AppUsage`` per app, in first-seen order."""
    totals: dict[tuple[str, str], int] = {}
    for sample in samples:
        key = (sample.app_identifier, sample.category)
        totals[key] = totals.get(key, 0) + max(0, sample.time_spent_ms)
    return [AppUsage(category=category, time_spent_ms=ms, package_name=app) for (app, category), ms in totals.items()]


def total_screen_time_ms(samples: Sequence[UsageSample]) -> int:
    return sum(max(0, sample.time_spent_ms) for sample in samples)


def calculate_app_specific_rewards(usage: Sequence[AppUsage], config: EngineConfig | None = None) -> AppRewardSummary:
    cfg = effective_config(config)
    productive_bonus = 0
    penalty_total = 0
    ledger: dict[str, int] = {}

    for app in usage:
        hours = ms_to_hours(max(0, app.time_spent_ms))
        if app.category in cfg.productive_categories:
            bonus = math.floor(hours * cfg.productive_tokens_per_hour)
            productive_bonus += bonus
            ledger[app.category] = ledger.get(app.category, 0) + bonus
        if app.category == cfg.social_media_category and hours > cfg.social_media_free_hours:
            penalty = math.floor((hours - cfg.social_media_free_hours) * cfg.social_media_penalty_per_hour)
            penalty_total += penalty
            ledger[app.category] = ledger.get(app.category, 0) - penalty

    return AppRewardSummary(
        productive_app_bonus=productive_bonus,
        social_media_penalty=penalty_total,
        category_breakdown=ledger,
    )


def category_breakdown_entries(summary: AppRewardSummary) -> list[RewardBreakdownEntry]:
    entries = []
    for category, tokens in summary.category_breakdown.items():
        if tokens == 0:
            continue
        label = f"{category} bonus" if tokens > 0 else f"{category} overuse penalty"
        entries.append(RewardBreakdownEntry(kind="category", label=label, tokens=tokens))
    return entries


def generate_recommendations(
    daily_screen_times_ms: Sequence[float],
    app_usage: Sequence[AppUsage],
    current_streak: int,
    config: EngineConfig | None = None,
) -> list[str]:
    cfg = effective_config(config)
    tips: list[str] = []
    avg_ms = sum(daily_screen_times_ms) / len(daily_screen_times_ms) if daily_screen_times_ms else 0.0

    if ms_to_hours(avg_ms) > cfg.daily_goal_hours + 2:
        tips.append("Try reducing screen time by 1 hour daily for better rewards")

    social_ms = sum(app.time_spent_ms for app in app_usage if app.category == cfg.social_media_category)
    if social_ms > cfg.social_media_free_hours * HOUR_MS:
        tips.append(f"Consider limiting social media to {cfg.social_media_free_hours:g} hours daily")

    if current_streak == 0:
        tips.append("Start a streak by meeting your daily goal!")
    elif current_streak < 7:
        tips.append("Keep going! Aim for a 7-day streak for bonus rewards")

    productive_ms = sum(app.time_spent_ms for app in app_usage if app.category in cfg.productive_categories)
    if productive_ms < HOUR_MS:
        tips.append("Spend at least 1 hour on productive apps for bonus tokens")

    return tips[:MAX_RECOMMENDATIONS]


def calculate_event_bonus(day: date) -> EventBonus | None:
    return EVENTS.get(day.month)


def apply_event_bonus(total_reward: int, event: EventBonus | None) -> int:
    if event is None or total_reward <= 0:
        return total_reward
    return math.floor(total_reward * event.bonus_multiplier)


def get_reward_message(result: RewardResult) -> str:
    total = result.total_reward
    if total <= 0:
        return "Keep trying! Every hour matters toward your goal."
    if total >= 50:
        return f"🎉 Amazing! You earned {total} tokens today!"
    if total >= 20:
        return f"🌟 Great job! You earned {total} tokens!"
    return f"👍 Nice work! You earned {total} tokens today."


def calculate_potential_earnings(
    screen_time_ms: float,
    goal_hours: float | None = None,
    config: EngineConfig | None = None,
) -> PotentialEarnings:
    cfg = effective_config(config)
    goal = cfg.daily_goal_hours if goal_hours is None else goal_hours
    current = calculate_daily_reward(screen_time_ms, goal, config=cfg)
    at_goal = calculate_daily_reward(goal * HOUR_MS, goal, config=cfg)
    max_hours = max(0.0, goal)
    return PotentialEarnings(
        current_tokens=current.total_reward,
        potential_tokens=at_goal.total_reward,
        hours_to_max_reward=max_hours,
        max_possible_tokens=max_hours * cfg.tokens_per_hour_saved,
    )
