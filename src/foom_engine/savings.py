from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from foom_engine.config import EngineConfig, effective_config
from foom_engine.economy import round_half_up, round_int, tokens_to_currency
from foom_engine.models import (
    AllocationPlan,
    GoalAllocation,
    InvestmentProjection,
    LongTermSavings,
    SavingsGoal,
    SavingsProjection,
    ScreenTimeScenario,
    ScreenTimeToSavings,
    YearBreakdown,
)
from foom_engine.rewards import raw_base_tokens
from foom_engine.time_utils import days_until

logger = logging.getLogger(__name__)

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def future_value_of_annuity(payment: float, periodic_rate: float, periods: float) -> float:
    """Future value of ``periods`` equal end-of-period payments."""
    if periodic_rate == 0:
        return payment * periods
    growth = max(0.0, 1 + periodic_rate)
    return payment * ((growth ** periods - 1) / periodic_rate)


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def calculate_savings_projection(
    current_savings: float,
    goal_amount: float,
    target_date: datetime,
    now: datetime,
    average_daily_tokens: float | None = None,
    config: EngineConfig | None = None,
) -> SavingsProjection:
    cfg = effective_config(config)
    daily_tokens = cfg.default_average_daily_tokens if average_daily_tokens is None else average_daily_tokens
    month = cfg.days_per_month

    raw_days = math.ceil(days_until(target_date, now))
    if raw_days < 1:
        logger.debug("target date %s is not in the future, using a 1 day horizon", target_date)
    days_to_goal = max(1, raw_days)
    amount_needed = max(0.0, goal_amount - current_savings)

    monthly_from_tokens = tokens_to_currency(daily_tokens, cfg) * month

    daily_required = amount_needed / days_to_goal
    weekly_required = daily_required * 7
    monthly_required = daily_required * month

    feasible = monthly_from_tokens >= monthly_required or monthly_required <= cfg.reasonable_monthly_goal

    tips: list[str] = []
    if not feasible:
        tips.append("Consider extending your target date or reducing the goal amount")
    if monthly_required > monthly_from_tokens:
        extra = monthly_required - monthly_from_tokens
        tips.append(f"You'll need an additional {round_int(extra)} {cfg.currency_code} monthly beyond tokens")
    if daily_tokens < cfg.low_daily_tokens_threshold:
        tips.append("Reduce your screen time more to earn additional tokens")
    tips.append("Consider investing tokens in MMFs for compound growth")

    return SavingsProjection(
        time_to_goal=days_to_goal,
        monthly_required=monthly_required,
        weekly_required=weekly_required,
        daily_required=daily_required,
        feasible=feasible,
        recommendations=tuple(tips),
    )


def calculate_investment_projection(
    principal: float,
    annual_rate_percent: float,
    time_horizon_days: int,
    monthly_contribution: float = 0,
    config: EngineConfig | None = None,
) -> InvestmentProjection:
    cfg = effective_config(config)
    horizon = max(0, time_horizon_days)
    years = horizon / 365
    months = horizon / cfg.days_per_month
    rate = monthly_rate(annual_rate_percent)
    if annual_rate_percent < -100:
        logger.debug("annual rate %s below -100%%, value floors at 0", annual_rate_percent)

    if monthly_contribution > 0:
        if rate == 0:
            logger.debug("zero interest rate, projecting contributions without growth")
        grown = principal * max(0.0, 1 + rate) ** months
        projected = grown + future_value_of_annuity(monthly_contribution, rate, months)
    else:
        projected = principal * max(0.0, 1 + annual_rate_percent / 100) ** years

    total_return = projected - principal - monthly_contribution * months
    return_pct = (projected - principal) / principal * 100 if principal > 0 else 0.0

    return InvestmentProjection(
        principal=principal,
        projected_value=round_int(projected),
        total_return=round_int(total_return),
        return_percentage=round_half_up(return_pct, 2),
        time_horizon_days=time_horizon_days,
        monthly_contribution=monthly_contribution,
    )


def calculate_screen_time_to_savings(
    current_hours: float,
    target_hours: float,
    daily_goal_hours: float | None = None,
    config: EngineConfig | None = None,
) -> ScreenTimeToSavings:
    cfg = effective_config(config)
    goal = cfg.daily_goal_hours if daily_goal_hours is None else daily_goal_hours

    current_tokens = raw_base_tokens(current_hours, goal, cfg)
    target_tokens = raw_base_tokens(target_hours, goal, cfg)

    daily = max(0.0, target_tokens - current_tokens)
    monthly = daily * cfg.days_per_month
    monthly_currency = tokens_to_currency(monthly, cfg)

    return ScreenTimeToSavings(
        current_daily_screen_time=current_hours,
        target_daily_screen_time=target_hours,
        daily_tokens_potential=daily,
        monthly_tokens_potential=monthly,
        monthly_currency_equivalent=monthly_currency,
        annual_savings_potential=monthly_currency * 12,
    )


def generate_screen_time_scenarios(current_hours: float, config: EngineConfig | None = None) -> list[ScreenTimeScenario]:
    cfg = effective_config(config)
    plans = (
        ("Modest Reduction", 1.0, "easy"),
        ("Moderate Reduction", 2.0, "medium"),
        ("Aggressive Reduction", 3.0, "hard"),
        (
            "Meet Daily Goal",
            max(0.0, current_hours - cfg.daily_goal_hours),
            "hard" if current_hours > 10 else "medium",
        ),
    )

    scenarios = []
    for name, reduction, difficulty in plans:
        target = max(1.0, current_hours - reduction)
        savings = calculate_screen_time_to_savings(current_hours, target, config=cfg)
        if savings.daily_tokens_potential <= 0:
            continue
        scenarios.append(
            ScreenTimeScenario(
                scenario=name,
                target_hours=target,
                daily_tokens=savings.daily_tokens_potential,
                monthly_currency=round_int(savings.monthly_currency_equivalent),
                annual_currency=round_int(savings.annual_savings_potential),
                difficulty=difficulty,
            )
        )
    return scenarios


def calculate_long_term_savings(
    monthly_tokens: float,
    years: int,
    average_rate_percent: float | None = None,
    config: EngineConfig | None = None,
) -> LongTermSavings:
    cfg = effective_config(config)
    rate_percent = cfg.default_long_term_rate_percent if average_rate_percent is None else average_rate_percent
    contribution = tokens_to_currency(monthly_tokens, cfg)
    rate = monthly_rate(rate_percent)

    def at_month(months: int) -> tuple[float, float]:
        return future_value_of_annuity(contribution, rate, months), contribution * months

    yearly = []
    for year in range(1, years + 1):
        value, paid = at_month(year * 12)
        yearly.append(
            YearBreakdown(
                year=year,
                contributions=round_int(paid),
                value=round_int(value),
                returns=round_int(value - paid),
            )
        )

    final_value, final_paid = at_month(max(0, years) * 12)
    return LongTermSavings(
        total_contributions=round_int(final_paid),
        projected_value=round_int(final_value),
        total_returns=round_int(final_value - final_paid),
        monthly_currency_value=round_int(contribution),
        breakdown_by_year=tuple(yearly),
    )


@dataclass(frozen=True)
class _RankedGoal:
    goal: SavingsGoal
    urgency: float
    completion: float
    priority: str


def goal_priority(urgency_days: float, completion: float) -> str:
    if urgency_days < 30 and completion < 0.8:
        return "high"
    if urgency_days < 90 or completion > 0.8:
        return "medium"
    return "low"


def _rank_goals(goals: Sequence[SavingsGoal], now: datetime) -> list[_RankedGoal]:
    ranked = []
    for goal in goals:
        if not goal.is_active:
            continue
        urgency = days_until(goal.target_date, now)
        completion = goal.current_amount / goal.target_amount if goal.target_amount > 0 else 1.0
        ranked.append(_RankedGoal(goal, urgency, completion, goal_priority(urgency, completion)))
    ranked.sort(key=lambda item: (PRIORITY_ORDER[item.priority], item.urgency))
    return ranked


def calculate_optimal_allocation(
    monthly_tokens: float,
    goals: Sequence[SavingsGoal],
    now: datetime,
    config: EngineConfig | None = None,
) -> AllocationPlan:
    cfg = effective_config(config)
    rate = cfg.currency_per_token
    remaining = math.floor(monthly_tokens)
    allocated_total = 0
    allocation: list[GoalAllocation] = []

    for item in _rank_goals(goals, now):
        if remaining <= 0 or rate <= 0:
            break
        needed = max(0.0, item.goal.target_amount - item.goal.current_amount)
        monthly_need = needed / max(1.0, item.urgency) * cfg.days_per_month
        available = remaining * rate

        amount = min(available, monthly_need)
        if item.priority == "high" and amount < monthly_need * 0.3:
            logger.debug("high priority goal %s starved: %.2f of %.2f", item.goal.id, amount, monthly_need)
            amount = min(available, monthly_need * 0.5)

        if amount >= available:
            tokens = remaining
        else:
            tokens = min(remaining, max(0, math.floor(amount / rate)))
        remaining -= tokens
        allocated_total += tokens
        if tokens > 0:
            allocation.append(
                GoalAllocation(
                    goal_id=item.goal.id,
                    goal_name=item.goal.name,
                    recommended_tokens=tokens,
                    recommended_amount=tokens * rate,
                    priority=item.priority,
                )
            )

    return AllocationPlan(
        allocation=tuple(allocation),
        remaining_tokens=monthly_tokens - allocated_total,
        total_allocated=allocated_total,
    )
