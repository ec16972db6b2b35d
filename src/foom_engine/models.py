from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

RISK_LEVELS = ("Low", "Medium", "High")


@dataclass(frozen=True)
class UsageSample:
    app_identifier: str
    category: str
    time_spent_ms: int
    last_used: datetime


@dataclass(frozen=True)
class AppUsage:
    category: str
    time_spent_ms: int
    package_name: str = ""


@dataclass(frozen=True)
class RewardBreakdownEntry:
    kind: str
    label: str
    tokens: int


@dataclass(frozen=True)
class RewardResult:
    tokens_earned: int
    hours_under_goal: float
    daily_goal_met: bool
    streak_bonus: int
    total_reward: int
    breakdown: tuple[RewardBreakdownEntry, ...] = ()


@dataclass(frozen=True)
class StreakState:
    current_streak: int = 0
    longest_streak: int = 0
    goals_met_count: int = 0


@dataclass(frozen=True)
class WeeklyPerformance:
    total_tokens_earned: int
    average_screen_time_ms: float
    goals_met_count: int
    streak_data: StreakState
    performance: str


@dataclass(frozen=True)
class AppRewardSummary:
    productive_app_bonus: int
    social_media_penalty: int
    category_breakdown: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class EventBonus:
    event_name: str
    bonus_multiplier: float
    description: str


@dataclass(frozen=True)
class PotentialEarnings:
    current_tokens: int
    potential_tokens: int
    hours_to_max_reward: float
    max_possible_tokens: float


@dataclass(frozen=True)
class Challenge:
    id: str
    title: str
    description: str
    target_value: int
    current_value: int
    reward: int
    is_completed: bool
    expires_at: datetime


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    name: str
    target_amount: float
    current_amount: float
    target_date: datetime
    is_active: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True)
class FundOption:
    id: str
    name: str
    annual_rate_percent: float
    min_investment: float
    risk_level: str
    provider: str = ""
    description: str = ""


@dataclass(frozen=True)
class Investment:
    id: str
    fund_id: str
    amount: float
    tokens_invested: int
    current_value: float
    return_rate: float
    invested_at: datetime


@dataclass(frozen=True)
class SavingsProjection:
    time_to_goal: int
    monthly_required: float
    weekly_required: float
    daily_required: float
    feasible: bool
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class InvestmentProjection:
    principal: float
    projected_value: int
    total_return: int
    return_percentage: float
    time_horizon_days: int
    monthly_contribution: float


@dataclass(frozen=True)
class ScreenTimeToSavings:
    current_daily_screen_time: float
    target_daily_screen_time: float
    daily_tokens_potential: float
    monthly_tokens_potential: float
    monthly_currency_equivalent: float
    annual_savings_potential: float


@dataclass(frozen=True)
class ScreenTimeScenario:
    scenario: str
    target_hours: float
    daily_tokens: float
    monthly_currency: int
    annual_currency: int
    difficulty: str


@dataclass(frozen=True)
class YearBreakdown:
    year: int
    contributions: int
    value: int
    returns: int


@dataclass(frozen=True)
class LongTermSavings:
    total_contributions: int
    projected_value: int
    total_returns: int
    monthly_currency_value: int
    breakdown_by_year: tuple[YearBreakdown, ...] = ()


@dataclass(frozen=True)
class GoalAllocation:
    goal_id: str
    goal_name: str
    recommended_tokens: int
    recommended_amount: float
    priority: str


@dataclass(frozen=True)
class AllocationPlan:
    allocation: tuple[GoalAllocation, ...]
    remaining_tokens: float
    total_allocated: int


@dataclass(frozen=True)
class PortfolioSummary:
    total_value: float
    total_gain_loss: float
    average_return_rate: float
    shares: dict[str, float] = field(default_factory=dict)
