from datetime import datetime, timedelta, timezone

import pytest

from foom_engine.config import EngineConfig
from foom_engine.models import SavingsGoal
from foom_engine.savings import calculate_optimal_allocation, goal_priority

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
HALF_TOKEN = EngineConfig(currency_per_token=0.5)


def _goal(goal_id: str, target: float, current: float, days: float, active: bool = True) -> SavingsGoal:
    return SavingsGoal(
        id=goal_id,
        name=goal_id.title(),
        target_amount=target,
        current_amount=current,
        target_date=NOW + timedelta(days=days),
        is_active=active,
    )


GOALS = [
    _goal("laptop", 5000, 0, 365),
    _goal("rent", 10000, 0, 10),
    _goal("phone", 1000, 900, 200),
]


@pytest.mark.parametrize(
    "urgency,completion,expected",
    [
        (10, 0.5, "high"),
        (-3, 0.0, "high"),
        (10, 0.9, "medium"),
        (60, 0.5, "medium"),
        (200, 0.9, "medium"),
        (200, 0.8, "low"),
        (200, 0.5, "low"),
    ],
)
def test_goal_priority(urgency: float, completion: float, expected: str) -> None:
    assert goal_priority(urgency, completion) == expected


def test_allocation_follows_priority_and_need() -> None:
    plan = calculate_optimal_allocation(100_000, GOALS, NOW, config=HALF_TOKEN)
    assert [(a.goal_id, a.priority) for a in plan.allocation] == [
        ("rent", "high"),
        ("phone", "medium"),
        ("laptop", "low"),
    ]
    # rent needs 10000 over 10 days -> 30000 a month -> 60000 tokens
    assert plan.allocation[0].recommended_tokens == 60000
    assert plan.allocation[0].recommended_amount == 30000
    # phone needs 100 over 200 days -> 15 a month -> 30 tokens
    assert plan.allocation[1].recommended_tokens == 30
    # laptop needs 5000 over 365 days -> 410.96 a month -> 821 whole tokens
    assert plan.allocation[2].recommended_tokens == 821
    assert plan.total_allocated == 60851
    assert plan.remaining_tokens == 100_000 - 60851


def test_scarce_budget_goes_to_most_urgent_goal() -> None:
    plan = calculate_optimal_allocation(1000, GOALS, NOW)
    assert [a.goal_id for a in plan.allocation] == ["rent"]
    assert plan.allocation[0].recommended_tokens == 1000
    assert plan.remaining_tokens == 0
    assert plan.total_allocated == 1000


def test_zero_budget() -> None:
    plan = calculate_optimal_allocation(0, GOALS, NOW)
    assert plan.allocation == ()
    assert plan.remaining_tokens == 0
    assert plan.total_allocated == 0


def test_no_goals_keeps_budget() -> None:
    plan = calculate_optimal_allocation(500, [], NOW)
    assert plan.allocation == ()
    assert plan.remaining_tokens == 500


def test_inactive_goals_are_skipped() -> None:
    plan = calculate_optimal_allocation(500, [_goal("trip", 1000, 0, 20, active=False)], NOW)
    assert plan.allocation == ()
    assert plan.remaining_tokens == 500


def test_overfunded_goal_gets_nothing() -> None:
    plan = calculate_optimal_allocation(500, [_goal("bike", 10000, 12000, 10)], NOW)
    assert plan.allocation == ()
    assert plan.remaining_tokens == 500


def test_overdue_goal_is_urgent() -> None:
    overdue = _goal("fees", 100, 0, -5)
    later = _goal("holiday", 100, 0, 20)
    plan = calculate_optimal_allocation(10_000, [later, overdue], NOW, config=HALF_TOKEN)
    assert plan.allocation[0].goal_id == "fees"
    assert plan.allocation[0].priority == "high"
    # overdue need is spread over a single day
    assert plan.allocation[0].recommended_amount == 3000


@pytest.mark.parametrize("budget", [0, 1, 7, 99, 1234, 50_000, 1_000_000])
def test_allocation_conserves_tokens(budget: int) -> None:
    goals = GOALS + [_goal("fees", 333, 10, 3), _goal("gift", 777, 100, 45)]
    plan = calculate_optimal_allocation(budget, goals, NOW)
    assert plan.total_allocated + plan.remaining_tokens == budget
    assert plan.remaining_tokens >= 0
    assert all(a.recommended_tokens > 0 for a in plan.allocation)
    assert sum(a.recommended_tokens for a in plan.allocation) == plan.total_allocated


def test_allocation_is_deterministic() -> None:
    assert calculate_optimal_allocation(4321, GOALS, NOW) == calculate_optimal_allocation(4321, GOALS, NOW)


def test_fractional_budget_keeps_the_fraction_unallocated() -> None:
    assert calculate_optimal_allocation(100.5, [], NOW).remaining_tokens == 100.5

    plan = calculate_optimal_allocation(1000.5, GOALS, NOW)
    assert plan.total_allocated == 1000
    assert plan.allocation[0].recommended_tokens == 1000
    assert plan.remaining_tokens == 0.5
