from datetime import datetime, timedelta, timezone

import pytest

from foom_engine.savings import (
    calculate_investment_projection,
    calculate_long_term_savings,
    calculate_savings_projection,
    calculate_screen_time_to_savings,
    future_value_of_annuity,
    generate_screen_time_scenarios,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def test_projection_thirty_days_out() -> None:
    proj = calculate_savings_projection(0, 10000, NOW + timedelta(days=30), NOW, average_daily_tokens=20)
    assert proj.time_to_goal == 30
    assert proj.daily_required == pytest.approx(333.33, abs=0.01)
    assert proj.weekly_required == pytest.approx(2333.33, abs=0.01)
    assert proj.monthly_required == pytest.approx(10000)
    assert any("additional 9940 KES" in tip for tip in proj.recommendations)
    assert proj.recommendations[-1] == "Consider investing tokens in MMFs for compound growth"


def test_projection_partial_day_rounds_up() -> None:
    proj = calculate_savings_projection(0, 1000, NOW + timedelta(days=29, hours=12), NOW)
    assert proj.time_to_goal == 30


def test_projection_past_target_uses_one_day() -> None:
    proj = calculate_savings_projection(100, 600, NOW - timedelta(days=5), NOW)
    assert proj.time_to_goal == 1
    assert proj.daily_required == 500


def test_projection_infeasible_goal() -> None:
    proj = calculate_savings_projection(0, 1_000_000, NOW + timedelta(days=10), NOW, average_daily_tokens=50)
    assert proj.feasible is False
    assert proj.recommendations[0].startswith("Consider extending your target date")
    assert not any("Reduce your screen time" in tip for tip in proj.recommendations)


def test_projection_goal_already_reached() -> None:
    proj = calculate_savings_projection(20000, 10000, NOW + timedelta(days=60), NOW)
    assert proj.daily_required == 0
    assert proj.feasible is True
    assert proj.recommendations == (
        "Reduce your screen time more to earn additional tokens",
        "Consider investing tokens in MMFs for compound growth",
    )


def test_projection_is_deterministic() -> None:
    target = NOW + timedelta(days=45)
    assert calculate_savings_projection(10, 5000, target, NOW) == calculate_savings_projection(10, 5000, target, NOW)


def test_lump_sum_investment_one_year() -> None:
    proj = calculate_investment_projection(principal=1000, annual_rate_percent=10, time_horizon_days=365)
    assert proj.projected_value == 1100
    assert proj.total_return == 100
    assert proj.return_percentage == pytest.approx(10)


def test_investment_with_monthly_contributions() -> None:
    proj = calculate_investment_projection(0, 12, 360, monthly_contribution=100)
    # 100 * ((1.01 ** 12 - 1) / 0.01) = 1268.25
    assert proj.projected_value == 1268
    assert proj.total_return == 68
    assert proj.return_percentage == 0


def test_investment_zero_rate_with_contributions() -> None:
    proj = calculate_investment_projection(1000, 0, 300, monthly_contribution=100)
    assert proj.projected_value == 2000
    assert proj.total_return == 0
    assert proj.return_percentage == 100


def test_investment_projection_repeatable() -> None:
    first = calculate_investment_projection(2500, 9.2, 730, monthly_contribution=50)
    second = calculate_investment_projection(2500, 9.2, 730, monthly_contribution=50)
    assert first == second


def test_annuity_zero_rate_limit() -> None:
    assert future_value_of_annuity(100, 0, 12) == 1200
    assert future_value_of_annuity(100, 1e-9, 12) == pytest.approx(1200, rel=1e-6)


def test_screen_time_to_savings() -> None:
    result = calculate_screen_time_to_savings(10, 6, daily_goal_hours=8)
    assert result.daily_tokens_potential == 20
    assert result.monthly_tokens_potential == 600
    assert result.monthly_currency_equivalent == pytest.approx(60)
    assert result.annual_savings_potential == pytest.approx(720)


def test_screen_time_increase_has_no_gain() -> None:
    result = calculate_screen_time_to_savings(5, 7, daily_goal_hours=8)
    assert result.daily_tokens_potential == 0
    assert result.annual_savings_potential == 0


def test_scenarios_above_goal_only_keep_earning_ones() -> None:
    scenarios = generate_screen_time_scenarios(10)
    assert [s.scenario for s in scenarios] == ["Aggressive Reduction"]
    only = scenarios[0]
    assert only.target_hours == 7
    assert only.daily_tokens == 10
    assert only.monthly_currency == 30
    assert only.annual_currency == 360
    assert only.difficulty == "hard"


def test_scenarios_below_goal() -> None:
    scenarios = generate_screen_time_scenarios(6)
    assert [(s.scenario, s.target_hours, s.daily_tokens) for s in scenarios] == [
        ("Modest Reduction", 5, 10),
        ("Moderate Reduction", 4, 20),
        ("Aggressive Reduction", 3, 30),
    ]
    assert [s.difficulty for s in scenarios] == ["easy", "medium", "hard"]


def test_scenarios_never_target_below_one_hour() -> None:
    scenarios = generate_screen_time_scenarios(1.5)
    assert len(scenarios) == 3
    assert all(s.target_hours == 1 for s in scenarios)
    assert all(s.daily_tokens == 5 for s in scenarios)


def test_heavy_usage_has_no_earning_scenarios() -> None:
    # every target stays at or above the 8h goal, so nothing earns tokens
    assert generate_screen_time_scenarios(12) == []


def test_long_term_savings_without_interest() -> None:
    savings = calculate_long_term_savings(1000, 2, average_rate_percent=0)
    assert savings.monthly_currency_value == 100
    assert savings.total_contributions == 2400
    assert savings.projected_value == 2400
    assert savings.total_returns == 0
    assert [row.value for row in savings.breakdown_by_year] == [1200, 2400]


def test_long_term_breakdown_ends_at_final_value() -> None:
    savings = calculate_long_term_savings(1500, 5)
    assert len(savings.breakdown_by_year) == 5
    last = savings.breakdown_by_year[-1]
    assert last.year == 5
    assert last.value == savings.projected_value
    assert last.contributions == savings.total_contributions
    assert savings.projected_value > savings.total_contributions
    values = [row.value for row in savings.breakdown_by_year]
    assert values == sorted(values)


def test_long_term_zero_years() -> None:
    savings = calculate_long_term_savings(1000, 0)
    assert savings.breakdown_by_year == ()
    assert savings.projected_value == 0


def test_rate_below_total_loss_floors_value_at_zero() -> None:
    proj = calculate_investment_projection(1000, -200, 400)
    assert proj.projected_value == 0
    assert proj.total_return == -1000
    assert proj.return_percentage == -100

    with_deposits = calculate_investment_projection(1000, -2400, 60, monthly_contribution=100)
    assert with_deposits.projected_value == 50
    assert with_deposits.total_return == -1150


def test_negative_horizon_projects_nothing() -> None:
    proj = calculate_investment_projection(1000, -200, -30)
    assert proj.projected_value == 1000
    assert proj.return_percentage == 0
