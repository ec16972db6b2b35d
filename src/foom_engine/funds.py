from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime

from foom_engine.config import EngineConfig, effective_config
from foom_engine.economy import format_currency, tokens_to_currency
from foom_engine.models import FundOption, Investment, PortfolioSummary
from foom_engine.time_utils import whole_days_since

DEFAULT_FUNDS: tuple[FundOption, ...] = (
    FundOption(
        id="cic_mmf",
        name="CIC Money Market Fund",
        annual_rate_percent=8.5,
        min_investment=1000,
        risk_level="Low",
        provider="CIC Asset Management",
        description="Conservative money market fund with steady returns",
    ),
    FundOption(
        id="equity_mmf",
        name="Equity Money Market Fund",
        annual_rate_percent=9.2,
        min_investment=1000,
        risk_level="Low",
        provider="Equity Investment Bank",
        description="Well-managed fund with competitive returns",
    ),
    FundOption(
        id="ncba_mmf",
        name="NCBA Money Market Fund",
        annual_rate_percent=8.8,
        min_investment=500,
        risk_level="Low",
        provider="NCBA Investment Bank",
        description="Accessible fund with low minimum investment",
    ),
    FundOption(
        id="cytonn_mmf",
        name="Cytonn Money Market Fund",
        annual_rate_percent=10.1,
        min_investment=1000,
        risk_level="Medium",
        provider="Cytonn Asset Managers",
        description="Higher returns with slightly higher risk",
    ),
    FundOption(
        id="britam_mmf",
        name="Britam Money Market Fund",
        annual_rate_percent=8.3,
        min_investment=1000,
        risk_level="Low",
        provider="Britam Asset Management",
        description="Stable returns from established fund manager",
    ),
)


def get_fund(fund_id: str, funds: Sequence[FundOption] = DEFAULT_FUNDS) -> FundOption | None:
    key = fund_id.strip().lower()
    for fund in funds:
        if fund.id == key:
            return fund
    return None


def fund_value_after_days(principal: float, annual_rate_percent: float, days: int) -> float:
    daily_rate = annual_rate_percent / 365 / 100
    return principal * max(0.0, 1 + daily_rate) ** max(0, days)


def revalue_investment(investment: Investment, fund: FundOption, now: datetime) -> Investment:
    days = whole_days_since(investment.invested_at, now)
    if days <= 0:
        return investment
    value = fund_value_after_days(investment.amount, fund.annual_rate_percent, days)
    rate = (value - investment.amount) / investment.amount * 100 if investment.amount > 0 else 0.0
    return replace(investment, current_value=value, return_rate=rate)


def portfolio_summary(investments: Sequence[Investment], savings_balance: float = 0.0) -> PortfolioSummary:
    invested_value = sum(inv.current_value for inv in investments)
    total = invested_value + savings_balance
    shares = {inv.id: (inv.current_value / total * 100 if total > 0 else 0.0) for inv in investments}
    gain_loss = sum(inv.current_value - inv.amount for inv in investments)
    avg_rate = sum(inv.return_rate for inv in investments) / len(investments) if investments else 0.0
    return PortfolioSummary(
        total_value=total,
        total_gain_loss=gain_loss,
        average_return_rate=avg_rate,
        shares=shares,
    )


def validate_investment_amount(
    tokens: int,
    token_balance: int,
    min_investment: float,
    config: EngineConfig | None = None,
) -> str | None:
    cfg = effective_config(config)
    if tokens <= 0:
        return "Investment amount must be greater than 0"
    if tokens > token_balance:
        return "Insufficient token balance"
    if tokens_to_currency(tokens, cfg) < min_investment:
        return f"Minimum investment is {format_currency(min_investment, cfg)}"
    return None
