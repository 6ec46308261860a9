"""Retirement projection.

Closed-form estimate of the capital available at retirement and of the
income it can sustain under a fixed withdrawal rate:
- Current savings compound annually until retirement
- Monthly contributions accumulate as an ordinary annuity
- The desired income is inflated to retirement-day money
- A shortfall yields the monthly savings needed to close it
"""

from dataclasses import dataclass
from types import MappingProxyType

from loguru import logger

from finproj.core.exceptions import InvalidParametersError

# Share of capital withdrawn per year considered sustainable
DEFAULT_WITHDRAWAL_RATE = 0.04

# Reported when capital outlasts any realistic retirement
MAX_YEARS_OF_INCOME = 999


@dataclass(frozen=True)
class InvestmentStrategy:
    id: str
    name: str
    expected_return: float
    description: str = ""


INVESTMENT_STRATEGIES = MappingProxyType(
    {
        "conservative": InvestmentStrategy(
            id="conservative",
            name="Conservative",
            expected_return=0.04,
            description="Bonds and guaranteed funds",
        ),
        "balanced": InvestmentStrategy(
            id="balanced",
            name="Balanced",
            expected_return=0.07,
            description="Mix of equities and bonds",
        ),
        "dynamic": InvestmentStrategy(
            id="dynamic",
            name="Dynamic",
            expected_return=0.10,
            description="Mostly equities",
        ),
    }
)


@dataclass(frozen=True)
class RetirementProjection:
    """Capital and income at retirement.

    Attributes:
        years_to_retirement: Years left before retiring.
        future_value_savings: Current savings grown to retirement.
        future_value_contributions: Accumulated monthly contributions.
        adjusted_monthly_income: Desired monthly income in retirement-day money.
        monthly_income: Income the capital sustains under the withdrawal rate.
        years_of_income: Years the capital covers the adjusted expenses (capped).
        annual_shortfall: Adjusted annual expenses minus sustainable withdrawals.
        recommended_monthly_savings: Contribution needed to close the shortfall.
    """

    years_to_retirement: int
    future_value_savings: float
    future_value_contributions: float
    adjusted_monthly_income: float
    monthly_income: float
    years_of_income: float
    annual_shortfall: float
    recommended_monthly_savings: float

    @property
    def total_at_retirement(self) -> float:
        return self.future_value_savings + self.future_value_contributions

    @property
    def on_track(self) -> bool:
        return self.annual_shortfall <= 0


def _annuity_factor(monthly_rate: float, months: int) -> float:
    """Future value of 1 paid at the end of each month."""
    if monthly_rate == 0:
        return float(months)
    return ((1 + monthly_rate) ** months - 1) / monthly_rate


def project_retirement(
    current_age: int,
    retirement_age: int,
    current_savings: float,
    monthly_contribution: float,
    annual_return: float,
    desired_monthly_income: float,
    inflation_rate: float = 0.0,
    withdrawal_rate: float = DEFAULT_WITHDRAWAL_RATE,
) -> RetirementProjection:
    """Project capital and sustainable income at retirement.

    Raises:
        InvalidParametersError: retirement age not after current age, negative
            amounts or rates, or a withdrawal rate outside (0, 1].
    """
    if retirement_age <= current_age:
        raise InvalidParametersError(f"Retirement age {retirement_age} must be after current age {current_age}")
    for name, value in [
        ("current age", current_age),
        ("current savings", current_savings),
        ("monthly contribution", monthly_contribution),
        ("annual return", annual_return),
        ("desired income", desired_monthly_income),
        ("inflation rate", inflation_rate),
    ]:
        if value < 0:
            raise InvalidParametersError(f"{name.capitalize()} cannot be negative, got {value}")
    if not 0 < withdrawal_rate <= 1:
        raise InvalidParametersError(f"Withdrawal rate must be within (0, 1], got {withdrawal_rate}")

    years = retirement_age - current_age
    months = years * 12
    factor = _annuity_factor(annual_return / 12, months)

    fv_savings = current_savings * (1 + annual_return) ** years
    fv_contributions = monthly_contribution * factor
    total = fv_savings + fv_contributions

    adjusted_income = desired_monthly_income * (1 + inflation_rate) ** years
    annual_expenses = adjusted_income * 12
    sustainable = total * withdrawal_rate

    if annual_expenses > 0:
        years_of_income = min(total / annual_expenses, MAX_YEARS_OF_INCOME)
    else:
        years_of_income = float("inf")

    shortfall = annual_expenses - sustainable
    recommended = 0.0
    if shortfall > 0:
        required_capital = annual_expenses / withdrawal_rate
        recommended = max(0.0, (required_capital - fv_savings) / factor)
        logger.info(f"Retirement shortfall of {shortfall:,.2f}/year; save {recommended:,.2f}/month to close it")

    logger.debug(f"Retirement in {years} years: capital {total:,.2f}, income {sustainable / 12:,.2f}/month")
    return RetirementProjection(
        years_to_retirement=years,
        future_value_savings=fv_savings,
        future_value_contributions=fv_contributions,
        adjusted_monthly_income=adjusted_income,
        monthly_income=sustainable / 12,
        years_of_income=years_of_income,
        annual_shortfall=shortfall,
        recommended_monthly_savings=recommended,
    )


def compare_strategies(
    current_age: int,
    retirement_age: int,
    current_savings: float,
    monthly_contribution: float,
    desired_monthly_income: float,
    inflation_rate: float = 0.0,
    withdrawal_rate: float = DEFAULT_WITHDRAWAL_RATE,
    strategies=INVESTMENT_STRATEGIES.values(),
) -> dict[str, RetirementProjection]:
    """Run the same projection at each strategy's expected return."""
    return {
        s.id: project_retirement(
            current_age,
            retirement_age,
            current_savings,
            monthly_contribution,
            s.expected_return,
            desired_monthly_income,
            inflation_rate,
            withdrawal_rate,
        )
        for s in strategies
    }
