"""Compound-growth savings projections.

Projects a savings balance month by month under a contribution pattern:
- Fixed, yearly increasing or decreasing, or cyclic irregular contributions
- Monthly compounding of a nominal annual rate
- Inflation-adjusted ("real") value of the balance

Also answers the usual follow-up questions: how long until a goal is
reached, and what the same plan yields at neighbouring rates.
"""

import math
from dataclasses import dataclass

from loguru import logger

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.models import (
    ContributionKind,
    ContributionPattern,
    MonthlySavingsEntry,
    SavingsParameters,
    SavingsResult,
)

DEFAULT_RATE_OFFSETS = (-0.01, 0.0, 0.01, 0.02)


@dataclass(frozen=True)
class RateComparison:
    """Outcome of the same plan at a different annual rate."""

    annual_rate: float
    final_amount: float
    total_interest: float
    label: str


def monthly_contribution(pattern: ContributionPattern, month: int) -> float:
    """Contribution paid in ``month`` (1-based) under ``pattern``."""
    years_elapsed = (month - 1) // 12

    if pattern.kind == ContributionKind.FIXED:
        return pattern.amount
    if pattern.kind == ContributionKind.INCREASING:
        return pattern.amount * (1 + pattern.adjust_rate) ** years_elapsed
    if pattern.kind == ContributionKind.DECREASING:
        # Floors at zero: a rate of 100% or more stops contributions after year one
        factor = max(0.0, 1 - pattern.adjust_rate)
        return pattern.amount * factor**years_elapsed
    if pattern.kind == ContributionKind.IRREGULAR:
        return pattern.amounts[(month - 1) % len(pattern.amounts)]
    raise InvalidParametersError(f"Unsupported contribution pattern: {pattern.kind}")


def grow(
    initial: float,
    pattern: ContributionPattern,
    annual_rate: float,
    years: float,
    inflation_rate: float = 0.0,
) -> SavingsResult:
    """Project a savings balance month by month.

    Each month earns ``balance * annual_rate / 12`` and then receives the
    month's contribution (end-of-month deposits). The real value discounts
    the balance by monthly-compounded inflation.

    Args:
        initial: Starting balance
        pattern: Monthly contribution pattern
        annual_rate: Nominal annual return (0 allowed)
        years: Horizon in years (rounded to whole months)
        inflation_rate: Annual inflation for the real-value series

    Returns:
        SavingsResult whose total_contributions includes the initial amount.

    Raises:
        InvalidParametersError: negative amounts or rates, or an empty horizon.
    """
    params = SavingsParameters(
        initial_amount=initial,
        pattern=pattern,
        annual_rate=annual_rate,
        years=years,
        inflation_rate=inflation_rate,
    )
    return grow_savings(params)


def grow_savings(params: SavingsParameters) -> SavingsResult:
    """Project a ``SavingsParameters`` record. See ``grow``."""
    monthly_rate = params.annual_rate / 12
    monthly_inflation = params.inflation_rate / 12

    balance = params.initial_amount
    total_contributions = params.initial_amount
    schedule = []

    for month in range(1, params.months + 1):
        interest = balance * monthly_rate if monthly_rate else 0.0
        contribution = monthly_contribution(params.pattern, month)
        balance += interest + contribution
        total_contributions += contribution

        schedule.append(
            MonthlySavingsEntry(
                month=month,
                balance=balance,
                interest=interest,
                contribution=contribution,
                real_value=balance / (1 + monthly_inflation) ** month,
            )
        )

    if params.pattern.kind == ContributionKind.DECREASING and schedule and schedule[-1].contribution == 0:
        logger.warning(f"Decreasing contributions reached zero before month {params.months}")
    logger.debug(
        f"Grew {params.initial_amount:,.2f} ({params.pattern.kind.value}) at {params.annual_rate:.2%} "
        f"for {params.months} months: final {balance:,.2f}"
    )

    return SavingsResult(
        final_amount=balance,
        total_contributions=total_contributions,
        total_interest=balance - total_contributions,
        schedule=tuple(schedule),
    )


def months_to_goal(
    goal: float,
    initial: float,
    contribution: float,
    annual_rate: float,
) -> int | None:
    """Months of fixed contributions needed to reach ``goal``.

    Uses the closed form of a growing annuity. Returns 0 when the goal is
    already met and None when it can never be reached.
    """
    if goal < 0 or initial < 0 or contribution < 0 or annual_rate < 0:
        raise InvalidParametersError("Goal, balance, contribution and rate cannot be negative")
    if goal <= initial:
        return 0

    r = annual_rate / 12
    if r > 0:
        if initial == 0 and contribution == 0:
            logger.info(f"Goal {goal:,.2f} unreachable without a balance or contributions")
            return None
        months = math.log((goal * r + contribution) / (initial * r + contribution)) / math.log(1 + r)
        return math.ceil(months)

    if contribution == 0:
        logger.info(f"Goal {goal:,.2f} unreachable with no interest and no contributions")
        return None
    return math.ceil((goal - initial) / contribution)


def compare_rates(
    params: SavingsParameters,
    offsets: tuple[float, ...] = DEFAULT_RATE_OFFSETS,
) -> list[RateComparison]:
    """Run the same plan at ``params.annual_rate + offset`` for each offset.

    Offsets that would produce a negative rate are skipped.
    """
    comparisons = []
    for offset in offsets:
        rate = params.annual_rate + offset
        if rate < 0:
            continue
        result = grow(params.initial_amount, params.pattern, rate, params.years, params.inflation_rate)
        label = "current" if offset == 0 else f"{offset:+.1%}"
        comparisons.append(
            RateComparison(
                annual_rate=rate,
                final_amount=result.final_amount,
                total_interest=result.total_interest,
                label=label,
            )
        )
    return comparisons


def pattern_variants(
    amount: float,
    increase_rate: float = 0.03,
    decrease_rate: float = 0.02,
    irregular_amounts: tuple[float, ...] = (200, 300, 150, 400, 250, 200),
) -> dict[str, ContributionPattern]:
    """The four standard contribution patterns around a base monthly amount."""
    return {
        "fixed": ContributionPattern.fixed(amount),
        "increasing": ContributionPattern.increasing(amount, increase_rate),
        "decreasing": ContributionPattern.decreasing(amount, decrease_rate),
        "irregular": ContributionPattern.irregular(irregular_amounts),
    }
