"""Tax adjustment of investment gains by savings account regime.

Applies a ``TaxAccountProfile`` to gross gains:
- Tax-free regimes keep everything
- Before the minimum holding period the early-withdrawal rate applies
- After it, the regime's rate applies to gains above the allowance, with an
  optional long-term rate
- Social charges apply to the gross gains of every taxed regime
"""

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.calculators.savings import grow_savings
from finproj.financial.calculators.tax_tables import ACCOUNT_PROFILES_FR_2024
from finproj.financial.models import (
    SavingsParameters,
    SavingsResult,
    TaxAccountProfile,
    TaxCalculationResult,
)


@dataclass(frozen=True)
class AccountComparison:
    """The same savings plan held in one account regime."""

    profile: TaxAccountProfile
    savings: SavingsResult
    tax: TaxCalculationResult
    exceeds_cap: bool = False

    @property
    def net_final_amount(self) -> float:
        return self.savings.total_contributions + self.tax.net_interest

    @property
    def net_return(self) -> float:
        """Net gains as a share of everything paid in."""
        if self.savings.total_contributions == 0:
            return 0.0
        return self.tax.net_interest / self.savings.total_contributions


def _tax_rate(profile: TaxAccountProfile, holding_years: float) -> float:
    if profile.long_term_years is not None and holding_years >= profile.long_term_years:
        return profile.long_term_tax_rate
    return profile.tax_rate


def apply_tax(gross_interest: float, profile: TaxAccountProfile, holding_years: float) -> TaxCalculationResult:
    """Net-of-tax gains for a given holding period.

    Args:
        gross_interest: Gains before tax
        profile: Account regime
        holding_years: How long the money stayed in the account

    Returns:
        TaxCalculationResult with ``net_interest <= gross_interest``.

    Raises:
        InvalidParametersError: negative gains or holding period.
    """
    if gross_interest < 0:
        raise InvalidParametersError(f"Gross interest cannot be negative, got {gross_interest}")
    if holding_years < 0:
        raise InvalidParametersError(f"Holding period cannot be negative, got {holding_years}")

    if profile.tax_free:
        taxes = 0.0
        social_charges = 0.0
    else:
        if holding_years < profile.min_holding_years:
            taxes = gross_interest * profile.early_withdrawal_rate
        else:
            taxes = max(0.0, gross_interest - profile.allowance) * _tax_rate(profile, holding_years)
        social_charges = gross_interest * profile.social_charge_rate

    net_interest = gross_interest - taxes - social_charges
    return TaxCalculationResult(
        gross_interest=gross_interest,
        taxes=taxes,
        social_charges=social_charges,
        net_interest=net_interest,
        effective_rate=net_interest / gross_interest if gross_interest else 0.0,
    )


def compare_accounts(
    params: SavingsParameters,
    profiles: Iterable[TaxAccountProfile] = ACCOUNT_PROFILES_FR_2024.values(),
    holding_years: float | None = None,
) -> list[AccountComparison]:
    """Grow a plan once and tax its gains under each regime.

    The holding period defaults to the plan horizon. Results are ordered by
    net final amount, best first (stable for equal amounts).
    """
    holding = params.years if holding_years is None else holding_years
    savings = grow_savings(params)

    comparisons = []
    for profile in profiles:
        exceeds_cap = profile.cap_amount is not None and savings.total_contributions > profile.cap_amount
        if exceeds_cap:
            logger.info(
                f"{profile.name}: contributions {savings.total_contributions:,.2f} exceed the "
                f"{profile.cap_amount:,.0f} cap"
            )
        comparisons.append(
            AccountComparison(
                profile=profile,
                savings=savings,
                tax=apply_tax(savings.total_interest, profile, holding),
                exceeds_cap=exceeds_cap,
            )
        )

    comparisons.sort(key=lambda c: c.net_final_amount, reverse=True)
    return comparisons
