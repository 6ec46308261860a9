"""Core financial data models.

Immutable parameter and result records shared by the projection engines.
Parameter records validate themselves on construction and raise
``InvalidParametersError``; catalog records (brackets, account and risk
profiles) raise ``CatalogError`` because a malformed catalog is a
programming error rather than bad user input.

Rates are decimal fractions throughout (0.035 means 3.5%).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from finproj.core.exceptions import CatalogError, InvalidParametersError

# Flat tax applied to early withdrawals when a regime defines no penalty rate
STANDARD_TAX_RATE = 0.30

# =============================================================================
# LOANS
# =============================================================================


class PaymentFrequency(Enum):
    """How often an extra early-payoff payment is made."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"

    @property
    def months(self) -> int:
        """Number of months between two extra payments."""
        return {"monthly": 1, "quarterly": 3, "annually": 12}[self.value]


@dataclass(frozen=True)
class LoanParameters:
    """A fixed-rate loan to amortize.

    Attributes:
        principal: Amount borrowed.
        annual_rate: Nominal annual rate (e.g., 0.035 for 3.5%).
        term_months: Number of monthly payments.
        extra_monthly_payment: Additional principal paid every month.
    """

    principal: float
    annual_rate: float
    term_months: int
    extra_monthly_payment: float = 0.0

    def __post_init__(self):
        if self.principal <= 0:
            raise InvalidParametersError(f"Loan principal must be positive, got {self.principal}")
        if self.annual_rate < 0:
            raise InvalidParametersError(f"Loan rate cannot be negative, got {self.annual_rate}")
        if self.term_months <= 0:
            raise InvalidParametersError(f"Loan term must be positive, got {self.term_months}")
        if self.extra_monthly_payment < 0:
            raise InvalidParametersError(f"Extra payment cannot be negative, got {self.extra_monthly_payment}")

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 12


@dataclass(frozen=True)
class AmortizationEntry:
    """One period of an amortization schedule.

    ``payment`` is the cash actually paid in the period (principal + interest),
    so the final entry of a schedule cut short by extra payments is smaller
    than the regular installment.
    """

    period: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float
    cumulative_interest: float
    cumulative_principal: float

    def as_row(self) -> dict[str, float | int]:
        """Flat mapping with stable keys, for table and CSV consumers."""
        return {
            "period": self.period,
            "payment": self.payment,
            "principal": self.principal_portion,
            "interest": self.interest_portion,
            "balance": self.remaining_balance,
            "cumulative_interest": self.cumulative_interest,
            "cumulative_principal": self.cumulative_principal,
        }


@dataclass(frozen=True)
class LoanResult:
    """Summary of a full amortization schedule."""

    base_payment: float
    total_interest: float
    total_paid: float
    schedule: tuple[AmortizationEntry, ...] = ()

    @property
    def periods(self) -> int:
        """Number of payments actually made."""
        return len(self.schedule)

    @property
    def principal(self) -> float:
        """Principal retired over the schedule."""
        return self.total_paid - self.total_interest


@dataclass(frozen=True)
class EarlyPayoffInput:
    """Accelerated payoff parameters: recurring extra and/or a one-time lump sum."""

    extra_monthly: float = 0.0
    lump_sum: float = 0.0
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY

    def __post_init__(self):
        if self.extra_monthly < 0:
            raise InvalidParametersError(f"Extra payment cannot be negative, got {self.extra_monthly}")
        if self.lump_sum < 0:
            raise InvalidParametersError(f"Lump sum cannot be negative, got {self.lump_sum}")


@dataclass(frozen=True)
class EarlyPayoffResult:
    """Savings from paying a loan off early.

    Attributes:
        months_saved: Scheduled payments that no longer need to be made.
        interest_saved: Original total interest minus the new total interest.
        new_total_interest: Interest paid under the accelerated plan.
        payoff_month_index: Number of payments made under the accelerated plan.
        original_total_interest: Interest paid under the regular schedule.
    """

    months_saved: int
    interest_saved: float
    new_total_interest: float
    payoff_month_index: int
    original_total_interest: float

    @property
    def years_saved(self) -> int:
        return self.months_saved // 12

    @property
    def remaining_months(self) -> int:
        """Months saved beyond the whole years."""
        return self.months_saved % 12


# =============================================================================
# SAVINGS
# =============================================================================


class ContributionKind(Enum):
    """How monthly savings contributions evolve over time."""

    FIXED = "fixed"
    INCREASING = "increasing"  # Grows by adjust_rate once per elapsed year
    DECREASING = "decreasing"  # Shrinks by adjust_rate once per elapsed year
    IRREGULAR = "irregular"  # Cycles through a fixed sequence of amounts


@dataclass(frozen=True)
class ContributionPattern:
    """Monthly contribution pattern.

    Use the ``fixed``/``increasing``/``decreasing``/``irregular`` constructors
    rather than filling the fields by hand.

    Attributes:
        kind: Pattern type.
        amount: Base monthly amount (unused for irregular patterns).
        adjust_rate: Annual increase/decrease rate for increasing/decreasing patterns.
        amounts: Cycle of monthly amounts for irregular patterns.
    """

    kind: ContributionKind
    amount: float = 0.0
    adjust_rate: float = 0.0
    amounts: tuple[float, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "amounts", tuple(float(a) for a in self.amounts))
        if self.amount < 0:
            raise InvalidParametersError(f"Contribution amount cannot be negative, got {self.amount}")
        if self.adjust_rate < 0:
            raise InvalidParametersError(f"Contribution adjust rate cannot be negative, got {self.adjust_rate}")
        if self.kind == ContributionKind.IRREGULAR:
            if not self.amounts:
                raise InvalidParametersError("Irregular contribution pattern needs at least one amount")
            if any(a < 0 for a in self.amounts):
                raise InvalidParametersError(f"Irregular contributions cannot be negative: {self.amounts}")

    @classmethod
    def fixed(cls, amount: float) -> ContributionPattern:
        return cls(ContributionKind.FIXED, amount=amount)

    @classmethod
    def increasing(cls, amount: float, annual_rate: float) -> ContributionPattern:
        return cls(ContributionKind.INCREASING, amount=amount, adjust_rate=annual_rate)

    @classmethod
    def decreasing(cls, amount: float, annual_rate: float) -> ContributionPattern:
        return cls(ContributionKind.DECREASING, amount=amount, adjust_rate=annual_rate)

    @classmethod
    def irregular(cls, amounts) -> ContributionPattern:
        return cls(ContributionKind.IRREGULAR, amounts=tuple(amounts))

    @property
    def base_amount(self) -> float:
        """Representative monthly amount: the cycle mean for irregular patterns."""
        if self.kind == ContributionKind.IRREGULAR:
            return sum(self.amounts) / len(self.amounts)
        return self.amount


@dataclass(frozen=True)
class SavingsParameters:
    """A savings plan.

    Attributes:
        initial_amount: Balance at month 0.
        pattern: Monthly contribution pattern.
        annual_rate: Nominal annual return, compounded monthly.
        years: Plan horizon in years (fractions allowed, rounded to whole months).
        inflation_rate: Annual inflation used for the real-value series.
    """

    initial_amount: float
    pattern: ContributionPattern
    annual_rate: float
    years: float
    inflation_rate: float = 0.0

    def __post_init__(self):
        if self.initial_amount < 0:
            raise InvalidParametersError(f"Initial amount cannot be negative, got {self.initial_amount}")
        if self.annual_rate < 0:
            raise InvalidParametersError(f"Savings rate cannot be negative, got {self.annual_rate}")
        if self.inflation_rate < 0:
            raise InvalidParametersError(f"Inflation rate cannot be negative, got {self.inflation_rate}")
        if self.years <= 0 or self.months < 1:
            raise InvalidParametersError(f"Savings horizon must cover at least one month, got {self.years} years")

    @property
    def months(self) -> int:
        return round(self.years * 12)


@dataclass(frozen=True)
class MonthlySavingsEntry:
    """One month of savings growth."""

    month: int
    balance: float
    interest: float
    contribution: float
    real_value: float

    def as_row(self) -> dict[str, float | int]:
        """Flat mapping with stable keys, for table and CSV consumers."""
        return {
            "month": self.month,
            "balance": self.balance,
            "interest": self.interest,
            "contribution": self.contribution,
            "real_value": self.real_value,
        }


@dataclass(frozen=True)
class SavingsResult:
    """Summary of a savings projection.

    ``total_contributions`` includes the initial amount.
    """

    final_amount: float
    total_contributions: float
    total_interest: float
    schedule: tuple[MonthlySavingsEntry, ...] = ()

    @property
    def real_final_amount(self) -> float:
        """Final balance in today's money."""
        if not self.schedule:
            return self.final_amount
        return self.schedule[-1].real_value


# =============================================================================
# TAXES
# =============================================================================


class AccountKind(Enum):
    """Savings account regimes (French catalog)."""

    STANDARD = "standard"
    LIVRET_A = "livret_a"
    PEL = "pel"
    ASSURANCE_VIE = "assurance_vie"
    PEA = "pea"


@dataclass(frozen=True)
class TaxAccountProfile:
    """Tax regime applied to the gains of a savings account.

    Attributes:
        kind: Regime identifier.
        name: Display name.
        tax_rate: Income tax on gains once the minimum holding period is met.
        social_charge_rate: Social charges on gross gains.
        min_holding_years: Holding period below which early-withdrawal taxation applies.
        early_withdrawal_penalty_rate: Tax rate on early withdrawal. None means the
            standard flat rate applies.
        cap_amount: Maximum deposits allowed in the account (informational).
        allowance: Gains exempt from tax_rate after the holding period.
        long_term_years: Holding period after which long_term_tax_rate replaces tax_rate.
        long_term_tax_rate: Tax rate once long_term_years is reached.
        tax_free: Gains are exempt from both tax and social charges.
        description: Human-readable summary.
    """

    kind: AccountKind
    name: str
    tax_rate: float
    social_charge_rate: float
    min_holding_years: float = 0
    early_withdrawal_penalty_rate: float | None = None
    cap_amount: float | None = None
    allowance: float = 0.0
    long_term_years: float | None = None
    long_term_tax_rate: float | None = None
    tax_free: bool = False
    description: str = ""

    def __post_init__(self):
        rates = [self.tax_rate, self.social_charge_rate, self.early_withdrawal_penalty_rate, self.long_term_tax_rate]
        for rate in rates:
            if rate is not None and not 0 <= rate <= 1:
                raise CatalogError(f"Account profile {self.name} has a rate outside [0, 1]: {rate}")
        worst_tax = max(r for r in [self.tax_rate, self.long_term_tax_rate] if r is not None)
        if self.min_holding_years > 0:
            worst_tax = max(worst_tax, self.early_withdrawal_rate)
        if worst_tax + self.social_charge_rate > 1:
            raise CatalogError(f"Account profile {self.name} can tax more than the gains")
        if (self.long_term_years is None) != (self.long_term_tax_rate is None):
            raise CatalogError(f"Account profile {self.name} needs both long_term_years and long_term_tax_rate")
        if self.min_holding_years < 0 or self.allowance < 0:
            raise CatalogError(f"Account profile {self.name} has a negative holding period or allowance")

    @property
    def early_withdrawal_rate(self) -> float:
        """Tax rate on gains withdrawn before the minimum holding period."""
        if self.early_withdrawal_penalty_rate is None:
            return STANDARD_TAX_RATE
        return self.early_withdrawal_penalty_rate


@dataclass(frozen=True)
class TaxCalculationResult:
    """Net-of-tax outcome for investment gains.

    ``effective_rate`` is the share of the gross gains kept (net / gross).
    """

    gross_interest: float
    taxes: float
    social_charges: float
    net_interest: float
    effective_rate: float


@dataclass(frozen=True)
class TaxBracket:
    """One marginal slice of a progressive tax schedule."""

    lower_bound: float
    upper_bound: float
    rate: float

    def __post_init__(self):
        if self.upper_bound <= self.lower_bound:
            raise CatalogError(f"Bracket upper bound {self.upper_bound} must exceed lower bound {self.lower_bound}")
        if not 0 <= self.rate <= 1:
            raise CatalogError(f"Bracket rate must be within [0, 1], got {self.rate}")

    @property
    def is_unbounded(self) -> bool:
        return math.isinf(self.upper_bound)


@dataclass(frozen=True)
class IncomeTaxResult:
    """Progressive income tax outcome."""

    taxable_income: float
    tax: float
    marginal_rate: float
    family_quotient: float = 1.0

    @property
    def average_rate(self) -> float:
        if self.taxable_income == 0:
            return 0.0
        return self.tax / self.taxable_income


# =============================================================================
# PORTFOLIO
# =============================================================================


@dataclass(frozen=True)
class AssetAllocation:
    """Portfolio weights by asset class. Weights must sum to 1."""

    stocks: float
    bonds: float
    real_estate: float = 0.0
    commodities: float = 0.0
    cash: float = 0.0

    def __post_init__(self):
        weights = self.as_dict()
        if any(w < 0 for w in weights.values()):
            raise CatalogError(f"Allocation weights cannot be negative: {weights}")
        if not math.isclose(sum(weights.values()), 1.0, abs_tol=1e-9):
            raise CatalogError(f"Allocation weights must sum to 1, got {sum(weights.values()):.4f}")

    def as_dict(self) -> dict[str, float]:
        return {
            "stocks": self.stocks,
            "bonds": self.bonds,
            "real_estate": self.real_estate,
            "commodities": self.commodities,
            "cash": self.cash,
        }


class RiskLevel(Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


@dataclass(frozen=True)
class RiskProfile:
    """An investment posture: expected annual return, volatility and allocation."""

    id: str
    name: str
    expected_return: float
    volatility: float
    allocation: AssetAllocation
    risk_level: RiskLevel
    description: str = ""

    def __post_init__(self):
        if self.volatility < 0:
            raise CatalogError(f"Risk profile {self.id} has negative volatility: {self.volatility}")
        if self.expected_return < 0:
            raise CatalogError(f"Risk profile {self.id} has negative expected return: {self.expected_return}")


@dataclass(frozen=True)
class RiskMetrics:
    """Dispersion of the three projected outcomes (percentages, except the ratio)."""

    max_drawdown: float
    sharpe_like_ratio: float
    volatility: float


@dataclass(frozen=True)
class PortfolioSimulation:
    """Optimistic/realistic/pessimistic projections for one risk profile."""

    profile: RiskProfile
    optimistic: SavingsResult
    realistic: SavingsResult
    pessimistic: SavingsResult
    risk_metrics: RiskMetrics
    returns: dict[str, float] = field(default_factory=dict)
