"""Loan amortization and early-payoff analysis.

Builds fixed-payment amortization schedules and measures what extra
payments are worth:
- Regular schedule with an optional extra principal payment every month
- Early payoff with a lump sum and/or periodic extra payments
- Extra monthly payment needed to hit a target payoff date
- Full monthly housing outlay (property tax, insurance, PMI)

Pure math. Rates are monthly decimal fractions unless noted.
"""

from dataclasses import dataclass
from types import MappingProxyType

from loguru import logger

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.models import (
    AmortizationEntry,
    EarlyPayoffInput,
    EarlyPayoffResult,
    LoanParameters,
    LoanResult,
    PaymentFrequency,
)

# PMI is charged while the down payment is below this share of the property value
PMI_DOWN_PAYMENT_THRESHOLD = 0.20

LOAN_PRESETS = MappingProxyType(
    {
        "mortgage": LoanParameters(principal=300_000, annual_rate=0.035, term_months=360),
        "auto": LoanParameters(principal=25_000, annual_rate=0.042, term_months=60),
        "personal": LoanParameters(principal=10_000, annual_rate=0.085, term_months=36),
    }
)


@dataclass(frozen=True)
class HousingCosts:
    """Monthly cost of owning a financed property."""

    principal_and_interest: float
    property_tax: float
    insurance: float
    pmi: float

    @property
    def total_monthly_payment(self) -> float:
        return self.principal_and_interest + self.property_tax + self.insurance + self.pmi


def _check_loan(principal: float, monthly_rate: float, total_periods: int, extra: float) -> int:
    """Validate loan inputs and return the term as an int."""
    if isinstance(total_periods, float) and total_periods.is_integer():
        total_periods = int(total_periods)
    if isinstance(total_periods, bool) or not isinstance(total_periods, int):
        raise InvalidParametersError(f"Loan term must be a whole number of periods, got {total_periods!r}")
    if principal <= 0:
        raise InvalidParametersError(f"Loan principal must be positive, got {principal}")
    if monthly_rate < 0:
        raise InvalidParametersError(f"Loan rate cannot be negative, got {monthly_rate}")
    if total_periods <= 0:
        raise InvalidParametersError(f"Loan term must be positive, got {total_periods}")
    if extra < 0:
        raise InvalidParametersError(f"Extra payment cannot be negative, got {extra}")
    return total_periods


def calculate_monthly_payment(principal: float, monthly_rate: float, total_periods: int) -> float:
    """Calculate the fixed payment of an amortizing loan.

    Args:
        principal: Loan amount
        monthly_rate: Interest rate per period (e.g., 0.035 / 12)
        total_periods: Number of payments

    Returns:
        Payment per period. With a zero rate the principal is simply split evenly.
    """
    total_periods = _check_loan(principal, monthly_rate, total_periods, 0.0)
    if monthly_rate == 0:
        return principal / total_periods

    factor = (1 + monthly_rate) ** total_periods
    return principal * monthly_rate * factor / (factor - 1)


def amortize(
    principal: float,
    monthly_rate: float,
    total_periods: int,
    extra_per_period: float = 0.0,
) -> LoanResult:
    """Build a full amortization schedule.

    Each period pays ``interest = balance * rate`` and retires
    ``min(payment + extra - interest, balance)`` of principal. The schedule
    stops as soon as the balance is gone; the last scheduled period always
    clears whatever is left so the loan closes exactly.

    Args:
        principal: Loan amount
        monthly_rate: Interest rate per period (0 allowed)
        total_periods: Number of scheduled payments
        extra_per_period: Additional principal paid every period

    Returns:
        LoanResult with the regular payment, totals and per-period schedule.

    Raises:
        InvalidParametersError: non-positive principal or term, negative rate or extra.
    """
    total_periods = _check_loan(principal, monthly_rate, total_periods, extra_per_period)
    payment = calculate_monthly_payment(principal, monthly_rate, total_periods)

    schedule = []
    balance = principal
    cumulative_interest = 0.0
    cumulative_principal = 0.0

    for period in range(1, total_periods + 1):
        interest = balance * monthly_rate
        if period == total_periods:
            principal_paid = balance
        else:
            principal_paid = min(payment + extra_per_period - interest, balance)
        balance = max(0.0, balance - principal_paid)
        cumulative_interest += interest
        cumulative_principal += principal_paid

        schedule.append(
            AmortizationEntry(
                period=period,
                payment=principal_paid + interest,
                principal_portion=principal_paid,
                interest_portion=interest,
                remaining_balance=balance,
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
            )
        )

        if balance <= 0:
            break

    if len(schedule) < total_periods:
        logger.info(f"Loan of {principal:,.2f} paid off after {len(schedule)} of {total_periods} periods")
    logger.debug(
        f"Amortized {principal:,.2f} at {monthly_rate:.6f}/period over {total_periods} periods: "
        f"payment {payment:,.2f}, interest {cumulative_interest:,.2f}"
    )

    return LoanResult(
        base_payment=payment,
        total_interest=cumulative_interest,
        total_paid=cumulative_principal + cumulative_interest,
        schedule=tuple(schedule),
    )


def amortize_loan(params: LoanParameters) -> LoanResult:
    """Amortize a ``LoanParameters`` record."""
    return amortize(params.principal, params.monthly_rate, params.term_months, params.extra_monthly_payment)


def early_payoff(
    principal: float,
    monthly_rate: float,
    total_periods: int,
    extra_monthly: float = 0.0,
    lump_sum: float = 0.0,
    frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
) -> EarlyPayoffResult:
    """Measure the effect of a lump sum and periodic extra payments.

    The lump sum reduces the balance before the first period's interest
    accrues. The extra payment is added only on months that are a multiple
    of the frequency (every month, every 3rd, every 12th). The regular
    payment stays the one of the original loan.

    Args:
        principal: Loan amount
        monthly_rate: Interest rate per period
        total_periods: Original number of payments
        extra_monthly: Extra principal per extra-payment month
        lump_sum: One-time principal reduction at the start
        frequency: How often the extra payment is made

    Returns:
        EarlyPayoffResult comparing the accelerated plan with the regular schedule.

    Raises:
        InvalidParametersError: invalid loan inputs, negative extras, or a lump
            sum larger than the principal.
    """
    total_periods = _check_loan(principal, monthly_rate, total_periods, extra_monthly)
    if lump_sum < 0:
        raise InvalidParametersError(f"Lump sum cannot be negative, got {lump_sum}")
    if lump_sum > principal:
        raise InvalidParametersError(f"Lump sum {lump_sum:,.2f} exceeds the principal {principal:,.2f}")
    frequency = PaymentFrequency(frequency)

    original = amortize(principal, monthly_rate, total_periods)
    payment = original.base_payment

    balance = principal - lump_sum
    month = 0
    total_interest = 0.0

    while balance > 0 and month < total_periods:
        month += 1
        interest = balance * monthly_rate
        extra = extra_monthly if month % frequency.months == 0 else 0.0
        if month == total_periods:
            principal_paid = balance
        else:
            principal_paid = min(payment + extra - interest, balance)
        balance = max(0.0, balance - principal_paid)
        total_interest += interest

    result = EarlyPayoffResult(
        months_saved=total_periods - month,
        interest_saved=original.total_interest - total_interest,
        new_total_interest=total_interest,
        payoff_month_index=month,
        original_total_interest=original.total_interest,
    )
    logger.debug(
        f"Early payoff ({frequency.value} extra {extra_monthly:,.2f}, lump {lump_sum:,.2f}): "
        f"{result.months_saved} months and {result.interest_saved:,.2f} interest saved"
    )
    return result


def early_payoff_for(params: LoanParameters, payoff: EarlyPayoffInput) -> EarlyPayoffResult:
    """Run ``early_payoff`` from parameter records."""
    return early_payoff(
        params.principal,
        params.monthly_rate,
        params.term_months,
        extra_monthly=payoff.extra_monthly,
        lump_sum=payoff.lump_sum,
        frequency=payoff.frequency,
    )


def extra_payment_for_target(
    principal: float,
    monthly_rate: float,
    total_periods: int,
    target_periods: int,
) -> float:
    """Extra monthly payment needed to retire the loan in ``target_periods``.

    Returns 0 when the target is the original term.
    """
    total_periods = _check_loan(principal, monthly_rate, total_periods, 0.0)
    if not 0 < target_periods <= total_periods:
        raise InvalidParametersError(f"Target payoff must be within 1..{total_periods} periods, got {target_periods}")

    base = calculate_monthly_payment(principal, monthly_rate, total_periods)
    accelerated = calculate_monthly_payment(principal, monthly_rate, target_periods)
    return max(0.0, accelerated - base)


def housing_costs(
    loan_result: LoanResult,
    property_value: float,
    down_payment: float,
    annual_property_tax: float = 0.0,
    annual_insurance: float = 0.0,
    pmi_rate: float = 0.0,
) -> HousingCosts:
    """Monthly cost of a financed property on top of principal and interest.

    Args:
        loan_result: Amortized loan financing the property
        property_value: Purchase price
        down_payment: Cash put down
        annual_property_tax: Yearly property tax
        annual_insurance: Yearly home insurance
        pmi_rate: Annual private mortgage insurance rate on the loan amount

    Returns:
        HousingCosts with PMI only when the down payment is below 20%.
    """
    for name, value in [
        ("property value", property_value),
        ("down payment", down_payment),
        ("property tax", annual_property_tax),
        ("insurance", annual_insurance),
        ("PMI rate", pmi_rate),
    ]:
        if value < 0:
            raise InvalidParametersError(f"{name.capitalize()} cannot be negative, got {value}")

    pmi = 0.0
    if property_value > 0 and down_payment / property_value < PMI_DOWN_PAYMENT_THRESHOLD:
        pmi = loan_result.principal * pmi_rate / 12

    return HousingCosts(
        principal_and_interest=loan_result.base_payment,
        property_tax=annual_property_tax / 12,
        insurance=annual_insurance / 12,
        pmi=pmi,
    )
