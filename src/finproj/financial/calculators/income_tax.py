"""Progressive income tax with a family quotient.

Household taxable income is split into "parts" (the family quotient), the
bracket schedule is applied to one part, and the result is multiplied back.
On top of the bracket integration this module derives taxable income from
a gross salary (social contributions, capped deductions) and compares
household situations.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from finproj.core.exceptions import CatalogError, InvalidParametersError
from finproj.financial.calculators.tax_tables import SOCIAL_CONTRIBUTION_RATE, TAX_BRACKETS_2024_FR
from finproj.financial.models import IncomeTaxResult, TaxBracket


class FamilyStatus(Enum):
    """Household status used to derive the family quotient."""

    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"


# Base parts per status; each dependent adds half a part
_BASE_PARTS = {
    FamilyStatus.SINGLE: 1.0,
    FamilyStatus.MARRIED: 2.0,
    FamilyStatus.DIVORCED: 1.0,
}
PARTS_PER_DEPENDENT = 0.5


@dataclass(frozen=True)
class Deduction:
    """A deductible expense.

    When ``percentage`` is set only that share of ``amount`` is deductible,
    capped at ``max_amount`` if given. A zero percentage counts as unset.
    """

    name: str
    amount: float
    percentage: float | None = None
    max_amount: float | None = None

    def __post_init__(self):
        if self.amount < 0:
            raise InvalidParametersError(f"Deduction {self.name} cannot be negative, got {self.amount}")

    @property
    def deductible_amount(self) -> float:
        if not self.percentage or self.amount == 0:
            return self.amount
        deductible = self.amount * self.percentage
        if self.max_amount is not None:
            deductible = min(deductible, self.max_amount)
        return deductible


@dataclass(frozen=True)
class SalaryTaxResult:
    """From gross salary to net salary after contributions and income tax."""

    gross_salary: float
    social_contributions: float
    deductions: float
    taxable_income: float
    income_tax: float
    marginal_rate: float
    family_quotient: float

    @property
    def net_salary(self) -> float:
        return self.gross_salary - self.social_contributions - self.income_tax

    @property
    def effective_rate(self) -> float:
        """Share of gross salary taken by contributions and income tax."""
        if self.gross_salary == 0:
            return 0.0
        return (self.social_contributions + self.income_tax) / self.gross_salary


def validate_brackets(brackets: Sequence[TaxBracket]) -> None:
    """Check that brackets start at 0, are sorted, contiguous and end unbounded.

    Raises:
        CatalogError: on any gap, overlap or missing top bracket.
    """
    if not brackets:
        raise CatalogError("Bracket schedule is empty")
    if brackets[0].lower_bound != 0:
        raise CatalogError(f"First bracket must start at 0, starts at {brackets[0].lower_bound}")
    for prev, curr in zip(brackets, brackets[1:]):
        if curr.lower_bound != prev.upper_bound:
            kind = "gap" if curr.lower_bound > prev.upper_bound else "overlap"
            raise CatalogError(f"Bracket {kind} between {prev.upper_bound} and {curr.lower_bound}")
    if not math.isinf(brackets[-1].upper_bound):
        raise CatalogError(f"Top bracket must be unbounded, ends at {brackets[-1].upper_bound}")


def compute_income_tax(
    taxable_income: float,
    family_quotient: float = 1.0,
    brackets: Sequence[TaxBracket] = TAX_BRACKETS_2024_FR,
) -> IncomeTaxResult:
    """Compute progressive income tax.

    Args:
        taxable_income: Household taxable income
        family_quotient: Number of parts (>= 1)
        brackets: Ordered, contiguous bracket schedule applied per part

    Returns:
        IncomeTaxResult with the household tax and the marginal rate of the
        bracket containing the income per part (0 for zero income).

    Raises:
        InvalidParametersError: negative income or a quotient below 1.
        CatalogError: malformed bracket schedule.
    """
    if taxable_income < 0:
        raise InvalidParametersError(f"Taxable income cannot be negative, got {taxable_income}")
    if family_quotient < 1:
        raise InvalidParametersError(f"Family quotient must be at least 1, got {family_quotient}")
    validate_brackets(brackets)

    income_per_part = taxable_income / family_quotient
    tax_per_part = 0.0
    marginal_rate = 0.0

    for bracket in brackets:
        if income_per_part <= bracket.lower_bound:
            break
        tax_per_part += bracket.rate * (min(income_per_part, bracket.upper_bound) - bracket.lower_bound)
        if income_per_part <= bracket.upper_bound:
            marginal_rate = bracket.rate

    tax = tax_per_part * family_quotient
    logger.debug(
        f"Income tax on {taxable_income:,.2f} ({family_quotient} parts): {tax:,.2f}, marginal {marginal_rate:.0%}"
    )
    return IncomeTaxResult(
        taxable_income=taxable_income,
        tax=tax,
        marginal_rate=marginal_rate,
        family_quotient=family_quotient,
    )


def family_quotient(status: FamilyStatus | str, dependents: int = 0) -> float:
    """Number of parts for a household: 1 single/divorced, 2 married, +0.5 per dependent."""
    status = FamilyStatus(status)
    if dependents < 0:
        raise InvalidParametersError(f"Dependents cannot be negative, got {dependents}")
    return _BASE_PARTS[status] + dependents * PARTS_PER_DEPENDENT


def compute_salary_tax(
    gross_salary: float,
    status: FamilyStatus | str = FamilyStatus.SINGLE,
    dependents: int = 0,
    deductions: Sequence[Deduction] = (),
    brackets: Sequence[TaxBracket] = TAX_BRACKETS_2024_FR,
    social_contribution_rate: float = SOCIAL_CONTRIBUTION_RATE,
) -> SalaryTaxResult:
    """Income tax and net salary for a gross annual salary.

    Taxable income is the gross salary minus social contributions and
    deductions, floored at zero.
    """
    if gross_salary < 0:
        raise InvalidParametersError(f"Gross salary cannot be negative, got {gross_salary}")
    if not 0 <= social_contribution_rate < 1:
        raise InvalidParametersError(f"Social contribution rate must be within [0, 1), got {social_contribution_rate}")

    quotient = family_quotient(status, dependents)
    social = gross_salary * social_contribution_rate
    total_deductions = sum(d.deductible_amount for d in deductions)
    taxable = max(0.0, gross_salary - social - total_deductions)
    income_tax = compute_income_tax(taxable, quotient, brackets)

    return SalaryTaxResult(
        gross_salary=gross_salary,
        social_contributions=social,
        deductions=total_deductions,
        taxable_income=taxable,
        income_tax=income_tax.tax,
        marginal_rate=income_tax.marginal_rate,
        family_quotient=quotient,
    )


def compare_household_situations(
    gross_salary: float,
    status: FamilyStatus | str = FamilyStatus.SINGLE,
    dependents: int = 0,
    deductions: Sequence[Deduction] = (),
    brackets: Sequence[TaxBracket] = TAX_BRACKETS_2024_FR,
    social_contribution_rate: float = SOCIAL_CONTRIBUTION_RATE,
) -> dict[str, SalaryTaxResult]:
    """Tax outcome now, if married (single filers only) and with one more dependent."""
    status = FamilyStatus(status)

    def run(s: FamilyStatus, deps: int) -> SalaryTaxResult:
        return compute_salary_tax(gross_salary, s, deps, deductions, brackets, social_contribution_rate)

    situations = {"current": run(status, dependents)}
    if status == FamilyStatus.SINGLE:
        situations["married"] = run(FamilyStatus.MARRIED, dependents)
    situations["one_more_dependent"] = run(status, dependents + 1)
    return situations
