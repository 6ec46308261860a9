"""
Tax Tables for Financial Projections - French regime

Single source of truth for the static tax catalogs used by the calculators.
Catalogs are immutable and keyed by year so callers can pass in an alternate
jurisdiction or year without touching the engines.

Sources:
- Income tax brackets: Code général des impôts art. 197 (barème 2024, 2025)
- Savings regimes: service-public.fr fiches Livret A, PEL, assurance vie, PEA

Rates are decimal fractions.
"""

import math
from types import MappingProxyType

from finproj.core.exceptions import CatalogError
from finproj.financial.models import STANDARD_TAX_RATE, AccountKind, TaxAccountProfile, TaxBracket


def brackets_from_thresholds(thresholds: list[tuple[float, float]]) -> tuple[TaxBracket, ...]:
    """Build contiguous brackets from ``(upper_bound, rate)`` pairs.

    The first bracket starts at 0 and each following bracket starts where the
    previous one ends. The last upper bound must be ``math.inf``.
    """
    if not thresholds:
        raise CatalogError("A bracket table needs at least one bracket")
    brackets = []
    lower = 0.0
    for upper, rate in thresholds:
        brackets.append(TaxBracket(lower_bound=lower, upper_bound=upper, rate=rate))
        lower = upper
    if not math.isinf(brackets[-1].upper_bound):
        raise CatalogError("The top bracket must be unbounded")
    return tuple(brackets)


# =============================================================================
# INCOME TAX BRACKETS (per part of family quotient)
# =============================================================================

TAX_BRACKETS_2024_FR = brackets_from_thresholds(
    [
        (10_777, 0.00),  # 0% up to 10,777
        (27_478, 0.11),  # 11% on 10,778 - 27,478
        (78_570, 0.30),  # 30% on 27,479 - 78,570
        (168_994, 0.41),  # 41% on 78,571 - 168,994
        (math.inf, 0.45),  # 45% above 168,994
    ]
)

TAX_BRACKETS_2025_FR = brackets_from_thresholds(
    [
        (11_497, 0.00),
        (29_315, 0.11),
        (83_823, 0.30),
        (180_294, 0.41),
        (math.inf, 0.45),
    ]
)

INCOME_TAX_BRACKETS = MappingProxyType(
    {
        2024: TAX_BRACKETS_2024_FR,
        2025: TAX_BRACKETS_2025_FR,
    }
)


# =============================================================================
# SALARY AND SAVINGS CONSTANTS
# =============================================================================

# Simplified employee social contributions on gross salary
SOCIAL_CONTRIBUTION_RATE = 0.22

# Social charges on investment gains (prélèvements sociaux)
SOCIAL_CHARGES_RATE = 0.172


# =============================================================================
# SAVINGS ACCOUNT REGIMES
# =============================================================================

ACCOUNT_PROFILES_FR_2024 = MappingProxyType(
    {
        AccountKind.STANDARD: TaxAccountProfile(
            kind=AccountKind.STANDARD,
            name="Compte Standard",
            tax_rate=STANDARD_TAX_RATE,
            social_charge_rate=SOCIAL_CHARGES_RATE,
            description="Ordinary savings account under the flat tax",
        ),
        AccountKind.LIVRET_A: TaxAccountProfile(
            kind=AccountKind.LIVRET_A,
            name="Livret A",
            tax_rate=0.0,
            social_charge_rate=0.0,
            cap_amount=22_950,
            tax_free=True,
            description="Tax-free regulated savings, capped at 22,950",
        ),
        AccountKind.PEL: TaxAccountProfile(
            kind=AccountKind.PEL,
            name="Plan Épargne Logement (PEL)",
            tax_rate=0.0,  # Between 4 and 12 years only social charges apply
            social_charge_rate=SOCIAL_CHARGES_RATE,
            min_holding_years=4,
            cap_amount=61_200,
            long_term_years=12,
            long_term_tax_rate=0.24,
            description="Housing savings plan, taxation depends on holding period",
        ),
        AccountKind.ASSURANCE_VIE: TaxAccountProfile(
            kind=AccountKind.ASSURANCE_VIE,
            name="Assurance Vie",
            tax_rate=0.075,
            social_charge_rate=SOCIAL_CHARGES_RATE,
            min_holding_years=8,
            allowance=4_600,
            description="Reduced tax after 8 years on gains above the annual allowance",
        ),
        AccountKind.PEA: TaxAccountProfile(
            kind=AccountKind.PEA,
            name="Plan d'Épargne en Actions (PEA)",
            tax_rate=0.0,
            social_charge_rate=SOCIAL_CHARGES_RATE,
            min_holding_years=5,
            early_withdrawal_penalty_rate=0.225,
            cap_amount=150_000,
            description="Equity savings plan, income-tax exempt after 5 years",
        ),
    }
)

ACCOUNT_PROFILES = MappingProxyType(
    {
        2024: ACCOUNT_PROFILES_FR_2024,
    }
)


def get_account_profile(kind: AccountKind | str, year: int = 2024) -> TaxAccountProfile:
    """Look up a savings regime by kind (enum or its string value)."""
    if isinstance(kind, str):
        try:
            kind = AccountKind(kind)
        except ValueError:
            raise KeyError(f"Unknown account kind: {kind!r}") from None
    try:
        return ACCOUNT_PROFILES[year][kind]
    except KeyError:
        raise KeyError(f"No {kind.value} profile for year {year}") from None


def get_income_tax_brackets(year: int = 2024) -> tuple[TaxBracket, ...]:
    """Income tax brackets for a given year."""
    try:
        return INCOME_TAX_BRACKETS[year]
    except KeyError:
        raise KeyError(f"No income tax brackets for year {year}; known years: {sorted(INCOME_TAX_BRACKETS)}") from None
