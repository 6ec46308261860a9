"""Financial calculators: amortization, savings, taxes, scenarios, portfolio, retirement."""

from .amortization import (
    LOAN_PRESETS,
    HousingCosts,
    amortize,
    amortize_loan,
    calculate_monthly_payment,
    early_payoff,
    early_payoff_for,
    extra_payment_for_target,
    housing_costs,
)
from .income_tax import (
    Deduction,
    FamilyStatus,
    SalaryTaxResult,
    compare_household_situations,
    compute_income_tax,
    compute_salary_tax,
    family_quotient,
    validate_brackets,
)
from .portfolio import RISK_PROFILES, get_risk_profile, simulate
from .retirement import INVESTMENT_STRATEGIES, RetirementProjection, compare_strategies, project_retirement
from .savings import RateComparison, compare_rates, grow, grow_savings, months_to_goal, pattern_variants
from .scenarios import Criterion, RankedResults, ScenarioOutcome, compare
from .tax_adjustment import AccountComparison, apply_tax, compare_accounts
from .tax_tables import (
    ACCOUNT_PROFILES_FR_2024,
    INCOME_TAX_BRACKETS,
    TAX_BRACKETS_2024_FR,
    TAX_BRACKETS_2025_FR,
    get_account_profile,
    get_income_tax_brackets,
)

__all__ = [
    "ACCOUNT_PROFILES_FR_2024",
    "INCOME_TAX_BRACKETS",
    "INVESTMENT_STRATEGIES",
    "LOAN_PRESETS",
    "RISK_PROFILES",
    "TAX_BRACKETS_2024_FR",
    "TAX_BRACKETS_2025_FR",
    "AccountComparison",
    "Criterion",
    "Deduction",
    "FamilyStatus",
    "HousingCosts",
    "RankedResults",
    "RateComparison",
    "RetirementProjection",
    "SalaryTaxResult",
    "ScenarioOutcome",
    "amortize",
    "amortize_loan",
    "apply_tax",
    "calculate_monthly_payment",
    "compare",
    "compare_accounts",
    "compare_household_situations",
    "compare_rates",
    "compare_strategies",
    "compute_income_tax",
    "compute_salary_tax",
    "early_payoff",
    "early_payoff_for",
    "extra_payment_for_target",
    "family_quotient",
    "get_account_profile",
    "get_income_tax_brackets",
    "get_risk_profile",
    "grow",
    "grow_savings",
    "housing_costs",
    "months_to_goal",
    "pattern_variants",
    "project_retirement",
    "simulate",
    "validate_brackets",
]
