"""Financial projection engines: loans, savings, taxes, portfolios, retirement."""

from .models import (
    ContributionPattern,
    EarlyPayoffInput,
    LoanParameters,
    LoanResult,
    PaymentFrequency,
    SavingsParameters,
    SavingsResult,
)

__all__ = [
    "ContributionPattern",
    "EarlyPayoffInput",
    "LoanParameters",
    "LoanResult",
    "PaymentFrequency",
    "SavingsParameters",
    "SavingsResult",
]
