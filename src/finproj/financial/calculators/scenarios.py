"""Side-by-side comparison of loan and savings scenarios.

Runs each labelled parameter record through its engine, ranks the outcomes
within their kind and records the winner of every criterion, so a display
layer can flag the best entries without recomputing anything.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from finproj.core.exceptions import InvalidParametersError
from finproj.financial.calculators.amortization import amortize_loan
from finproj.financial.calculators.savings import grow_savings
from finproj.financial.models import LoanParameters, LoanResult, SavingsParameters, SavingsResult


class Criterion(Enum):
    LOWEST_PAYMENT = "lowest_payment"
    LOWEST_INTEREST = "lowest_interest"
    HIGHEST_FINAL_AMOUNT = "highest_final_amount"
    HIGHEST_INTEREST_EARNED = "highest_interest_earned"


LOAN_CRITERIA = (Criterion.LOWEST_PAYMENT, Criterion.LOWEST_INTEREST)
SAVINGS_CRITERIA = (Criterion.HIGHEST_FINAL_AMOUNT, Criterion.HIGHEST_INTEREST_EARNED)


@dataclass(frozen=True)
class ScenarioOutcome:
    """One scenario after running its engine.

    ``index`` is the position in the input; ``rank`` is 1-based within the
    scenario's kind.
    """

    label: str
    index: int
    params: LoanParameters | SavingsParameters
    result: LoanResult | SavingsResult
    rank: int = 0

    @property
    def kind(self) -> str:
        return "loan" if isinstance(self.result, LoanResult) else "savings"


@dataclass(frozen=True)
class RankedResults:
    """Ranked outcomes plus the winner of each applicable criterion."""

    outcomes: tuple[ScenarioOutcome, ...]
    winners: dict[Criterion, ScenarioOutcome]
    interest_spread: float | None = None
    final_amount_spread: float | None = None

    @property
    def loans(self) -> list[ScenarioOutcome]:
        return [o for o in self.outcomes if o.kind == "loan"]

    @property
    def savings(self) -> list[ScenarioOutcome]:
        return [o for o in self.outcomes if o.kind == "savings"]

    def is_winner(self, outcome: ScenarioOutcome, criterion: Criterion) -> bool:
        winner = self.winners.get(criterion)
        return winner is not None and winner.index == outcome.index

    def format_table(self) -> str:
        """Format comparison as text table."""
        lines = []
        lines.append("=" * 75)
        lines.append("  Scenario Comparison")
        lines.append("=" * 75)

        if self.loans:
            lines.append("")
            lines.append("-" * 75)
            lines.append(f"{'#':<4} {'Loan':<24} {'Payment':>14} {'Total Interest':>16} {'Periods':>10}")
            lines.append("-" * 75)
            for o in self.loans:
                flags = "*" if self.is_winner(o, Criterion.LOWEST_INTEREST) else ""
                lines.append(
                    f"{o.rank:<4} {o.label + flags:<24} {o.result.base_payment:>14,.2f} "
                    f"{o.result.total_interest:>16,.2f} {o.result.periods:>10}"
                )
            lines.append("-" * 75)
            lines.append(f"Interest spread: {self.interest_spread:,.2f}")

        if self.savings:
            lines.append("")
            lines.append("-" * 75)
            lines.append(f"{'#':<4} {'Savings':<24} {'Final Amount':>14} {'Interest':>16} {'Paid In':>14}")
            lines.append("-" * 75)
            for o in self.savings:
                flags = "*" if self.is_winner(o, Criterion.HIGHEST_FINAL_AMOUNT) else ""
                lines.append(
                    f"{o.rank:<4} {o.label + flags:<24} {o.result.final_amount:>14,.2f} "
                    f"{o.result.total_interest:>16,.2f} {o.result.total_contributions:>14,.2f}"
                )
            lines.append("-" * 75)
            lines.append(f"Final amount spread: {self.final_amount_spread:,.2f}")

        return "\n".join(lines)


def _run(label: str, index: int, params) -> ScenarioOutcome:
    if isinstance(params, LoanParameters):
        result = amortize_loan(params)
    elif isinstance(params, SavingsParameters):
        result = grow_savings(params)
    else:
        raise InvalidParametersError(f"Scenario {label!r} has unsupported parameters: {type(params).__name__}")
    return ScenarioOutcome(label=label, index=index, params=params, result=result)


def _ranked(outcomes: list[ScenarioOutcome], key) -> list[ScenarioOutcome]:
    ordered = sorted(outcomes, key=key)
    return [
        ScenarioOutcome(label=o.label, index=o.index, params=o.params, result=o.result, rank=rank)
        for rank, o in enumerate(ordered, start=1)
    ]


def compare(scenarios: Sequence[tuple[str, LoanParameters | SavingsParameters]]) -> RankedResults:
    """Run and rank labelled scenarios.

    Loans rank by total interest (lowest first), savings by final amount
    (highest first). Ties keep input order, and the first scenario seen wins
    a tied criterion.

    Raises:
        InvalidParametersError: empty input or unsupported parameter records.
    """
    if not scenarios:
        raise InvalidParametersError("Need at least one scenario to compare")

    runs = [_run(label, i, params) for i, (label, params) in enumerate(scenarios)]
    loans = [o for o in runs if o.kind == "loan"]
    savings = [o for o in runs if o.kind == "savings"]

    # Python's sort is stable, so equal keys keep first-seen order
    ranked_loans = _ranked(loans, key=lambda o: o.result.total_interest)
    ranked_savings = _ranked(savings, key=lambda o: -o.result.final_amount)
    by_index = {o.index: o for o in ranked_loans + ranked_savings}

    winners = {}
    interest_spread = None
    final_amount_spread = None

    if loans:
        # min()/max() return the first of equal candidates
        winners[Criterion.LOWEST_PAYMENT] = by_index[min(loans, key=lambda o: o.result.base_payment).index]
        winners[Criterion.LOWEST_INTEREST] = by_index[min(loans, key=lambda o: o.result.total_interest).index]
        interests = [o.result.total_interest for o in loans]
        interest_spread = max(interests) - min(interests)

    if savings:
        winners[Criterion.HIGHEST_FINAL_AMOUNT] = by_index[max(savings, key=lambda o: o.result.final_amount).index]
        winners[Criterion.HIGHEST_INTEREST_EARNED] = by_index[max(savings, key=lambda o: o.result.total_interest).index]
        finals = [o.result.final_amount for o in savings]
        final_amount_spread = max(finals) - min(finals)

    logger.debug(f"Compared {len(loans)} loan and {len(savings)} savings scenarios")
    return RankedResults(
        outcomes=tuple(ranked_loans + ranked_savings),
        winners=winners,
        interest_spread=interest_spread,
        final_amount_spread=final_amount_spread,
    )
