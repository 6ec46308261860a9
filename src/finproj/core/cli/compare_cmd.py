"""finproj compare — rank loan and savings scenarios from a YAML file.

File format::

    scenarios:
      - label: 25 years
        loan: {principal: 240000, annual_rate: 0.035, term_months: 300}
      - label: Livret
        savings:
          initial_amount: 1000
          annual_rate: 0.03
          years: 10
          pattern: {kind: fixed, amount: 200}
"""

from __future__ import annotations

from typing import Any

import click
import yaml

from finproj.core.cli.common import engine_errors
from finproj.core.exceptions import InvalidParametersError
from finproj.financial.calculators.scenarios import LOAN_CRITERIA, SAVINGS_CRITERIA, compare as compare_scenarios
from finproj.financial.models import ContributionKind, ContributionPattern, LoanParameters, SavingsParameters


def _savings_params(data: dict[str, Any]) -> SavingsParameters:
    data = dict(data)
    pattern = dict(data.pop("pattern", None) or {})
    kind = ContributionKind(pattern.pop("kind", ContributionKind.FIXED.value))
    pattern["amounts"] = tuple(pattern.get("amounts", ()))
    return SavingsParameters(pattern=ContributionPattern(kind, **pattern), **data)


def parse_scenarios(document: Any) -> list[tuple[str, LoanParameters | SavingsParameters]]:
    """Turn a loaded scenario document into labelled parameter records.

    Raises:
        InvalidParametersError: on a malformed document or entry.
    """
    entries = document.get("scenarios") if isinstance(document, dict) else document
    if not isinstance(entries, list):
        raise InvalidParametersError("Scenario file must hold a list under 'scenarios'")

    scenarios = []
    for i, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise InvalidParametersError(f"Scenario #{i} must be a mapping")
        label = str(entry.get("label", f"Scenario {i}"))
        if "loan" not in entry and "savings" not in entry:
            raise InvalidParametersError(f"Scenario {label!r} needs a 'loan' or 'savings' section")
        try:
            if "loan" in entry:
                params = LoanParameters(**entry["loan"])
            else:
                params = _savings_params(entry["savings"])
        except InvalidParametersError:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidParametersError(f"Scenario {label!r}: {e}") from e
        scenarios.append((label, params))
    return scenarios


@click.command()
@click.argument("scenario_file", type=click.Path(exists=True, dir_okay=False))
def compare(scenario_file) -> None:
    """Rank the scenarios in SCENARIO_FILE and flag the winners."""
    with open(scenario_file) as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise click.ClickException(f"Cannot parse {scenario_file}: {e}") from e

    with engine_errors():
        ranked = compare_scenarios(parse_scenarios(document))

    click.echo(ranked.format_table())
    click.echo("")
    for criterion in LOAN_CRITERIA + SAVINGS_CRITERIA:
        winner = ranked.winners.get(criterion)
        if winner is not None:
            click.echo(f"{criterion.value.replace('_', ' ').capitalize()}: {winner.label}")
