"""finproj savings — compound-growth projection."""

from __future__ import annotations

import click

from finproj.core.cli.common import console, engine_errors, money, percent, summary_table
from finproj.financial.calculators.savings import compare_rates, grow_savings, months_to_goal
from finproj.financial.calculators.tax_adjustment import compare_accounts
from finproj.financial.models import ContributionKind, ContributionPattern, SavingsParameters


def _parse_amounts(raw: str | None) -> tuple[float, ...]:
    if not raw:
        return ()
    try:
        return tuple(float(part) for part in raw.split(","))
    except ValueError:
        raise click.BadParameter(f"expected comma-separated numbers, got {raw!r}", param_hint="--amounts") from None


@click.command()
@click.option("--initial", type=float, default=0.0, help="Starting balance.")
@click.option("--monthly", type=float, default=0.0, help="Base monthly contribution.")
@click.option("--rate", "annual_rate", type=float, required=True, help="Annual return (0.035 = 3.5%).")
@click.option("--years", type=float, required=True, help="Horizon in years.")
@click.option("--inflation", type=float, default=0.0, help="Annual inflation for the real value.")
@click.option(
    "--pattern",
    type=click.Choice([k.value for k in ContributionKind]),
    default=ContributionKind.FIXED.value,
    help="How contributions evolve.",
)
@click.option("--adjust-rate", type=float, default=0.0, help="Yearly change for increasing/decreasing patterns.")
@click.option("--amounts", default=None, help="Comma-separated cycle for the irregular pattern.")
@click.option("--goal", type=float, default=None, help="Also estimate months to reach this balance.")
@click.option("--compare-rates", "show_rates", is_flag=True, help="Show the plan at neighbouring rates.")
@click.option("--by-account", is_flag=True, help="Show net results in each savings account regime.")
def savings(
    initial, monthly, annual_rate, years, inflation, pattern, adjust_rate, amounts, goal, show_rates, by_account
) -> None:
    """Project a savings plan with compound growth."""
    from rich.table import Table

    with engine_errors():
        contribution = ContributionPattern(
            ContributionKind(pattern), amount=monthly, adjust_rate=adjust_rate, amounts=_parse_amounts(amounts)
        )
        params = SavingsParameters(
            initial_amount=initial,
            pattern=contribution,
            annual_rate=annual_rate,
            years=years,
            inflation_rate=inflation,
        )
        result = grow_savings(params)

    rows = [
        ("Final amount", money(result.final_amount)),
        ("Total contributions", money(result.total_contributions)),
        ("Total interest", money(result.total_interest)),
        ("Real final amount", money(result.real_final_amount)),
    ]
    if goal is not None:
        with engine_errors():
            months = months_to_goal(goal, initial, monthly, annual_rate)
        rows.append(("Months to goal", "unreachable" if months is None else str(months)))

    out = console()
    out.print(summary_table("Savings", rows))

    if show_rates:
        table = Table(title="Rate comparison")
        for column in ("Scenario", "Rate", "Final amount", "Interest"):
            table.add_column(column, justify="right")
        for c in compare_rates(params):
            table.add_row(c.label, percent(c.annual_rate), money(c.final_amount), money(c.total_interest))
        out.print(table)

    if by_account:
        table = Table(title="By account")
        for column in ("Account", "Net interest", "Net final", "Net return", "Over cap"):
            table.add_column(column, justify="right")
        for c in compare_accounts(params):
            table.add_row(
                c.profile.name,
                money(c.tax.net_interest),
                money(c.net_final_amount),
                percent(c.net_return),
                "yes" if c.exceeds_cap else "",
            )
        out.print(table)
