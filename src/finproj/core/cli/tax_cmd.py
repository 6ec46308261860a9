"""finproj tax / account-tax — income tax and taxation of savings gains."""

from __future__ import annotations

import click

from finproj.core.cli.common import console, engine_errors, money, percent, summary_table
from finproj.financial.calculators.income_tax import FamilyStatus, compare_household_situations
from finproj.financial.calculators.tax_adjustment import apply_tax
from finproj.financial.calculators.tax_tables import ACCOUNT_PROFILES, get_account_profile, get_income_tax_brackets
from finproj.financial.models import AccountKind

_SITUATION_LABELS = {
    "current": "Current situation",
    "married": "If married",
    "one_more_dependent": "With one more dependent",
}


@click.command()
@click.argument("gross_salary", type=float)
@click.option(
    "--status",
    type=click.Choice([s.value for s in FamilyStatus]),
    default=FamilyStatus.SINGLE.value,
    help="Household status.",
)
@click.option("--dependents", type=int, default=0, help="Number of dependents.")
@click.option("--year", type=int, default=None, help="Bracket year (defaults to engine.tax_year).")
@click.pass_obj
def tax(settings, gross_salary, status, dependents, year) -> None:
    """Income tax and net salary for a gross annual salary."""
    from rich.table import Table

    with engine_errors():
        brackets = get_income_tax_brackets(year or settings.engine.tax_year)
        situations = compare_household_situations(
            gross_salary,
            status,
            dependents,
            brackets=brackets,
            social_contribution_rate=settings.engine.social_contribution_rate,
        )

    current = situations["current"]
    out = console()
    out.print(
        summary_table(
            "Income tax",
            [
                ("Social contributions", money(current.social_contributions)),
                ("Taxable income", money(current.taxable_income)),
                ("Income tax", money(current.income_tax)),
                ("Net salary", money(current.net_salary)),
                ("Marginal rate", percent(current.marginal_rate)),
                ("Effective rate", percent(current.effective_rate)),
            ],
        )
    )

    table = Table(title="Household situations")
    for column in ("Situation", "Parts", "Income tax", "Net salary"):
        table.add_column(column, justify="right")
    for key, result in situations.items():
        table.add_row(
            _SITUATION_LABELS[key], f"{result.family_quotient:g}", money(result.income_tax), money(result.net_salary)
        )
    out.print(table)


@click.command(name="account-tax")
@click.argument("gross_interest", type=float)
@click.option(
    "--account",
    type=click.Choice([k.value for k in AccountKind]),
    default=None,
    help="Account regime (all regimes when omitted).",
)
@click.option("--holding-years", type=float, required=True, help="How long the money stayed invested.")
@click.option("--year", type=int, default=2024, help="Catalog year.")
def account_tax(gross_interest, account, holding_years, year) -> None:
    """Tax and social charges on savings gains."""
    from rich.table import Table

    with engine_errors():
        if account:
            profiles = [get_account_profile(account, year)]
        else:
            profiles = list(ACCOUNT_PROFILES[year].values())
        results = [(p, apply_tax(gross_interest, p, holding_years)) for p in profiles]

    table = Table(title=f"Gains of {money(gross_interest)} after {holding_years:g} years")
    for column in ("Account", "Taxes", "Social charges", "Net", "Kept"):
        table.add_column(column, justify="right")
    for profile, result in results:
        table.add_row(
            profile.name,
            money(result.taxes),
            money(result.social_charges),
            money(result.net_interest),
            percent(result.effective_rate),
        )
    console().print(table)
