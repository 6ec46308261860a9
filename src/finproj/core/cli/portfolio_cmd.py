"""finproj portfolio / retirement — risk projections and retirement readiness."""

from __future__ import annotations

import click

from finproj.core.cli.common import console, engine_errors, money, percent, summary_table
from finproj.financial.calculators.portfolio import RISK_PROFILES, simulate
from finproj.financial.calculators.retirement import compare_strategies, project_retirement
from finproj.financial.models import ContributionPattern, SavingsParameters


@click.command()
@click.option(
    "--profile",
    "profile_ids",
    type=click.Choice(list(RISK_PROFILES)),
    multiple=True,
    help="Risk profile to simulate (repeatable, all when omitted).",
)
@click.option("--initial", type=float, default=0.0, help="Starting balance.")
@click.option("--monthly", type=float, default=0.0, help="Monthly contribution.")
@click.option("--years", type=float, required=True, help="Horizon in years.")
@click.pass_obj
def portfolio(settings, profile_ids, initial, monthly, years) -> None:
    """Optimistic, realistic and pessimistic outcomes per risk profile."""
    from rich.table import Table

    profiles = [RISK_PROFILES[p] for p in profile_ids] if profile_ids else list(RISK_PROFILES.values())
    with engine_errors():
        params = SavingsParameters(
            initial_amount=initial, pattern=ContributionPattern.fixed(monthly), annual_rate=0.0, years=years
        )
        simulations = [
            simulate(
                p,
                params,
                risk_free_rate=settings.engine.risk_free_rate,
                return_floor=settings.engine.pessimistic_return_floor,
            )
            for p in profiles
        ]

    table = Table(title=f"Portfolio outcomes after {years:g} years")
    for column in ("Profile", "Pessimistic", "Realistic", "Optimistic", "Drawdown", "Sharpe"):
        table.add_column(column, justify="right")
    for sim in simulations:
        table.add_row(
            sim.profile.name,
            money(sim.pessimistic.final_amount),
            money(sim.realistic.final_amount),
            money(sim.optimistic.final_amount),
            f"{sim.risk_metrics.max_drawdown:.1f}%",
            f"{sim.risk_metrics.sharpe_like_ratio:.2f}",
        )
    console().print(table)


@click.command()
@click.option("--age", "current_age", type=int, required=True, help="Current age.")
@click.option("--retire-at", "retirement_age", type=int, required=True, help="Planned retirement age.")
@click.option("--savings", "current_savings", type=float, default=0.0, help="Current savings.")
@click.option("--monthly", "monthly_contribution", type=float, default=0.0, help="Monthly contribution.")
@click.option("--return", "annual_return", type=float, default=0.05, help="Expected annual return.")
@click.option("--income", "desired_income", type=float, required=True, help="Desired monthly income, in today's money.")
@click.option("--inflation", type=float, default=0.02, help="Annual inflation.")
@click.option("--strategies", "show_strategies", is_flag=True, help="Also compare investment strategies.")
@click.pass_obj
def retirement(
    settings,
    current_age,
    retirement_age,
    current_savings,
    monthly_contribution,
    annual_return,
    desired_income,
    inflation,
    show_strategies,
) -> None:
    """Capital and sustainable income at retirement."""
    from rich.table import Table

    withdrawal_rate = settings.engine.withdrawal_rate
    with engine_errors():
        projection = project_retirement(
            current_age,
            retirement_age,
            current_savings,
            monthly_contribution,
            annual_return,
            desired_income,
            inflation,
            withdrawal_rate,
        )
        strategies = {}
        if show_strategies:
            strategies = compare_strategies(
                current_age,
                retirement_age,
                current_savings,
                monthly_contribution,
                desired_income,
                inflation,
                withdrawal_rate,
            )

    years_of_income = projection.years_of_income
    out = console()
    out.print(
        summary_table(
            "Retirement",
            [
                ("Capital at retirement", money(projection.total_at_retirement)),
                ("Monthly income", money(projection.monthly_income)),
                ("Needed (inflation adjusted)", money(projection.adjusted_monthly_income)),
                ("Years of income", "unlimited" if years_of_income == float("inf") else f"{years_of_income:.1f}"),
                ("Annual shortfall", money(max(0.0, projection.annual_shortfall))),
                ("Recommended monthly savings", money(projection.recommended_monthly_savings)),
                ("Withdrawal rate", percent(withdrawal_rate)),
            ],
        )
    )

    if strategies:
        table = Table(title="Strategies")
        for column in ("Strategy", "Capital", "Monthly income", "On track"):
            table.add_column(column, justify="right")
        for strategy_id, p in strategies.items():
            table.add_row(
                strategy_id, money(p.total_at_retirement), money(p.monthly_income), "yes" if p.on_track else "no"
            )
        out.print(table)
