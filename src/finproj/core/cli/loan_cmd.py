"""finproj loan / payoff — amortization schedules and early payoff."""

from __future__ import annotations

import click

from finproj.core.cli.common import console, engine_errors, money, summary_table
from finproj.financial.calculators.amortization import (
    LOAN_PRESETS,
    amortize_loan,
    early_payoff_for,
    extra_payment_for_target,
)
from finproj.financial.models import EarlyPayoffInput, LoanParameters, PaymentFrequency


def _loan_options(func):
    """Options shared by loan and payoff."""
    func = click.option("--months", "term_months", type=int, default=None, help="Number of monthly payments.")(func)
    func = click.option("--rate", "annual_rate", type=float, default=None, help="Annual rate (0.035 = 3.5%).")(func)
    func = click.option("--principal", type=float, default=None, help="Amount borrowed.")(func)
    func = click.option(
        "--preset", type=click.Choice(list(LOAN_PRESETS)), default=None, help="Start from a typical loan."
    )(func)
    return func


def _resolve_loan(preset, principal, annual_rate, term_months, extra=0.0) -> LoanParameters:
    base = LOAN_PRESETS[preset] if preset else None
    values = {
        "principal": principal if principal is not None else getattr(base, "principal", None),
        "annual_rate": annual_rate if annual_rate is not None else getattr(base, "annual_rate", None),
        "term_months": term_months if term_months is not None else getattr(base, "term_months", None),
    }
    missing = [name for name, value in values.items() if value is None]
    if missing:
        flags = ", ".join("--" + m.replace("annual_", "").replace("term_", "") for m in missing)
        raise click.UsageError(f"Missing {flags} (or pick a --preset)")
    with engine_errors():
        return LoanParameters(**values, extra_monthly_payment=extra)


@click.command()
@_loan_options
@click.option("--extra", type=float, default=0.0, help="Extra principal paid every month.")
@click.option("--schedule/--no-schedule", default=False, help="Print the period-by-period schedule.")
def loan(preset, principal, annual_rate, term_months, extra, schedule) -> None:
    """Amortize a fixed-rate loan."""
    from rich.table import Table

    params = _resolve_loan(preset, principal, annual_rate, term_months, extra)
    with engine_errors():
        result = amortize_loan(params)

    out = console()
    out.print(
        summary_table(
            "Loan",
            [
                ("Monthly payment", money(result.base_payment)),
                ("Total interest", money(result.total_interest)),
                ("Total paid", money(result.total_paid)),
                ("Payments", f"{result.periods} of {params.term_months}"),
            ],
        )
    )

    if schedule:
        table = Table(title="Schedule")
        for column in ("Period", "Payment", "Principal", "Interest", "Balance"):
            table.add_column(column, justify="right")
        for entry in result.schedule:
            table.add_row(
                str(entry.period),
                money(entry.payment),
                money(entry.principal_portion),
                money(entry.interest_portion),
                money(entry.remaining_balance),
            )
        out.print(table)


@click.command()
@_loan_options
@click.option("--extra", type=float, default=0.0, help="Extra payment on each extra-payment month.")
@click.option("--lump-sum", type=float, default=0.0, help="One-time payment made up front.")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in PaymentFrequency]),
    default=PaymentFrequency.MONTHLY.value,
    help="How often the extra payment is made.",
)
@click.option("--target-months", type=int, default=None, help="Also show the extra needed to finish in N months.")
def payoff(preset, principal, annual_rate, term_months, extra, lump_sum, frequency, target_months) -> None:
    """Measure what extra payments and a lump sum save."""
    params = _resolve_loan(preset, principal, annual_rate, term_months)
    with engine_errors():
        payoff_input = EarlyPayoffInput(extra_monthly=extra, lump_sum=lump_sum, frequency=PaymentFrequency(frequency))
        result = early_payoff_for(params, payoff_input)
        target_extra = None
        if target_months is not None:
            target_extra = extra_payment_for_target(
                params.principal, params.monthly_rate, params.term_months, target_months
            )

    rows = [
        ("Paid off after", f"{result.payoff_month_index} months"),
        ("Time saved", f"{result.years_saved} years {result.remaining_months} months"),
        ("Interest saved", money(result.interest_saved)),
        ("New total interest", money(result.new_total_interest)),
        ("Original total interest", money(result.original_total_interest)),
    ]
    if target_extra is not None:
        rows.append((f"Extra for {target_months} months", money(target_extra)))
    console().print(summary_table("Early payoff", rows))
