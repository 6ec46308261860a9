"""Finproj CLI — entry point for the projection commands."""

import click

from finproj import __version__


@click.group()
@click.version_option(version=__version__, package_name="finproj")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file (YAML or JSON). Defaults to ~/.finproj/config.yaml.",
)
@click.option(
    "--log-level",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None, log_level: str | None) -> None:
    """Finproj — loan, savings, tax and portfolio projections."""
    from finproj.core.cli.common import load_settings
    from finproj.core.utils.logging import setup_logging

    settings = load_settings(config_file)
    setup_logging(settings.logging, level=log_level)
    ctx.obj = settings


# Register subcommands
from .compare_cmd import compare
from .loan_cmd import loan, payoff
from .portfolio_cmd import portfolio, retirement
from .savings_cmd import savings
from .tax_cmd import account_tax, tax

main.add_command(loan)
main.add_command(payoff)
main.add_command(savings)
main.add_command(tax)
main.add_command(account_tax)
main.add_command(portfolio)
main.add_command(retirement)
main.add_command(compare)
