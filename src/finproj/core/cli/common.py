"""Shared setup logic for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from finproj.core.exceptions import FinprojError

FINPROJ_DIR = Path.home() / ".finproj"
CONFIG_PATH = FINPROJ_DIR / "config.yaml"


def load_config(config_file: str | None = None):
    """Load config from ``config_file`` or ~/.finproj/config.yaml."""
    from finproj.core.config import Config

    return Config(config_file=config_file or str(CONFIG_PATH))


def load_settings(config_file: str | None = None):
    """Load and validate config, turning failures into CLI errors."""
    from pydantic import ValidationError

    try:
        return load_config(config_file).validated()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e
    except FinprojError as e:
        raise click.ClickException(str(e)) from e


@contextmanager
def engine_errors() -> Iterator[None]:
    """Report engine input errors as clean CLI failures."""
    try:
        yield
    except (FinprojError, KeyError) as e:
        message = str(e.args[0]) if isinstance(e, KeyError) and e.args else str(e)
        raise click.ClickException(message) from e


def money(value: float) -> str:
    return f"{value:,.2f}"


def percent(value: float) -> str:
    return f"{value:.2%}"


def summary_table(title: str, rows: list[tuple[str, str]]):
    """Two-column rich table of labelled values."""
    from rich.table import Table

    table = Table(title=title, show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for label, value in rows:
        table.add_row(label, value)
    return table


def console():
    from rich.console import Console

    return Console()
