"""Output formatting helpers for CLI commands."""

import click


def format_money(amount: float) -> str:
    """Format a baht amount with thousands separators."""
    return f"฿{amount:,.2f}"


def format_percent(value: float, places: int = 2) -> str:
    return f"{value * 100:.{places}f}%"


def echo_row(label: str, value: str, width: int = 44) -> None:
    click.echo(f"{label:<{width}} {value:>20}")


def echo_heading(title: str, width: int = 65) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * width)
