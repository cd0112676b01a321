"""Portfolio summary command."""

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.cli.formatting import echo_row, format_money, format_percent
from finplan.domain.planning import PlanningService


@click.command("portfolio")
@click.pass_context
def portfolio(ctx):
    """Show total portfolio value and weighted expected return."""
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        summary = service.portfolio_summary()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    echo_row("Total value", format_money(summary.total_value))
    echo_row("Weighted return", format_percent(summary.weighted_return))


def register_commands(cli):
    """Register portfolio command with main CLI."""
    cli.add_command(portfolio)
