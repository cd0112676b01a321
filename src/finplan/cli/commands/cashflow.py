"""Cash flow projection command."""

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.cli.formatting import format_money, format_percent
from finplan.domain.planning import DEFAULT_PROJECTION_YEARS, PlanningService


@click.command("cashflow")
@click.option(
    "--years",
    type=int,
    default=DEFAULT_PROJECTION_YEARS,
    show_default=True,
    help="Number of years to project",
)
@click.option("--details", is_flag=True, help="Show each income, expense and goal payment")
@click.pass_context
def cashflow(ctx, years: int, details: bool):
    """Project yearly cash flow and goal payments.

    Examples:
        finplan cashflow
        finplan cashflow --years 20 --details
    """
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        table = service.cashflow_table(years)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Portfolio return: {format_percent(table.portfolio_return)}")
    click.echo(f"Saving growth rate: {format_percent(table.saving_growth_rate)}")
    click.echo()
    click.echo(
        f"{'Year':>4} {'Income':>16} {'Expense':>16} {'Net':>16} "
        f"{'Goal payments':>16} {'After goals':>16}"
    )
    click.echo("-" * 89)
    for row in table.years:
        click.echo(
            f"{row.year:>4} {format_money(row.total_income):>16} "
            f"{format_money(row.total_expense):>16} {format_money(row.net_income):>16} "
            f"{format_money(row.total_goal_payments):>16} "
            f"{format_money(row.net_income_after_goals):>16}"
        )
        if details:
            for label, items in (
                ("income", row.income_details),
                ("expense", row.expense_details),
                ("goal", row.goal_payments),
            ):
                for item in items:
                    click.echo(f"       {label:8s} {item.name:30s} {format_money(item.amount):>16}")

    click.echo()
    if table.is_sufficient:
        click.echo("Cash flow covers all goal payments.")
    else:
        click.echo("Cash flow does not cover all goal payments.")


def register_commands(cli):
    """Register cashflow command with main CLI."""
    cli.add_command(cashflow)
