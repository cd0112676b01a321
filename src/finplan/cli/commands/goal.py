"""Goal funding commands."""

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.cli.formatting import echo_row, format_money, format_percent
from finplan.domain.planning import PlanningService
from finplan.utils.amount_parser import parse_rate


@click.group()
def goal_group():
    """Calculate what it takes to reach a goal."""
    pass


@goal_group.command("general")
@click.pass_context
def general_goal(ctx):
    """Annual saving needed for the stored general goal."""
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        result = service.general_goal()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    echo_row(
        "Future value of current investment",
        format_money(result.future_value_of_current_investment),
    )
    echo_row("Remaining goal value", format_money(result.remaining_goal_value))
    echo_row("Annual saving needed", format_money(result.annual_saving))
    if result.is_sufficient:
        click.echo("Current investments already cover this goal.")


@goal_group.command("retirement")
@click.option(
    "--portion",
    help="Retirement spending as a share of today's expense, e.g. '70%' or 0.7",
)
@click.pass_context
def retirement_goal(ctx, portion: str | None):
    """Capital needed at retirement for the stored retirement goal.

    Examples:
        finplan goal retirement
        finplan goal retirement --portion 70%
    """
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        expense_portion = None
        if portion is not None:
            expense_portion = min(max(float(parse_rate(portion)), 0.0), 1.0)
        result = service.retirement_goal(expense_portion)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    echo_row("Years to retirement", str(result.years_to_retirement))
    echo_row("Annual expense at retirement", format_money(result.future_expense_at_retirement))
    echo_row("Real discount rate", format_percent(result.real_discount_rate, 4))
    echo_row("Adjusted annual expense", format_money(result.adjusted_future_expense))
    echo_row("Retirement duration (years)", str(result.retirement_duration))
    echo_row("Capital required", format_money(result.capital_required))


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
