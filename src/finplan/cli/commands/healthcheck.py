"""Financial health check command."""

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.domain.entities import RatioStatus
from finplan.domain.planning import PlanningService
from finplan.domain.ratios import RATIO_STANDARDS

STATUS_LABELS = {
    RatioStatus.PASS: "PASS",
    RatioStatus.FAIL: "FAIL",
    RatioStatus.INDETERMINATE: "-",
}


@click.command("healthcheck")
@click.pass_context
def healthcheck(ctx):
    """Show financial health ratios against their standards."""
    db = ctx.obj["db"]
    service = PlanningService(db)

    try:
        check = service.health_check()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    ratios = check.ratios
    click.echo(f"{'Ratio':<40} {'Value':>10} {'Standard':>10} {'Status':>7}")
    click.echo("-" * 70)
    for name, status in check.statuses.items():
        label, _ = RATIO_STANDARDS[name]
        value = getattr(ratios, name)
        click.echo(f"{name:<40} {value:>10.2f} {label:>10} {STATUS_LABELS[status]:>7}")


def register_commands(cli):
    """Register healthcheck command with main CLI."""
    cli.add_command(healthcheck)
