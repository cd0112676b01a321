"""JSON import command."""

import json

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.domain.records import RecordService


@click.command("import")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_json(ctx, json_file: str):
    """Import client records from a JSON file.

    Top-level keys are record keys (incomes, expenses, assets, debts,
    holdings, goals, general_goal, retirement_goal, expense_portion,
    tax_deduction, tax_plan). Named records are added or replaced by name;
    single-value keys are replaced.

    Examples:
        finplan import client.json
        finplan --client somchai import somchai.json
    """
    db = ctx.obj["db"]
    service = RecordService(db)

    try:
        with open(json_file, encoding="utf-8") as f:
            document = json.load(f)
        counts = service.import_document(document)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    for key, count in counts.items():
        click.echo(f"  {key}: {count}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_json)
