"""Record management commands."""

import click
from finplan.cli.error_handling import handle_domain_error
from finplan.database.mappers import record_to_dict
from finplan.domain.entities import RecordKey
from finplan.domain.records import RecordService, resolve_record_key

KEY_CHOICE = click.Choice([key.value for key in RecordKey])


def _describe(record) -> str:
    fields = record_to_dict(record)
    name = fields.pop("name", None)
    details = ", ".join(f"{k}={v}" for k, v in fields.items() if v not in (None, 0, 0.0, False))
    return f"{name:24s} | {details}" if name is not None else details


@click.group()
def records_group():
    """View and manage stored records."""
    pass


@records_group.command("list")
@click.argument("key", type=KEY_CHOICE)
@click.pass_context
def list_records(ctx, key: str):
    """List records stored under KEY.

    Examples:
        finplan records list incomes
        finplan records list tax_deduction
    """
    db = ctx.obj["db"]
    service = RecordService(db)
    record_key = resolve_record_key(key)

    try:
        if record_key.holds_list:
            items = service.list_records(record_key)
        else:
            value = service.get_value(record_key)
            items = [] if value is None else [value]
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not items:
        click.echo(f"No {key} found.")
        return

    click.echo(f"\n{key}:")
    click.echo("-" * 60)
    for item in items:
        if isinstance(item, float):
            click.echo(f"{item:.4g}")
        else:
            click.echo(_describe(item))


@records_group.command("delete")
@click.argument("key", type=KEY_CHOICE)
@click.argument("name")
@click.pass_context
def delete_record(ctx, key: str, name: str):
    """Delete the record called NAME from KEY.

    Examples:
        finplan records delete incomes "Salary"
    """
    db = ctx.obj["db"]
    service = RecordService(db)

    try:
        service.delete_record(key, name)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted '{name}' from {key}")


@records_group.command("clear")
@click.argument("key", type=KEY_CHOICE)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def clear_records(ctx, key: str, yes: bool):
    """Remove everything stored under KEY."""
    db = ctx.obj["db"]
    service = RecordService(db)

    if not yes and not click.confirm(f"Are you sure you want to clear all {key}?"):
        click.echo("Clear cancelled.")
        return

    if service.clear(key):
        click.echo(f"Cleared {key}")
    else:
        click.echo(f"Nothing stored under {key}")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(records_group, name="records")
