"""Main CLI entry point."""

import logging

import click
from finplan.database.factories import create_sqlite_database

# Import and register all commands at module level
from finplan.cli.commands import (
    import_cmd,
    records,
    portfolio,
    cashflow,
    goal,
    healthcheck,
    tax,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINPLAN_DB_PATH environment variable)",
    envvar="FINPLAN_DB_PATH",
)
@click.option(
    "--client",
    help="Client whose records to use (overrides FINPLAN_CLIENT environment variable)",
    envvar="FINPLAN_CLIENT",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, client: str | None, verbose: bool):
    """Finplan - Personal financial planning.

    Keep a client's incomes, expenses, assets, debts and goals, and run cash
    flow projections, goal funding, financial health ratios and Thai personal
    income tax estimates over them.
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path, owner=client)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
records.register_commands(cli)
portfolio.register_commands(cli)
cashflow.register_commands(cli)
goal.register_commands(cli)
healthcheck.register_commands(cli)
tax.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
