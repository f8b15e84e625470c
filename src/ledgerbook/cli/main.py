"""Main CLI entry point."""

import logging

import click
from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.config import load_config
from ledgerbook.domain.errors import ValidationError

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    company,
    account,
    entry,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option(
    "--company",
    help="Company name or ID for company-scoped commands",
    envvar="LEDGERBOOK_COMPANY",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, company: str | None, verbose: bool):
    """Ledgerbook - Double-entry bookkeeping for small businesses.

    Keep a chart of accounts per company, record journal entries, and
    produce ledgers, trial balances and financial statements.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["config"] = load_config()
        except ValidationError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["company"] = company
        ctx.call_on_close(db.disconnect)


# Register all commands
company.register_commands(cli)
account.register_commands(cli)
entry.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
