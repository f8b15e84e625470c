"""Journal entry commands."""

from datetime import date
from decimal import Decimal

import click
from ledgerbook.cli.company_resolution import resolve_company_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.csv_import import CSVImportService
from ledgerbook.domain.entities import EntryLine, EntryType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.ledger import UNKNOWN_ACCOUNT_NAME
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date
from ledgerbook.utils.formatting import format_amount, format_date


def _parse_date_or_exit(ctx, value: str | None, label: str = "date") -> date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str) -> Decimal:
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def _build_lines(ctx, debits, credits) -> list[EntryLine]:
    lines = []
    for entry_type, pairs in ((EntryType.DEBIT, debits), (EntryType.CREDIT, credits)):
        for account_id, amount in pairs:
            lines.append(
                EntryLine(
                    account_id=account_id,
                    type=entry_type.value,
                    amount=_parse_amount_or_exit(ctx, amount),
                )
            )
    return lines


def _echo_lines(lines, account_names: dict[str, str]) -> None:
    for txn in lines:
        name = account_names.get(txn.account_id, UNKNOWN_ACCOUNT_NAME)
        debit = format_amount(txn.amount) if txn.type == EntryType.DEBIT.value else ""
        credit = format_amount(txn.amount) if txn.type == EntryType.CREDIT.value else ""
        click.echo(
            f"  {txn.account_id:10s} {name:30s} {debit:>18s} {credit:>18s}  {txn.description}"
        )


def _account_names(db, company_id: int) -> dict[str, str]:
    return {acc.id: acc.name for acc in AccountService(db).list_accounts(company_id)}


@click.group()
def entry_group():
    """Record and manage journal entries."""
    pass


@entry_group.command("add")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.argument("amount", metavar="AMOUNT")
@click.argument("description", metavar="DESCRIPTION")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD or 'today', 'yesterday'); defaults to today")
@click.option("--tax", is_flag=True, help="Add output tax on an income entry")
@click.option("--withholding", is_flag=True, help="Withhold tax on an expense entry")
@click.pass_context
def add_entry(
    ctx,
    account_id: str,
    amount: str,
    description: str,
    entry_date: str | None,
    tax: bool,
    withholding: bool,
) -> None:
    """Record an income or expense amount as a balanced journal entry.

    Income is booked against accounts receivable, expenses against cash.

    Examples:
        ledgerbook entry add 4-4000 1000000 "Consulting fee" --tax
        ledgerbook entry add 6-1000 500000 "Office rent" --withholding --date 2025-02-01
    """
    company = resolve_company_or_exit(ctx)
    service = TransactionService(ctx.obj["db"], config=ctx.obj["config"])
    txn_date = _parse_date_or_exit(ctx, entry_date) or date.today()
    txn_amount = _parse_amount_or_exit(ctx, amount)

    try:
        entry_id = service.record_simple_entry(
            company.id,
            account_id=account_id,
            amount=txn_amount,
            description=description,
            entry_date=txn_date,
            apply_tax=tax,
            apply_withholding=withholding,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded entry {entry_id}")
    _echo_lines(service.get_entry(company.id, entry_id), _account_names(ctx.obj["db"], company.id))


@entry_group.command("journal")
@click.argument("description", metavar="DESCRIPTION")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD or relative); defaults to today")
@click.option(
    "--debit", "debits", type=(str, str), multiple=True, metavar="ACCOUNT_ID AMOUNT",
    help="Debit line (repeatable)",
)
@click.option(
    "--credit", "credits", type=(str, str), multiple=True, metavar="ACCOUNT_ID AMOUNT",
    help="Credit line (repeatable)",
)
@click.pass_context
def journal_entry(ctx, description: str, entry_date: str | None, debits, credits) -> None:
    """Record a manual journal entry with any number of lines.

    Total debits must equal total credits.

    Examples:
        ledgerbook entry journal "Owner capital" --debit 1-1130 10000000 --credit 3-1000 10000000
    """
    company = resolve_company_or_exit(ctx)
    service = TransactionService(ctx.obj["db"], config=ctx.obj["config"])
    txn_date = _parse_date_or_exit(ctx, entry_date) or date.today()
    lines = _build_lines(ctx, debits, credits)

    try:
        entry_id = service.record_journal_entry(
            company.id, entry_date=txn_date, description=description, lines=lines
        )
        click.echo(f"Recorded entry {entry_id} with {len(lines)} lines")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("edit")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.option("--date", "entry_date", help="New entry date; defaults to the current one")
@click.option("--description", help="New description; defaults to the current one")
@click.option("--debit", "debits", type=(str, str), multiple=True, metavar="ACCOUNT_ID AMOUNT")
@click.option("--credit", "credits", type=(str, str), multiple=True, metavar="ACCOUNT_ID AMOUNT")
@click.pass_context
def edit_entry(
    ctx, entry_id: str, entry_date: str | None, description: str | None, debits, credits
) -> None:
    """Replace all lines of an existing journal entry.

    Examples:
        ledgerbook entry edit 3f2a... --debit 6-1000 600000 --credit 1-1130 600000
    """
    company = resolve_company_or_exit(ctx)
    service = TransactionService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        current = service.get_entry(company.id, entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    txn_date = _parse_date_or_exit(ctx, entry_date) or current[0].date
    lines = _build_lines(ctx, debits, credits)

    try:
        service.replace_journal_entry(
            company.id,
            entry_id,
            entry_date=txn_date,
            description=description if description is not None else current[0].description,
            lines=lines,
        )
        click.echo(f"Updated entry {entry_id} ({len(lines)} lines)")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("show")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def show_entry(ctx, entry_id: str) -> None:
    """Show all lines of a journal entry."""
    company = resolve_company_or_exit(ctx)
    service = TransactionService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        lines = service.get_entry(company.id, entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nEntry {entry_id} ({format_date(lines[0].date)})")
    _echo_lines(lines, _account_names(ctx.obj["db"], company.id))


@entry_group.command("delete")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_entry(ctx, entry_id: str, yes: bool) -> None:
    """Delete a journal entry with all of its lines."""
    company = resolve_company_or_exit(ctx)
    service = TransactionService(ctx.obj["db"], config=ctx.obj["config"])

    if not yes and not click.confirm(f"Are you sure you want to delete entry {entry_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_entry(company.id, entry_id)
        click.echo(f"Deleted entry {entry_id} ({deleted} lines)")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("list")
@click.option("--search", help="Text to match in description or account name")
@click.option("--account", "account_id", help="Account ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_entries(
    ctx,
    search: str | None,
    account_id: str | None,
    start_date: str | None,
    end_date: str | None,
) -> None:
    """List transaction lines, newest first."""
    company = resolve_company_or_exit(ctx)
    service = TransactionService(ctx.obj["db"], config=ctx.obj["config"])
    start = _parse_date_or_exit(ctx, start_date, "start date")
    end = _parse_date_or_exit(ctx, end_date, "end date")

    transactions = service.list_transactions(
        company.id, search=search, account_id=account_id, start_date=start, end_date=end
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    account_names = _account_names(ctx.obj["db"], company.id)
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 120)
    for txn in transactions:
        name = account_names.get(txn.account_id, UNKNOWN_ACCOUNT_NAME)
        click.echo(
            f"{format_date(txn.date)} | {txn.description[:32]:32s} | {txn.account_id:10s} "
            f"{name[:24]:24s} | {txn.type:6s} | {format_amount(txn.amount):>18s} | {txn.entry_id}"
        )


@entry_group.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_entries(ctx, csv_file: str):
    """Import journal entries from a CSV file.

    Columns: date, description, account_id, type, amount and optionally
    entry_id. Use 'entry template' to write an example file.
    """
    company = resolve_company_or_exit(ctx)
    service = CSVImportService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        result = service.import_csv(company.id, csv_file_path=csv_file)
        click.echo(f"\nImport complete:")
        click.echo(f"  Imported: {result['imported']} lines in {result['entries']} entries")
        if result["errors"]:
            click.echo(f"  Errors: {len(result['errors'])}")
            for error in result["errors"]:
                click.echo(f"    {error}", err=True)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@entry_group.command("template")
@click.argument("output", type=click.Path(dir_okay=False), default="journal_template.csv")
def write_template(output: str):
    """Write an example CSV import file."""
    path = CSVImportService.write_template(output)
    click.echo(f"Wrote import template to {path}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
