"""Company management commands."""

from datetime import date

import click
from ledgerbook.cli.company_resolution import resolve_company_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.company import CompanyService
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.date_parser import fiscal_year_range, parse_date
from ledgerbook.utils.formatting import format_date


def _parse_optional_date(ctx, value: str | None, label: str) -> date | None:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _fiscal_year_options(
    ctx, year: int | None, start: str | None, end: str | None
) -> tuple[date | None, date | None]:
    if year is not None and (start or end):
        click.echo(
            "Error: --year cannot be combined with --fiscal-year-start or --fiscal-year-end.",
            err=True,
        )
        ctx.exit(1)
    if year is not None:
        return fiscal_year_range(year)
    return (
        _parse_optional_date(ctx, start, "fiscal year start"),
        _parse_optional_date(ctx, end, "fiscal year end"),
    )


@click.group()
def company_group():
    """Manage companies."""
    pass


@company_group.command("create")
@click.argument("name", metavar="COMPANY_NAME")
@click.option("--address", help="Postal address")
@click.option("--phone", help="Phone number")
@click.option("--tax-id", help="Tax registration number")
@click.option("--year", type=int, help="Calendar fiscal year (January 1 to December 31)")
@click.option("--fiscal-year-start", help="First day of the fiscal year (YYYY-MM-DD)")
@click.option("--fiscal-year-end", help="Last day of the fiscal year (YYYY-MM-DD)")
@click.pass_context
def create_company(
    ctx,
    name: str,
    address: str | None,
    phone: str | None,
    tax_id: str | None,
    year: int | None,
    fiscal_year_start: str | None,
    fiscal_year_end: str | None,
):
    """Create a new company.

    Examples:
        ledgerbook company create "Toko Maju" --year 2025
        ledgerbook company create "Acme" --fiscal-year-start 2025-04-01 --fiscal-year-end 2026-03-31
    """
    service = CompanyService(ctx.obj["db"])
    start, end = _fiscal_year_options(ctx, year, fiscal_year_start, fiscal_year_end)

    try:
        company_id = service.create_company(
            name=name,
            address=address,
            phone=phone,
            tax_id=tax_id,
            fiscal_year_start=start,
            fiscal_year_end=end,
        )
        click.echo(f"Created company '{name}' (ID: {company_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@company_group.command("list")
@click.pass_context
def list_companies(ctx):
    """List all companies."""
    service = CompanyService(ctx.obj["db"])

    companies = service.list_companies()
    if not companies:
        click.echo("No companies found.")
        return

    click.echo("\nCompanies:")
    click.echo("-" * 72)
    for company in companies:
        period = (
            f"{format_date(company.fiscal_year_start) or '...'} to "
            f"{format_date(company.fiscal_year_end) or '...'}"
        )
        click.echo(f"ID: {company.id:3d} | {company.name:30s} | {period}")


@company_group.command("show")
@click.argument("company", metavar="COMPANY", required=False)
@click.pass_context
def show_company(ctx, company: str | None):
    """Show company details.

    COMPANY can be a company name or ID; defaults to the selected company.
    """
    found = resolve_company_or_exit(ctx, company)
    accounts = AccountService(ctx.obj["db"]).list_accounts(found.id)

    click.echo(f"\nCompany ID: {found.id}")
    click.echo(f"  Name: {found.name}")
    if found.address:
        click.echo(f"  Address: {found.address}")
    if found.phone:
        click.echo(f"  Phone: {found.phone}")
    if found.tax_id:
        click.echo(f"  Tax ID: {found.tax_id}")
    click.echo(f"  Fiscal year start: {format_date(found.fiscal_year_start) or '-'}")
    click.echo(f"  Fiscal year end: {format_date(found.fiscal_year_end) or '-'}")
    click.echo(f"  Accounts: {len(accounts)}")


@company_group.command("update")
@click.argument("company", metavar="COMPANY")
@click.option("--name", help="New company name")
@click.option("--address", help="Postal address")
@click.option("--phone", help="Phone number")
@click.option("--tax-id", help="Tax registration number")
@click.option("--year", type=int, help="Calendar fiscal year (January 1 to December 31)")
@click.option("--fiscal-year-start", help="First day of the fiscal year (YYYY-MM-DD)")
@click.option("--fiscal-year-end", help="Last day of the fiscal year (YYYY-MM-DD)")
@click.pass_context
def update_company(
    ctx,
    company: str,
    name: str | None,
    address: str | None,
    phone: str | None,
    tax_id: str | None,
    year: int | None,
    fiscal_year_start: str | None,
    fiscal_year_end: str | None,
) -> None:
    """Update company details. Only the given fields change.

    Examples:
        ledgerbook company update "Toko Maju" --phone "021-555-0100"
        ledgerbook company update 1 --year 2026
    """
    service = CompanyService(ctx.obj["db"])
    found = resolve_company_or_exit(ctx, company)
    start, end = _fiscal_year_options(ctx, year, fiscal_year_start, fiscal_year_end)

    try:
        service.update_company(
            found.id,
            name=name,
            address=address,
            phone=phone,
            tax_id=tax_id,
            fiscal_year_start=start,
            fiscal_year_end=end,
        )
        click.echo(f"Updated company {found.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@company_group.command("delete")
@click.argument("company", metavar="COMPANY")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_company(ctx, company: str, yes: bool) -> None:
    """Delete a company with all of its accounts and transactions.

    COMPANY can be a company name or ID.
    """
    service = CompanyService(ctx.obj["db"])
    found = resolve_company_or_exit(ctx, company)

    if not yes and not click.confirm(
        f"Are you sure you want to delete company '{found.name}' (ID: {found.id}) "
        "and all of its data?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_company(found.id)
        click.echo(f"Deleted company '{found.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@company_group.command("duplicate")
@click.argument("company", metavar="COMPANY")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def duplicate_company(ctx, company: str, new_name: str) -> None:
    """Start the next fiscal year as a copy of COMPANY.

    The chart of accounts is copied with zero beginning balances;
    transactions are not copied.

    Examples:
        ledgerbook company duplicate "Toko Maju" "Toko Maju 2026"
    """
    service = CompanyService(ctx.obj["db"])
    found = resolve_company_or_exit(ctx, company)

    try:
        new_id = service.duplicate_company(found.id, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    copy = service.require_company(new_id)
    click.echo(f"Created company '{copy.name}' (ID: {new_id}) from '{found.name}'")
    click.echo(
        f"Fiscal year: {format_date(copy.fiscal_year_start)} to {format_date(copy.fiscal_year_end)}"
    )


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
