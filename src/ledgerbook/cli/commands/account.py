"""Chart of accounts commands."""

from decimal import Decimal

import click
from ledgerbook.cli.company_resolution import resolve_company_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import ACCOUNT_CATEGORIES
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.formatting import format_amount


def _parse_balance(ctx, value: str | None) -> Decimal | None:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid beginning balance: {e}", err=True)
        ctx.exit(1)


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--category",
    required=True,
    type=click.Choice(ACCOUNT_CATEGORIES),
    help="Account category",
)
@click.option("--beginning-balance", help="Opening balance on the account's normal side")
@click.pass_context
def create_account(
    ctx, account_id: str, name: str, category: str, beginning_balance: str | None
):
    """Create a new account.

    The normal balance (debit or credit) follows from the category.

    Examples:
        ledgerbook account create 1-1130 "Cash" --category asset --beginning-balance 5000000
        ledgerbook account create 4-4000 "Sales" --category income
    """
    company = resolve_company_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    balance = _parse_balance(ctx, beginning_balance)

    try:
        service.create_account(
            company_id=company.id,
            account_id=account_id,
            name=name,
            category=category,
            beginning_balance=balance if balance is not None else Decimal("0"),
        )
        account = service.require_account(company.id, account_id.strip())
        click.echo(
            f"Created account {account.id} '{account.name}' "
            f"({account.category}, normal balance: {account.normal_balance})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List the chart of accounts."""
    company = resolve_company_or_exit(ctx)
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(company.id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\nAccounts for {company.name}:")
    click.echo("-" * 96)
    for acc in accounts:
        click.echo(
            f"{acc.id:10s} | {acc.name:30s} | {acc.category:14s} | {acc.normal_balance:6s} | "
            f"{format_amount(acc.beginning_balance):>20s}"
        )


@account_group.command("update")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.option("--name", help="New account name")
@click.option("--category", type=click.Choice(ACCOUNT_CATEGORIES), help="New category")
@click.option("--beginning-balance", help="New beginning balance")
@click.pass_context
def update_account(
    ctx,
    account_id: str,
    name: str | None,
    category: str | None,
    beginning_balance: str | None,
) -> None:
    """Update an account. The account ID cannot change.

    Examples:
        ledgerbook account update 1-1130 --name "Cash on Hand"
        ledgerbook account update 1-1130 --beginning-balance 7500000
    """
    company = resolve_company_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    balance = _parse_balance(ctx, beginning_balance)

    try:
        service.update_account(
            company.id,
            account_id,
            name=name,
            category=category,
            beginning_balance=balance,
        )
        click.echo(f"Updated account {account_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account_id: str, yes: bool) -> None:
    """Delete an account.

    The account can only be deleted if no transactions reference it.
    """
    company = resolve_company_or_exit(ctx)
    service = AccountService(ctx.obj["db"])

    account = service.get_account(company.id, account_id)
    if account is None:
        click.echo(f"Error: Account '{account_id}' not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {account.id} '{account.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(company.id, account_id)
        click.echo(f"Deleted account {account.id} '{account.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
