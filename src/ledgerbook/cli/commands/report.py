"""Report commands: ledgers, trial balance, statements and exports."""

from pathlib import Path

import click
from ledgerbook.cli.company_resolution import resolve_company_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import Statement
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.reports import ReportService
from ledgerbook.export import (
    export_account_ledger_pdf,
    export_financial_statements_excel,
    export_financial_statements_pdf,
    export_general_journal_excel,
    export_general_journal_pdf,
    export_trial_balance_excel,
    export_trial_balance_pdf,
)
from ledgerbook.utils.formatting import as_of_label, format_amount, format_date, period_label

EXPORT_REPORTS = ("statements", "trial-balance", "journal", "ledger")
EXPORT_FORMATS = ("xlsx", "pdf")


def _echo_warnings(warnings) -> None:
    for warning in warnings:
        click.echo(f"Warning: {warning}", err=True)


def _echo_statement(statement: Statement, subtitle: str) -> None:
    click.echo(f"\n{statement.title}")
    click.echo(subtitle)
    click.echo("=" * 72)
    for section in statement.sections:
        click.echo(section.title.upper())
        for item in section.items:
            click.echo(f"    {item.label:<46} {format_amount(item.amount):>20}")
        click.echo(f"  {section.total_label:<48} {format_amount(section.total_amount):>20}")
        click.echo()
    click.echo(f"{statement.final_label.upper():<50} {format_amount(statement.final_amount):>20}")


@click.group()
def report_group():
    """Produce ledgers, trial balances and financial statements."""
    pass


@report_group.command("trial-balance")
@click.pass_context
def trial_balance(ctx) -> None:
    """Show beginning balance, period movement and ending balance per account."""
    company = resolve_company_or_exit(ctx)
    service = ReportService(ctx.obj["db"], config=ctx.obj["config"])
    warnings: list[str] = []

    try:
        result = service.trial_balance(company.id, warnings=warnings)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _echo_warnings(warnings)
    if not result.rows:
        click.echo("No accounts with balances or activity.")
        return

    click.echo(f"\nTrial Balance - {company.name}")
    click.echo(period_label(company))
    click.echo("-" * 132)
    click.echo(
        f"{'Account':10s} {'Name':30s} {'Beginning':>20s} {'Debit':>20s} "
        f"{'Credit':>20s} {'Ending':>20s}"
    )
    for row in result.rows:
        click.echo(
            f"{row.account_id:10s} {row.account_name[:30]:30s} "
            f"{format_amount(row.beginning_balance):>20s} {format_amount(row.total_debit):>20s} "
            f"{format_amount(row.total_credit):>20s} {format_amount(row.ending_balance):>20s}"
        )
    click.echo("-" * 132)
    click.echo(
        f"{'TOTAL':41s} {'':20s} {format_amount(result.total_debit):>20s} "
        f"{format_amount(result.total_credit):>20s}"
    )


@report_group.command("ledger")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.pass_context
def account_ledger(ctx, account_id: str) -> None:
    """Show one account's transactions with a running balance."""
    company = resolve_company_or_exit(ctx)
    service = ReportService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        account = AccountService(ctx.obj["db"]).require_account(company.id, account_id)
        rows = service.account_ledger(company.id, account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nLedger {account.id} {account.name} ({account.normal_balance} normal)")
    click.echo("-" * 110)
    click.echo(f"{'':10s}   {'Beginning balance':40s} {'':>18s} {'':>18s} "
               f"{format_amount(account.beginning_balance):>18s}")
    for row in rows:
        click.echo(
            f"{format_date(row.date):10s} | {row.description[:40]:40s} "
            f"{format_amount(row.debit_amount, blank=''):>18s} "
            f"{format_amount(row.credit_amount, blank=''):>18s} "
            f"{format_amount(row.running_balance):>18s}"
        )


@report_group.command("statements")
@click.pass_context
def statements(ctx) -> None:
    """Show the income statement and balance sheet."""
    company = resolve_company_or_exit(ctx)
    service = ReportService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        result = service.financial_statements(company.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _echo_warnings(result.warnings)
    _echo_statement(result.income_statement, period_label(company))
    _echo_statement(result.balance_sheet, as_of_label(company))
    if result.total_assets != result.total_liabilities_and_equity:
        click.echo(
            f"\nNote: total assets ({format_amount(result.total_assets)}) differ from "
            f"total liabilities and equity ({format_amount(result.total_liabilities_and_equity)})",
            err=True,
        )


@report_group.command("journal")
@click.pass_context
def general_journal(ctx) -> None:
    """Show every transaction line in date order."""
    company = resolve_company_or_exit(ctx)
    service = ReportService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        rows = service.general_journal(company.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not rows:
        click.echo("No transactions found.")
        return

    click.echo(f"\nGeneral Journal - {company.name}")
    click.echo("-" * 120)
    for row in rows:
        click.echo(
            f"{row.number:4d} {format_date(row.date):10s} | {row.description[:32]:32s} | "
            f"{row.account_id:10s} {row.account_name[:24]:24s} "
            f"{format_amount(row.debit_amount, blank=''):>18s} "
            f"{format_amount(row.credit_amount, blank=''):>18s}"
        )


@report_group.command("dashboard")
@click.pass_context
def dashboard(ctx) -> None:
    """Show total income, expense, net income, cash and monthly totals."""
    company = resolve_company_or_exit(ctx)
    service = ReportService(ctx.obj["db"], config=ctx.obj["config"])

    try:
        summary = service.dashboard_summary(company.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nDashboard - {company.name}")
    click.echo("-" * 60)
    click.echo(f"{'Total income':30s} {format_amount(summary.total_income):>25s}")
    click.echo(f"{'Total expense':30s} {format_amount(summary.total_expense):>25s}")
    click.echo(f"{'Net income':30s} {format_amount(summary.net_income):>25s}")
    click.echo(f"{'Cash balance':30s} {format_amount(summary.cash_balance):>25s}")
    if summary.monthly:
        click.echo("\nMonthly:")
        for month in summary.monthly:
            click.echo(
                f"  {month.month}  income {format_amount(month.income):>20s}"
                f"  expense {format_amount(month.expense):>20s}"
            )


@report_group.command("export")
@click.argument("report", type=click.Choice(EXPORT_REPORTS))
@click.option(
    "--format", "file_format", type=click.Choice(EXPORT_FORMATS), default="xlsx",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file path")
@click.option("--account", "account_id", help="Account ID (ledger export only)")
@click.pass_context
def export_report(
    ctx, report: str, file_format: str, output: str | None, account_id: str | None
) -> None:
    """Export a report to Excel or PDF.

    Examples:
        ledgerbook report export statements --format xlsx -o statements.xlsx
        ledgerbook report export ledger --account 1-1130 --format pdf
    """
    company = resolve_company_or_exit(ctx)
    db = ctx.obj["db"]
    service = ReportService(db, config=ctx.obj["config"])

    if report == "ledger":
        if not account_id:
            click.echo("Error: --account is required for the ledger export.", err=True)
            ctx.exit(1)
        if file_format != "pdf":
            click.echo("Error: The ledger export is only available as PDF.", err=True)
            ctx.exit(1)

    try:
        if report == "statements":
            result = service.financial_statements(company.id)
            _echo_warnings(result.warnings)
            exporter = (
                export_financial_statements_excel
                if file_format == "xlsx"
                else export_financial_statements_pdf
            )
            buf = exporter(company, result)
        elif report == "trial-balance":
            result = service.trial_balance(company.id)
            exporter = (
                export_trial_balance_excel if file_format == "xlsx" else export_trial_balance_pdf
            )
            buf = exporter(company, result)
        elif report == "journal":
            rows = service.general_journal(company.id)
            exporter = (
                export_general_journal_excel if file_format == "xlsx" else export_general_journal_pdf
            )
            buf = exporter(company, rows)
        else:
            account = AccountService(db).require_account(company.id, account_id)
            rows = service.account_ledger(company.id, account_id)
            buf = export_account_ledger_pdf(company, account, rows)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    path = Path(output or f"{report}.{file_format}")
    path.write_bytes(buf.getvalue())
    click.echo(f"Exported {report} to {path}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
