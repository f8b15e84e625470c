"""CLI helpers for selecting the company a command works on."""

from __future__ import annotations

import click
from ledgerbook.domain.company import CompanyService
from ledgerbook.domain.entities import Company
from ledgerbook.domain.errors import NotFoundError


def resolve_company_or_exit(ctx: click.Context, company: str | int | None = None) -> Company:
    """Resolve the selected company, or exit with a CLI error.

    Uses the explicit argument, then the global --company option. When
    neither is given and exactly one company exists, that company is used.
    """
    service = CompanyService(ctx.obj["db"])
    selected = company if company is not None else ctx.obj.get("company")

    if selected is None:
        companies = service.list_companies()
        if len(companies) == 1:
            return companies[0]
        if not companies:
            click.echo("Error: No companies found. Create one with 'company create'.", err=True)
        else:
            click.echo(
                "Error: Several companies exist. Select one with --company "
                "or the LEDGERBOOK_COMPANY environment variable.",
                err=True,
            )
        ctx.exit(1)

    try:
        return service.resolve_company(selected)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
