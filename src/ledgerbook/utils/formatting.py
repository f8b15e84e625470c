"""Display formatting shared by the CLI and exporters."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerbook.domain.entities import Company


def format_amount(amount: Optional[Decimal], blank: str = "-") -> str:
    """Format an amount with thousands separators and two decimals."""
    if amount is None:
        return blank
    return f"{amount:,.2f}"


def format_date(value: Optional[date]) -> str:
    """Format a date as ISO, or an empty string."""
    return value.isoformat() if value is not None else ""


def period_label(company: Company) -> str:
    """Reporting period label built from the company's fiscal year."""
    if company.fiscal_year_start is None and company.fiscal_year_end is None:
        return "All periods"
    return (
        f"Period {format_date(company.fiscal_year_start) or '...'}"
        f" to {format_date(company.fiscal_year_end) or '...'}"
    )


def as_of_label(company: Company) -> str:
    """Balance-sheet date label built from the company's fiscal year end."""
    if company.fiscal_year_end is None:
        return "As of today"
    return f"As of {format_date(company.fiscal_year_end)}"
