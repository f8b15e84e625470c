"""Excel export of ledgerbook reports using openpyxl."""

import io
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ledgerbook.domain.entities import (
    Company,
    FinancialStatements,
    JournalRow,
    Statement,
    TrialBalance,
)
from ledgerbook.utils.formatting import as_of_label, format_date, period_label

_HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
_HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
_SECTION_FONT = Font(name="Calibri", bold=True, size=11)
_SECTION_FILL = PatternFill(start_color="D6E4F0", end_color="D6E4F0", fill_type="solid")
_TOTAL_FONT = Font(name="Calibri", bold=True, size=11)
_TOTAL_BORDER = Border(top=Side(style="thin"), bottom=Side(style="double"))
_CURRENCY_FMT = "#,##0.00"
_RIGHT = Alignment(horizontal="right")
_LEFT = Alignment(horizontal="left")


def _auto_width(ws: Any) -> None:
    """Auto-fit column widths based on content."""
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        col_letter = get_column_letter(col_idx)
        for row in ws.iter_rows(min_col=col_idx, max_col=col_idx):
            cell = row[0]
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 4, 50)


def _write_header_row(ws: Any, row: int, values: Sequence[str]) -> None:
    for col, val in enumerate(values, 1):
        cell = ws.cell(row=row, column=col, value=val)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _LEFT if col == 1 else _RIGHT


def _write_title(ws: Any, company: Company, title: str, subtitle: str) -> int:
    """Write company name, address, report title and subtitle; return next row."""
    ws.cell(row=1, column=1, value=company.name.upper()).font = Font(name="Calibri", bold=True, size=14)
    ws.cell(row=2, column=1, value=company.address or "")
    ws.cell(row=3, column=1, value=title).font = Font(name="Calibri", bold=True, size=12)
    ws.cell(row=4, column=1, value=subtitle).font = Font(name="Calibri", size=10, italic=True)
    return 6


def _write_amount(ws: Any, row: int, column: int, amount, bold: bool = False) -> None:
    if amount is None:
        return
    cell = ws.cell(row=row, column=column, value=amount)
    cell.number_format = _CURRENCY_FMT
    cell.alignment = _RIGHT
    if bold:
        cell.font = _TOTAL_FONT
        cell.border = _TOTAL_BORDER


def _write_statement(ws: Any, company: Company, statement: Statement, subtitle: str) -> None:
    row = _write_title(ws, company, statement.title, subtitle)
    _write_header_row(ws, row, ["Description", "Amount"])
    row += 1

    for section in statement.sections:
        ws.cell(row=row, column=1, value=section.title.upper()).font = _SECTION_FONT
        ws.cell(row=row, column=1).fill = _SECTION_FILL
        ws.cell(row=row, column=2).fill = _SECTION_FILL
        row += 1
        for item in section.items:
            ws.cell(row=row, column=1, value=f"  {item.label}")
            _write_amount(ws, row, 2, item.amount)
            row += 1
        ws.cell(row=row, column=1, value=section.total_label.upper()).font = _TOTAL_FONT
        _write_amount(ws, row, 2, section.total_amount, bold=True)
        row += 2

    ws.cell(row=row, column=1, value=statement.final_label.upper()).font = Font(
        name="Calibri", bold=True, size=12
    )
    _write_amount(ws, row, 2, statement.final_amount, bold=True)
    _auto_width(ws)


def _to_buffer(wb: Workbook) -> io.BytesIO:
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


def export_financial_statements_excel(
    company: Company, statements: FinancialStatements
) -> io.BytesIO:
    """Workbook with an income statement sheet and a balance sheet sheet."""
    wb = Workbook()
    ws_income = wb.active
    ws_income.title = "Income Statement"
    _write_statement(ws_income, company, statements.income_statement, period_label(company))

    ws_balance = wb.create_sheet("Balance Sheet")
    _write_statement(ws_balance, company, statements.balance_sheet, as_of_label(company))
    return _to_buffer(wb)


def export_trial_balance_excel(company: Company, trial_balance: TrialBalance) -> io.BytesIO:
    """Workbook with one trial balance sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Trial Balance"

    row = _write_title(ws, company, "Trial Balance", period_label(company))
    _write_header_row(
        ws, row, ["Account", "Name", "Beginning", "Debit", "Credit", "Ending"]
    )
    row += 1
    for tb_row in trial_balance.rows:
        ws.cell(row=row, column=1, value=tb_row.account_id)
        ws.cell(row=row, column=2, value=tb_row.account_name)
        _write_amount(ws, row, 3, tb_row.beginning_balance)
        _write_amount(ws, row, 4, tb_row.total_debit)
        _write_amount(ws, row, 5, tb_row.total_credit)
        _write_amount(ws, row, 6, tb_row.ending_balance)
        row += 1

    ws.cell(row=row, column=1, value="TOTAL").font = _TOTAL_FONT
    _write_amount(ws, row, 4, trial_balance.total_debit, bold=True)
    _write_amount(ws, row, 5, trial_balance.total_credit, bold=True)
    _auto_width(ws)
    return _to_buffer(wb)


def export_general_journal_excel(company: Company, rows: Sequence[JournalRow]) -> io.BytesIO:
    """Workbook with the general journal."""
    wb = Workbook()
    ws = wb.active
    ws.title = "General Journal"

    row = _write_title(ws, company, "General Journal", period_label(company))
    _write_header_row(ws, row, ["No.", "Date", "Description", "Account", "Debit", "Credit"])
    row += 1
    for journal_row in rows:
        ws.cell(row=row, column=1, value=journal_row.number)
        ws.cell(row=row, column=2, value=format_date(journal_row.date))
        ws.cell(row=row, column=3, value=journal_row.description)
        ws.cell(row=row, column=4, value=f"{journal_row.account_id} {journal_row.account_name}")
        _write_amount(ws, row, 5, journal_row.debit_amount)
        _write_amount(ws, row, 6, journal_row.credit_amount)
        row += 1
    _auto_width(ws)
    return _to_buffer(wb)
