"""PDF export of ledgerbook reports using fpdf2."""

import io
from typing import Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from ledgerbook.domain.entities import (
    Account,
    Company,
    FinancialStatements,
    JournalRow,
    LedgerRow,
    Statement,
    TrialBalance,
)
from ledgerbook.utils.formatting import as_of_label, format_amount, format_date, period_label

_LINE_H = 7


def _safe_text(text: str) -> str:
    """Core PDF fonts only cover latin-1."""
    return str(text).encode("latin-1", "replace").decode("latin-1")


def _title_block(pdf: FPDF, company: Company, title: str, subtitle: str) -> None:
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 10, _safe_text(company.name.upper()), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    if company.address:
        pdf.set_font("Helvetica", "", 9)
        pdf.cell(0, 5, _safe_text(company.address), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 8, _safe_text(title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "I", 9)
    pdf.cell(0, 6, _safe_text(subtitle), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)


def _new_pdf(company: Company, title: str, subtitle: str) -> FPDF:
    """Landscape page for wide tables."""
    pdf = FPDF(orientation="L")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    _title_block(pdf, company, title, subtitle)
    return pdf


def _new_pdf_portrait(company: Company, title: str, subtitle: str) -> FPDF:
    pdf = FPDF()
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    _title_block(pdf, company, title, subtitle)
    return pdf


def _header_row(pdf: FPDF, headers: Sequence[str], widths: Sequence[int]) -> None:
    pdf.set_font("Helvetica", "B", 9)
    pdf.set_fill_color(31, 78, 121)
    pdf.set_text_color(255, 255, 255)
    for header, width in zip(headers, widths):
        pdf.cell(width, _LINE_H, _safe_text(header), border=1, fill=True, align="C")
    pdf.ln()
    pdf.set_text_color(0, 0, 0)


def _data_row(
    pdf: FPDF,
    values: Sequence[str],
    widths: Sequence[int],
    bold: bool = False,
    left_columns: int = 1,
) -> None:
    pdf.set_font("Helvetica", "B" if bold else "", 9)
    for index, (value, width) in enumerate(zip(values, widths)):
        align = "L" if index < left_columns else "R"
        pdf.cell(width, _LINE_H, _safe_text(value), border="B", align=align)
    pdf.ln()


def _section_header(pdf: FPDF, title: str, width: int) -> None:
    pdf.set_font("Helvetica", "B", 10)
    pdf.set_fill_color(214, 228, 240)
    pdf.cell(width, _LINE_H, _safe_text(title), fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _write_statement(pdf: FPDF, statement: Statement) -> None:
    widths = [130, 50]
    _header_row(pdf, ["Description", "Amount"], widths)
    for section in statement.sections:
        _section_header(pdf, section.title.upper(), sum(widths))
        for item in section.items:
            _data_row(pdf, [f"  {item.label}", format_amount(item.amount)], widths)
        _data_row(
            pdf, [section.total_label, format_amount(section.total_amount)], widths, bold=True
        )
        pdf.ln(3)
    _data_row(
        pdf, [statement.final_label.upper(), format_amount(statement.final_amount)], widths, bold=True
    )


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    buf = io.BytesIO(bytes(pdf.output()))
    buf.seek(0)
    return buf


def export_financial_statements_pdf(
    company: Company, statements: FinancialStatements
) -> io.BytesIO:
    """Income statement followed by the balance sheet on its own page."""
    pdf = _new_pdf_portrait(company, statements.income_statement.title, period_label(company))
    _write_statement(pdf, statements.income_statement)

    pdf.add_page()
    _title_block(pdf, company, statements.balance_sheet.title, as_of_label(company))
    _write_statement(pdf, statements.balance_sheet)
    return _to_bytes(pdf)


def export_trial_balance_pdf(company: Company, trial_balance: TrialBalance) -> io.BytesIO:
    pdf = _new_pdf(company, "Trial Balance", period_label(company))
    widths = [30, 85, 40, 40, 40, 40]
    _header_row(pdf, ["Account", "Name", "Beginning", "Debit", "Credit", "Ending"], widths)
    for row in trial_balance.rows:
        _data_row(
            pdf,
            [
                row.account_id,
                row.account_name,
                format_amount(row.beginning_balance),
                format_amount(row.total_debit),
                format_amount(row.total_credit),
                format_amount(row.ending_balance),
            ],
            widths,
            left_columns=2,
        )
    _data_row(
        pdf,
        [
            "TOTAL",
            "",
            "",
            format_amount(trial_balance.total_debit),
            format_amount(trial_balance.total_credit),
            "",
        ],
        widths,
        bold=True,
        left_columns=2,
    )
    return _to_bytes(pdf)


def export_general_journal_pdf(company: Company, rows: Sequence[JournalRow]) -> io.BytesIO:
    pdf = _new_pdf(company, "General Journal", period_label(company))
    widths = [12, 25, 90, 80, 35, 35]
    _header_row(pdf, ["No.", "Date", "Description", "Account", "Debit", "Credit"], widths)
    for row in rows:
        _data_row(
            pdf,
            [
                str(row.number),
                format_date(row.date),
                row.description,
                f"{row.account_id} {row.account_name}",
                format_amount(row.debit_amount, blank=""),
                format_amount(row.credit_amount, blank=""),
            ],
            widths,
            left_columns=4,
        )
    return _to_bytes(pdf)


def export_account_ledger_pdf(
    company: Company, account: Account, rows: Sequence[LedgerRow]
) -> io.BytesIO:
    """Ledger card for one account, opening with its beginning balance."""
    pdf = _new_pdf(company, f"Ledger: {account.id} {account.name}", period_label(company))
    widths = [28, 128, 40, 40, 40]
    _header_row(pdf, ["Date", "Description", "Debit", "Credit", "Balance"], widths)
    _data_row(
        pdf,
        ["", "Beginning balance", "", "", format_amount(account.beginning_balance)],
        widths,
        left_columns=2,
    )
    for row in rows:
        _data_row(
            pdf,
            [
                format_date(row.date),
                row.description,
                format_amount(row.debit_amount, blank=""),
                format_amount(row.credit_amount, blank=""),
                format_amount(row.running_balance),
            ],
            widths,
            left_columns=2,
        )
    return _to_bytes(pdf)
