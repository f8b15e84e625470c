"""Report exporters (Excel and PDF)."""

from ledgerbook.export.excel import (
    export_financial_statements_excel,
    export_general_journal_excel,
    export_trial_balance_excel,
)
from ledgerbook.export.pdf import (
    export_account_ledger_pdf,
    export_financial_statements_pdf,
    export_general_journal_pdf,
    export_trial_balance_pdf,
)

__all__ = [
    "export_financial_statements_excel",
    "export_general_journal_excel",
    "export_trial_balance_excel",
    "export_account_ledger_pdf",
    "export_financial_statements_pdf",
    "export_general_journal_pdf",
    "export_trial_balance_pdf",
]
