"""Domain layer for ledgerbook application."""

_SERVICES = {
    "CompanyService": "ledgerbook.domain.company",
    "AccountService": "ledgerbook.domain.account",
    "TransactionService": "ledgerbook.domain.transaction",
    "ReportService": "ledgerbook.domain.reports",
    "CSVImportService": "ledgerbook.domain.csv_import",
}

__all__ = list(_SERVICES)


# Import services lazily to avoid circular dependencies
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
