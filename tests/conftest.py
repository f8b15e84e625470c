"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.company import CompanyService
from ledgerbook.domain.csv_import import CSVImportService
from ledgerbook.domain.reports import ReportService
from ledgerbook.domain.transaction import TransactionService


# (code, name, category, beginning balance)
SAMPLE_CHART = [
    ("1-1130", "Cash", "asset", Decimal("1000000")),
    ("1-1200", "Accounts Receivable", "asset", Decimal("0")),
    ("2-1250", "Output Tax Payable", "liability", Decimal("0")),
    ("2-1260", "Withholding Tax Payable", "liability", Decimal("0")),
    ("3-1000", "Owner Capital", "equity", Decimal("1000000")),
    ("3-9999", "Retained Earnings", "equity", Decimal("0")),
    ("4-4000", "Service Revenue", "income", Decimal("0")),
    ("6-1000", "Rent Expense", "expense", Decimal("0")),
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's ledgerbook settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("LEDGERBOOK_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def company_service(temp_db):
    """Create a CompanyService with a temporary database."""
    return CompanyService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def csv_import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def sample_company(company_service):
    """Create a sample company with a 2025 calendar fiscal year."""
    company_id = company_service.create_company(
        name="Toko Maju",
        address="Jl. Merdeka 1, Jakarta",
        phone="021-555-0100",
        tax_id="01.234.567.8-901.000",
        fiscal_year_start=date(2025, 1, 1),
        fiscal_year_end=date(2025, 12, 31),
    )
    return company_service.get_company(company_id)


@pytest.fixture
def sample_accounts(account_service, sample_company):
    """Create the sample chart of accounts for the sample company."""
    for code, name, category, balance in SAMPLE_CHART:
        account_service.create_account(
            company_id=sample_company.id,
            account_id=code,
            name=name,
            category=category,
            beginning_balance=balance,
        )
    return account_service.list_accounts(sample_company.id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
