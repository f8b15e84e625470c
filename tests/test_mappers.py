"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from ledgerbook.database.models import (
    Account as ORMAccount,
    Company as ORMCompany,
    Transaction as ORMTransaction,
)
from ledgerbook.database.mappers import (
    account_to_domain,
    company_to_domain,
    transaction_to_domain,
)
from ledgerbook.domain.entities import Account, Company, Transaction


class TestCompanyMapper:
    """Tests for Company mapper."""

    def test_company_to_domain(self):
        """Test converting ORM Company to domain Company."""
        created_at = datetime.now(UTC)
        orm_company = ORMCompany(
            id=1,
            name="Toko Maju",
            address="Jl. Merdeka 1",
            phone="021",
            tax_id="01.234",
            fiscal_year_start=date(2025, 1, 1),
            fiscal_year_end=date(2025, 12, 31),
            created_at=created_at,
        )
        company = company_to_domain(orm_company)

        assert isinstance(company, Company)
        assert company.id == 1
        assert company.name == "Toko Maju"
        assert company.tax_id == "01.234"
        assert company.fiscal_year_end == date(2025, 12, 31)
        assert company.created_at == created_at


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test the account code becomes the domain id."""
        orm_account = ORMAccount(
            company_id=3,
            code="1-1130",
            name="Cash",
            category="asset",
            normal_balance="debit",
            beginning_balance=Decimal("1000000.00"),
        )
        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.id == "1-1130"
        assert account.company_id == 3
        assert account.beginning_balance == Decimal("1000000")

    def test_missing_balance_is_zero(self):
        """Test an unset beginning balance maps to zero."""
        orm_account = ORMAccount(
            company_id=1, code="4-4000", name="Sales", category="income", normal_balance="credit"
        )
        assert account_to_domain(orm_account).beginning_balance == Decimal("0")

    def test_float_balance_becomes_decimal(self):
        """Test non-Decimal numerics are converted."""
        orm_account = ORMAccount(
            company_id=1, code="1-1130", name="Cash", category="asset", normal_balance="debit",
            beginning_balance=12.5,
        )
        balance = account_to_domain(orm_account).beginning_balance
        assert isinstance(balance, Decimal)
        assert balance == Decimal("12.5")


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain Transaction."""
        orm_transaction = ORMTransaction(
            id=7,
            company_id=1,
            entry_id="abc123",
            date=date(2025, 1, 10),
            description="Capital",
            account_code="3-1000",
            type="credit",
            amount=Decimal("500000.00"),
        )
        txn = transaction_to_domain(orm_transaction)

        assert isinstance(txn, Transaction)
        assert txn.id == 7
        assert txn.account_id == "3-1000"
        assert txn.entry_id == "abc123"
        assert txn.type == "credit"
        assert txn.amount == Decimal("500000")
