"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    Company,
    EntryLine,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for ledgerbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Company operations
    @abstractmethod
    def create_company(
        self,
        name: str,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        tax_id: Optional[str] = None,
        fiscal_year_start: Optional[date] = None,
        fiscal_year_end: Optional[date] = None,
    ) -> int:
        """Create a company. Returns company ID."""
        pass

    @abstractmethod
    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID."""
        pass

    @abstractmethod
    def get_company_by_name(self, name: str) -> Optional[Company]:
        """Get company by exact name."""
        pass

    @abstractmethod
    def list_companies(self) -> list[Company]:
        """List all companies ordered by name."""
        pass

    @abstractmethod
    def update_company(
        self,
        company_id: int,
        name: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        tax_id: Optional[str] = None,
        fiscal_year_start: Optional[date] = None,
        fiscal_year_end: Optional[date] = None,
    ) -> None:
        """Update company fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_company(self, company_id: int) -> None:
        """Delete a company together with its accounts and transactions."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        company_id: int,
        account_id: str,
        name: str,
        category: str,
        normal_balance: str,
        beginning_balance: Decimal = Decimal("0"),
    ) -> str:
        """Create an account. Returns the account code."""
        pass

    @abstractmethod
    def create_accounts(self, company_id: int, accounts: Sequence[Account]) -> int:
        """Create several accounts in one commit. Returns the number created."""
        pass

    @abstractmethod
    def get_account(self, company_id: int, account_id: str) -> Optional[Account]:
        """Get account by company and code."""
        pass

    @abstractmethod
    def list_accounts(self, company_id: int) -> list[Account]:
        """List a company's accounts ordered by code."""
        pass

    @abstractmethod
    def update_account(
        self,
        company_id: int,
        account_id: str,
        name: Optional[str] = None,
        category: Optional[str] = None,
        normal_balance: Optional[str] = None,
        beginning_balance: Optional[Decimal] = None,
    ) -> None:
        """Update account fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_account(self, company_id: int, account_id: str) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, company_id: int, account_id: str) -> int:
        """Count transactions that reference an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_entry(
        self,
        company_id: int,
        entry_id: str,
        entry_date: date,
        description: str,
        lines: Sequence[EntryLine],
    ) -> list[int]:
        """Store all lines of one journal entry in a single commit.

        Lines without their own description use the entry description.
        Returns the created transaction IDs.
        """
        pass

    @abstractmethod
    def replace_entry(
        self,
        company_id: int,
        entry_id: str,
        entry_date: date,
        description: str,
        lines: Sequence[EntryLine],
    ) -> list[int]:
        """Replace every line of an existing entry in a single commit."""
        pass

    @abstractmethod
    def get_transaction(self, company_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get a transaction line by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        company_id: int,
        account_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
        newest_first: bool = False,
    ) -> list[Transaction]:
        """List transaction lines with optional filters.

        Args:
            company_id: Company whose lines to list
            account_id: Optional account code filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            search: Optional case-insensitive text matched against the line
                description and the account name
            newest_first: If True, order by date descending
        """
        pass

    @abstractmethod
    def list_entry_lines(self, company_id: int, entry_id: str) -> list[Transaction]:
        """List the lines of one journal entry."""
        pass

    @abstractmethod
    def delete_entry(self, company_id: int, entry_id: str) -> int:
        """Delete every line of an entry. Returns the number deleted."""
        pass

    @abstractmethod
    def delete_transaction(self, company_id: int, transaction_id: int) -> None:
        """Delete a single transaction line."""
        pass
