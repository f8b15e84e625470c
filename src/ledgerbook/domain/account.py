"""Account directory domain service."""

import logging
from decimal import Decimal
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import ACCOUNT_CATEGORIES, Account, normal_balance_for
from ledgerbook.domain.entries import check_cents
from ledgerbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_id,
)

logger = logging.getLogger(__name__)


def validate_category(category: str) -> str:
    """Return the category if it is a known chart-of-accounts category.

    Raises:
        ValidationError: If the category is unknown
    """
    if category not in ACCOUNT_CATEGORIES:
        raise ValidationError(
            f"Unknown account category '{category}'. "
            f"Expected one of: {', '.join(ACCOUNT_CATEGORIES)}"
        )
    return category


class AccountService:
    """Service for managing a company's chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        company_id: int,
        account_id: str,
        name: str,
        category: str,
        beginning_balance: Decimal = Decimal("0"),
    ) -> str:
        """Create a new account.

        The normal balance is derived from the category.

        Args:
            company_id: Owning company
            account_id: Account code, e.g. "1-1130"
            name: Account name
            category: One of the chart-of-accounts categories
            beginning_balance: Opening balance on the normal side

        Returns:
            Account code

        Raises:
            ValidationError: If the code or name is empty, the category unknown,
                or the beginning balance has sub-cent precision
            ConflictError: If the code is already used in this company
        """
        account_id = (account_id or "").strip()
        name = (name or "").strip()
        if not account_id or not name:
            raise ValidationError("Account ID and account name must not be empty")
        validate_category(category)
        check_cents(beginning_balance, "Beginning balance")

        if self.db.get_account(company_id, account_id) is not None:
            raise ConflictError(duplicate_account_id(account_id))

        self.db.create_account(
            company_id=company_id,
            account_id=account_id,
            name=name,
            category=category,
            normal_balance=normal_balance_for(category),
            beginning_balance=beginning_balance,
        )
        logger.debug("Created account %s for company %s", account_id, company_id)
        return account_id

    def get_account(self, company_id: int, account_id: str) -> Optional[Account]:
        """Get account by code.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(company_id, account_id)

    def require_account(self, company_id: int, account_id: str) -> Account:
        """Get account by code or raise NotFoundError."""
        account = self.db.get_account(company_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, company_id: int) -> list[Account]:
        """List a company's accounts in code order."""
        return self.db.list_accounts(company_id)

    def update_account(
        self,
        company_id: int,
        account_id: str,
        name: Optional[str] = None,
        category: Optional[str] = None,
        beginning_balance: Optional[Decimal] = None,
    ) -> None:
        """Edit an account's name, category or beginning balance.

        The code cannot change. Changing the category re-derives the normal
        balance.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the new name is empty, the category unknown,
                or the beginning balance has sub-cent precision
        """
        self.require_account(company_id, account_id)
        if name is not None and not name.strip():
            raise ValidationError("Account name must not be empty")

        normal_balance = None
        if category is not None:
            validate_category(category)
            normal_balance = normal_balance_for(category)
        if beginning_balance is not None:
            check_cents(beginning_balance, "Beginning balance")

        self.db.update_account(
            company_id,
            account_id,
            name=name.strip() if name is not None else None,
            category=category,
            normal_balance=normal_balance,
            beginning_balance=beginning_balance,
        )

    def is_account_in_use(self, company_id: int, account_id: str) -> bool:
        """Return True if any transaction references the account."""
        return self.db.get_account_transaction_count(company_id, account_id) > 0

    def delete_account(self, company_id: int, account_id: str) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If transactions reference the account
        """
        self.require_account(company_id, account_id)

        transaction_count = self.db.get_account_transaction_count(company_id, account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(company_id, account_id)
        logger.debug("Deleted account %s from company %s", account_id, company_id)
