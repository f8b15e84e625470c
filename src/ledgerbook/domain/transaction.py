"""Transaction and journal entry domain service."""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.config import DEFAULT_CONFIG, LedgerConfig
from ledgerbook.domain.entities import EntryLine, JournalEntryDraft, Transaction
from ledgerbook.domain.entries import (
    check_cents,
    generate_compound_entry,
    validate_journal_entry,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    entry_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)


def new_entry_id() -> str:
    """Return a fresh journal entry identifier."""
    return uuid.uuid4().hex


class TransactionService:
    """Service for recording and managing journal entries."""

    def __init__(self, db: Database, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize transaction service.

        Args:
            db: Database instance
            config: Counter-account codes, tax rates and balance tolerance
        """
        self.db = db
        self.config = config

    @staticmethod
    def _check_header(entry_date: Optional[date], description: Optional[str]) -> str:
        if entry_date is None:
            raise ValidationError("Entry date is required")
        description = (description or "").strip()
        if not description:
            raise ValidationError("Entry description is required")
        return description

    def _check_accounts(self, company_id: int, lines: Sequence[EntryLine]) -> None:
        for line in lines:
            if self.db.get_account(company_id, line.account_id) is None:
                raise NotFoundError(account_not_found(line.account_id))

    def _store(self, company_id: int, draft: JournalEntryDraft) -> str:
        entry_id = new_entry_id()
        self.db.create_entry(
            company_id=company_id,
            entry_id=entry_id,
            entry_date=draft.date,
            description=draft.description,
            lines=draft.lines,
        )
        logger.info(
            "Recorded entry %s with %d lines for company %s",
            entry_id,
            len(draft.lines),
            company_id,
        )
        return entry_id

    def record_simple_entry(
        self,
        company_id: int,
        account_id: str,
        amount: Decimal,
        description: str,
        entry_date: date,
        apply_tax: bool = False,
        apply_withholding: bool = False,
    ) -> str:
        """Record an income or expense amount as a compound journal entry.

        Args:
            company_id: Owning company
            account_id: Income or expense account
            amount: Base amount before tax
            description: Entry description
            entry_date: Entry date
            apply_tax: Add output tax on an income entry
            apply_withholding: Withhold tax on an expense entry

        Returns:
            Entry ID

        Raises:
            ValidationError: If a field is missing, the amount is not positive,
                has sub-cent precision, or the account is neither income nor expense
            NotFoundError: If the account or a fixed counter account is missing
        """
        description = self._check_header(entry_date, description)
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        check_cents(amount, "Amount")

        account = self.db.get_account(company_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        draft = generate_compound_entry(
            account,
            amount,
            description,
            entry_date,
            apply_tax=apply_tax,
            apply_withholding=apply_withholding,
            config=self.config,
        )
        if not draft.lines:
            raise ValidationError(
                f"Account '{account_id}' is neither an income nor an expense account; "
                "record it as a journal entry instead"
            )
        self._check_accounts(company_id, draft.lines)
        return self._store(company_id, draft)

    def record_journal_entry(
        self,
        company_id: int,
        entry_date: date,
        description: str,
        lines: Sequence[EntryLine],
    ) -> str:
        """Record a manual multi-line journal entry.

        Returns:
            Entry ID

        Raises:
            ValidationError: If the entry is malformed or unbalanced
            NotFoundError: If a line references a missing account
        """
        description = self._check_header(entry_date, description)
        validate_journal_entry(lines, tolerance=self.config.balance_tolerance)
        self._check_accounts(company_id, lines)
        return self._store(
            company_id,
            JournalEntryDraft(date=entry_date, description=description, lines=tuple(lines)),
        )

    def replace_journal_entry(
        self,
        company_id: int,
        entry_id: str,
        entry_date: date,
        description: str,
        lines: Sequence[EntryLine],
    ) -> None:
        """Replace all lines of an existing entry after validating the new set.

        Raises:
            NotFoundError: If the entry or a referenced account is missing
            ValidationError: If the new lines are malformed or unbalanced
        """
        self.get_entry(company_id, entry_id)
        description = self._check_header(entry_date, description)
        validate_journal_entry(lines, tolerance=self.config.balance_tolerance)
        self._check_accounts(company_id, lines)
        self.db.replace_entry(
            company_id=company_id,
            entry_id=entry_id,
            entry_date=entry_date,
            description=description,
            lines=lines,
        )

    def get_entry(self, company_id: int, entry_id: str) -> list[Transaction]:
        """Return the lines of a journal entry.

        Raises:
            NotFoundError: If the entry has no lines
        """
        lines = self.db.list_entry_lines(company_id, entry_id)
        if not lines:
            raise NotFoundError(entry_not_found(entry_id))
        return lines

    def delete_entry(self, company_id: int, entry_id: str) -> int:
        """Delete every line of a journal entry.

        Returns:
            Number of lines deleted

        Raises:
            NotFoundError: If the entry does not exist
        """
        deleted = self.db.delete_entry(company_id, entry_id)
        if deleted == 0:
            raise NotFoundError(entry_not_found(entry_id))
        logger.info("Deleted entry %s (%d lines)", entry_id, deleted)
        return deleted

    def get_transaction(self, company_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction line, or None if not found."""
        return self.db.get_transaction(company_id, transaction_id)

    def delete_transaction(self, company_id: int, transaction_id: int) -> None:
        """Delete a single transaction line.

        Raises:
            NotFoundError: If the line does not exist
        """
        if self.db.get_transaction(company_id, transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(company_id, transaction_id)

    def list_transactions(
        self,
        company_id: int,
        search: Optional[str] = None,
        account_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transaction lines, newest first.

        Args:
            company_id: Company whose lines to list
            search: Optional text matched against description and account name
            account_id: Optional account code filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
        """
        search = search.strip() if search else None
        return self.db.list_transactions(
            company_id,
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            search=search or None,
            newest_first=True,
        )
