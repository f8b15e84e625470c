"""Report domain service.

Loads a company snapshot from the database and hands it to the pure ledger
engine. Every call recomputes from scratch.
"""

import logging
from decimal import Decimal
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.config import DEFAULT_CONFIG, LedgerConfig
from ledgerbook.domain.dashboard import build_dashboard_summary
from ledgerbook.domain.entities import (
    Account,
    Company,
    DashboardSummary,
    FinancialStatements,
    JournalRow,
    LedgerRow,
    Transaction,
    TrialBalance,
)
from ledgerbook.domain.errors import NotFoundError, account_not_found, company_not_found
from ledgerbook.domain.ledger import (
    build_account_ledger,
    build_general_journal,
    build_trial_balance,
    compute_balances,
)
from ledgerbook.domain.statements import build_financial_statements

logger = logging.getLogger(__name__)


class ReportService:
    """Service for building ledgers, trial balances and statements."""

    def __init__(self, db: Database, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize report service.

        Args:
            db: Database instance
            config: Retained earnings and cash account codes
        """
        self.db = db
        self.config = config

    def load_snapshot(
        self, company_id: int
    ) -> tuple[Company, list[Account], list[Transaction]]:
        """Load a company with its accounts and transactions.

        Raises:
            NotFoundError: If the company does not exist
        """
        company = self.db.get_company(company_id)
        if company is None:
            raise NotFoundError(company_not_found(company_id))
        accounts = self.db.list_accounts(company_id)
        transactions = self.db.list_transactions(company_id)
        logger.debug(
            "Loaded snapshot for company %s: %d accounts, %d transactions",
            company_id,
            len(accounts),
            len(transactions),
        )
        return company, accounts, transactions

    def balances(
        self, company_id: int, warnings: Optional[list[str]] = None
    ) -> dict[str, Decimal]:
        """Full-history balances per account, excluding beginning balances."""
        _, accounts, transactions = self.load_snapshot(company_id)
        return compute_balances(accounts, transactions, warnings=warnings)

    def account_ledger(self, company_id: int, account_id: str) -> list[LedgerRow]:
        """Running-balance ledger for one account.

        Raises:
            NotFoundError: If the company or account does not exist
        """
        _, accounts, transactions = self.load_snapshot(company_id)
        for account in accounts:
            if account.id == account_id:
                return build_account_ledger(account, transactions)
        raise NotFoundError(account_not_found(account_id))

    def trial_balance(
        self, company_id: int, warnings: Optional[list[str]] = None
    ) -> TrialBalance:
        """All-accounts trial balance split at the company's fiscal year start."""
        company, accounts, transactions = self.load_snapshot(company_id)
        return build_trial_balance(
            accounts, transactions, company.fiscal_year_start, warnings=warnings
        )

    def financial_statements(self, company_id: int) -> FinancialStatements:
        """Income statement and balance sheet with retained earnings roll-forward."""
        _, accounts, transactions = self.load_snapshot(company_id)
        return build_financial_statements(accounts, transactions, config=self.config)

    def general_journal(self, company_id: int) -> list[JournalRow]:
        """Every transaction line in date order."""
        _, accounts, transactions = self.load_snapshot(company_id)
        return build_general_journal(accounts, transactions)

    def dashboard_summary(self, company_id: int) -> DashboardSummary:
        """Headline income, expense and cash figures."""
        _, accounts, transactions = self.load_snapshot(company_id)
        return build_dashboard_summary(
            accounts, transactions, cash_account_id=self.config.cash_account_id
        )
