"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. The ledger engine only ever sees these types, so report
logic stays the same whichever persistence backend supplies the snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountCategory(str, Enum):
    """Chart-of-accounts category."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    COST_OF_SALES = "cost_of_sales"
    EXPENSE = "expense"
    OTHER_INCOME = "other_income"
    OTHER_EXPENSE = "other_expense"


class EntryType(str, Enum):
    """Side of a ledger line."""

    DEBIT = "debit"
    CREDIT = "credit"


ACCOUNT_CATEGORIES = tuple(category.value for category in AccountCategory)

DEBIT_NORMAL_CATEGORIES = frozenset(
    {
        AccountCategory.ASSET.value,
        AccountCategory.COST_OF_SALES.value,
        AccountCategory.EXPENSE.value,
        AccountCategory.OTHER_EXPENSE.value,
    }
)


def normal_balance_for(category: str) -> str:
    """Return the normal balance side for an account category.

    Debit for asset, cost of sales, expense and other expense; credit for
    every other category.
    """
    if category in DEBIT_NORMAL_CATEGORIES:
        return EntryType.DEBIT.value
    return EntryType.CREDIT.value


@dataclass(frozen=True)
class Company:
    """Company domain entity. Scopes accounts and transactions."""

    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    tax_id: Optional[str] = None
    fiscal_year_start: Optional[date] = None
    fiscal_year_end: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry.

    ``beginning_balance`` is expressed on the account's normal side.
    """

    id: str
    name: str
    category: str
    normal_balance: str
    beginning_balance: Decimal = Decimal("0")
    company_id: Optional[int] = None


@dataclass(frozen=True)
class Transaction:
    """A single ledger line. Lines sharing ``entry_id`` form a journal entry."""

    id: Optional[int]
    date: date
    description: str
    account_id: str
    type: str
    amount: Decimal
    entry_id: Optional[str] = None
    company_id: Optional[int] = None


@dataclass(frozen=True)
class EntryLine:
    """One line of a journal entry that has not been committed yet."""

    account_id: str
    type: str
    amount: Decimal
    description: Optional[str] = None


@dataclass(frozen=True)
class JournalEntryDraft:
    """Uncommitted journal entry: shared date and description plus its lines."""

    date: date
    description: str
    lines: tuple[EntryLine, ...] = ()


@dataclass(frozen=True)
class LedgerRow:
    """Row of a single-account ledger with running balance."""

    date: date
    description: str
    debit_amount: Optional[Decimal]
    credit_amount: Optional[Decimal]
    running_balance: Decimal
    transaction_id: Optional[int] = None
    entry_id: Optional[str] = None


@dataclass(frozen=True)
class TrialBalanceRow:
    """Per-account beginning balance, period movement and ending balance."""

    account_id: str
    account_name: str
    beginning_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance rows with column totals of period movement."""

    rows: tuple[TrialBalanceRow, ...]
    total_debit: Decimal
    total_credit: Decimal


@dataclass(frozen=True)
class StatementLine:
    """Labelled amount inside a statement section."""

    label: str
    amount: Decimal
    account_id: Optional[str] = None


@dataclass(frozen=True)
class StatementSection:
    """Titled group of statement lines with a total."""

    title: str
    items: tuple[StatementLine, ...]
    total_label: str
    total_amount: Decimal


@dataclass(frozen=True)
class Statement:
    """Classified financial statement."""

    title: str
    sections: tuple[StatementSection, ...]
    final_label: str
    final_amount: Decimal

    def section(self, title: str) -> Optional[StatementSection]:
        """Return the section with the given title, if present."""
        for section in self.sections:
            if section.title == title:
                return section
        return None


@dataclass(frozen=True)
class FinancialStatements:
    """Income statement and balance sheet derived from one snapshot."""

    income_statement: Statement
    balance_sheet: Statement
    net_income: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    total_liabilities_and_equity: Decimal
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class JournalRow:
    """Numbered line of the general journal."""

    number: int
    date: date
    description: str
    account_id: str
    account_name: str
    debit_amount: Optional[Decimal]
    credit_amount: Optional[Decimal]
    entry_id: Optional[str] = None


@dataclass(frozen=True)
class MonthlyTotals:
    """Raw income and expense amounts booked in one month."""

    month: str
    income: Decimal
    expense: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for a company."""

    total_income: Decimal
    total_expense: Decimal
    net_income: Decimal
    cash_balance: Decimal
    monthly: tuple[MonthlyTotals, ...] = field(default_factory=tuple)
