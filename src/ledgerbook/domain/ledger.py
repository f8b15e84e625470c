"""Ledger engine: balances, running ledgers and trial balances.

Everything here is a pure function over in-memory snapshots of accounts and
transactions. Nothing is cached between calls; callers recompute from a
fresh snapshot whenever the underlying data changes.
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ledgerbook.domain.entities import (
    Account,
    EntryType,
    JournalRow,
    LedgerRow,
    Transaction,
    TrialBalance,
    TrialBalanceRow,
)
from ledgerbook.domain.errors import unknown_account_reference

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
UNKNOWN_ACCOUNT_NAME = "Account not found"


def signed_amount(account: Account, txn: Transaction) -> Decimal:
    """Return the transaction amount signed relative to the account's normal side."""
    if txn.type == account.normal_balance:
        return txn.amount
    return -txn.amount


def _report_unknown_account(txn: Transaction, warnings: Optional[list[str]]) -> None:
    message = unknown_account_reference(txn.id, txn.account_id)
    logger.warning("Skipping transaction: %s", message)
    if warnings is not None:
        warnings.append(message)


def compute_balances(
    accounts: Sequence[Account],
    transactions: Iterable[Transaction],
    warnings: Optional[list[str]] = None,
) -> dict[str, Decimal]:
    """Fold transactions into per-account signed balances.

    Beginning balances are not included. Transactions that reference an
    account missing from ``accounts`` are skipped, logged, and reported
    through ``warnings`` when a list is supplied.

    Args:
        accounts: Account directory snapshot
        transactions: Transactions to fold
        warnings: Optional list that collects skipped-reference messages

    Returns:
        Mapping of account ID to balance on the account's normal side
    """
    account_index = {account.id: account for account in accounts}
    balances = {account_id: ZERO for account_id in account_index}

    for txn in transactions:
        account = account_index.get(txn.account_id)
        if account is None:
            _report_unknown_account(txn, warnings)
            continue
        balances[account.id] += signed_amount(account, txn)

    return balances


def split_period(
    account: Account,
    transactions: Iterable[Transaction],
    fiscal_year_start: Optional[date],
) -> TrialBalanceRow:
    """Split one account's transactions around the fiscal year start.

    Transactions dated before ``fiscal_year_start`` are folded into the
    beginning balance; the rest accumulate raw debit and credit totals.
    With no fiscal year start, every transaction counts as period movement.
    Transactions for other accounts are ignored.
    """
    beginning_balance = account.beginning_balance
    total_debit = ZERO
    total_credit = ZERO

    for txn in transactions:
        if txn.account_id != account.id:
            continue
        if fiscal_year_start is not None and txn.date < fiscal_year_start:
            beginning_balance += signed_amount(account, txn)
        elif txn.type == EntryType.DEBIT.value:
            total_debit += txn.amount
        elif txn.type == EntryType.CREDIT.value:
            total_credit += txn.amount

    if account.normal_balance == EntryType.DEBIT.value:
        movement = total_debit - total_credit
    else:
        movement = total_credit - total_debit

    return TrialBalanceRow(
        account_id=account.id,
        account_name=account.name,
        beginning_balance=beginning_balance,
        total_debit=total_debit,
        total_credit=total_credit,
        ending_balance=beginning_balance + movement,
    )


def build_account_ledger(
    account: Account, transactions: Iterable[Transaction]
) -> list[LedgerRow]:
    """Build the running-balance ledger for a single account.

    Rows are in date order. Transactions on the same date keep their input
    order. The running balance starts at the account's beginning balance.
    """
    account_transactions = sorted(
        (txn for txn in transactions if txn.account_id == account.id),
        key=lambda txn: txn.date,
    )

    rows: list[LedgerRow] = []
    running_balance = account.beginning_balance
    for txn in account_transactions:
        running_balance += signed_amount(account, txn)
        is_debit = txn.type == EntryType.DEBIT.value
        rows.append(
            LedgerRow(
                date=txn.date,
                description=txn.description,
                debit_amount=txn.amount if is_debit else None,
                credit_amount=None if is_debit else txn.amount,
                running_balance=running_balance,
                transaction_id=txn.id,
                entry_id=txn.entry_id,
            )
        )
    return rows


def build_general_journal(
    accounts: Sequence[Account], transactions: Iterable[Transaction]
) -> list[JournalRow]:
    """List every transaction line in date order, numbered from 1."""
    account_names = {account.id: account.name for account in accounts}
    rows = []
    for number, txn in enumerate(sorted(transactions, key=lambda txn: txn.date), start=1):
        is_debit = txn.type == EntryType.DEBIT.value
        rows.append(
            JournalRow(
                number=number,
                date=txn.date,
                description=txn.description,
                account_id=txn.account_id,
                account_name=account_names.get(txn.account_id, UNKNOWN_ACCOUNT_NAME),
                debit_amount=txn.amount if is_debit else None,
                credit_amount=None if is_debit else txn.amount,
                entry_id=txn.entry_id,
            )
        )
    return rows


def build_trial_balance(
    accounts: Sequence[Account],
    transactions: Iterable[Transaction],
    fiscal_year_start: Optional[date],
    warnings: Optional[list[str]] = None,
) -> TrialBalance:
    """Build the all-accounts trial balance for a period.

    Only accounts with a non-zero beginning balance or at least one
    transaction get a row. Rows follow the order of ``accounts``.
    """
    known_ids = {account.id for account in accounts}
    by_account: dict[str, list[Transaction]] = defaultdict(list)
    for txn in transactions:
        if txn.account_id not in known_ids:
            _report_unknown_account(txn, warnings)
            continue
        by_account[txn.account_id].append(txn)

    rows = []
    for account in accounts:
        account_transactions = by_account.get(account.id, [])
        if account.beginning_balance == 0 and not account_transactions:
            continue
        rows.append(split_period(account, account_transactions, fiscal_year_start))

    return TrialBalance(
        rows=tuple(rows),
        total_debit=sum((row.total_debit for row in rows), ZERO),
        total_credit=sum((row.total_credit for row in rows), ZERO),
    )
