"""Dashboard figures: headline totals and a monthly income/expense breakdown."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Sequence

from ledgerbook.domain.entities import (
    Account,
    AccountCategory,
    DashboardSummary,
    MonthlyTotals,
    Transaction,
)
from ledgerbook.domain.ledger import ZERO, signed_amount


def group_transactions_by_month(
    transactions: Iterable[Transaction],
) -> dict[str, list[Transaction]]:
    """Group transactions by ``YYYY-MM`` month key."""
    grouped: dict[str, list[Transaction]] = defaultdict(list)
    for txn in transactions:
        grouped[txn.date.strftime("%Y-%m")].append(txn)
    return dict(grouped)


def build_dashboard_summary(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    cash_account_id: str,
) -> DashboardSummary:
    """Summarize income, expense and cash for a company.

    Headline totals use amounts signed to each account's normal side; the
    monthly rows use raw amounts. Only the ``income`` and ``expense``
    categories are counted. Unknown accounts are ignored.
    """
    account_index = {account.id: account for account in accounts}
    total_income = ZERO
    total_expense = ZERO
    cash_balance = ZERO

    for txn in transactions:
        account = account_index.get(txn.account_id)
        if account is None:
            continue
        amount = signed_amount(account, txn)
        if account.category == AccountCategory.INCOME.value:
            total_income += amount
        elif account.category == AccountCategory.EXPENSE.value:
            total_expense += amount
        if account.id == cash_account_id:
            cash_balance += amount

    monthly = []
    for month, month_transactions in sorted(group_transactions_by_month(transactions).items()):
        income = ZERO
        expense = ZERO
        for txn in month_transactions:
            account = account_index.get(txn.account_id)
            if account is None:
                continue
            if account.category == AccountCategory.INCOME.value:
                income += txn.amount
            elif account.category == AccountCategory.EXPENSE.value:
                expense += txn.amount
        monthly.append(MonthlyTotals(month=month, income=income, expense=expense))

    return DashboardSummary(
        total_income=total_income,
        total_expense=total_expense,
        net_income=total_income - total_expense,
        cash_balance=cash_balance,
        monthly=tuple(monthly),
    )
