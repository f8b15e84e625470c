"""Statement classifier: income statement and balance sheet."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from ledgerbook.domain.config import DEFAULT_CONFIG, LedgerConfig
from ledgerbook.domain.entities import (
    Account,
    AccountCategory,
    FinancialStatements,
    Statement,
    StatementLine,
    StatementSection,
    Transaction,
)
from ledgerbook.domain.ledger import ZERO, compute_balances

logger = logging.getLogger(__name__)

REVENUE_CATEGORIES = frozenset(
    {AccountCategory.INCOME.value, AccountCategory.OTHER_INCOME.value}
)
EXPENSE_CATEGORIES = frozenset(
    {
        AccountCategory.EXPENSE.value,
        AccountCategory.COST_OF_SALES.value,
        AccountCategory.OTHER_EXPENSE.value,
    }
)
ASSET_CATEGORIES = frozenset({AccountCategory.ASSET.value})
LIABILITY_CATEGORIES = frozenset({AccountCategory.LIABILITY.value})
EQUITY_CATEGORIES = frozenset({AccountCategory.EQUITY.value})


def _build_section(
    title: str,
    total_label: str,
    accounts: Sequence[Account],
    balances: Mapping[str, Decimal],
    categories: frozenset[str],
) -> StatementSection:
    items = tuple(
        StatementLine(label=account.name, amount=balances.get(account.id, ZERO), account_id=account.id)
        for account in accounts
        if account.category in categories
    )
    return StatementSection(
        title=title,
        items=items,
        total_label=total_label,
        total_amount=sum((item.amount for item in items), ZERO),
    )


def build_income_statement(
    accounts: Sequence[Account], balances: Mapping[str, Decimal]
) -> Statement:
    """Classify revenue and expense accounts into an income statement.

    The final amount is net income: total revenue minus total expenses.
    """
    revenue = _build_section("Revenue", "Total Revenue", accounts, balances, REVENUE_CATEGORIES)
    expenses = _build_section("Expenses", "Total Expenses", accounts, balances, EXPENSE_CATEGORIES)
    return Statement(
        title="Income Statement",
        sections=(revenue, expenses),
        final_label="Net Income",
        final_amount=revenue.total_amount - expenses.total_amount,
    )


def build_balance_sheet(
    accounts: Sequence[Account],
    balances: Mapping[str, Decimal],
    net_income: Decimal,
    retained_earnings_account_id: Optional[str] = DEFAULT_CONFIG.retained_earnings_account_id,
) -> Statement:
    """Classify asset, liability and equity accounts into a balance sheet.

    Net income is rolled into the retained earnings account before totals
    are computed. If that account is not in the directory nothing is rolled
    forward. Assets are not checked against liabilities plus equity.
    """
    adjusted = dict(balances)
    if retained_earnings_account_id is not None and any(
        account.id == retained_earnings_account_id for account in accounts
    ):
        adjusted[retained_earnings_account_id] = (
            adjusted.get(retained_earnings_account_id, ZERO) + net_income
        )
    else:
        logger.debug(
            "Retained earnings account %s not found; net income not rolled forward",
            retained_earnings_account_id,
        )

    assets = _build_section("Assets", "Total Assets", accounts, adjusted, ASSET_CATEGORIES)
    liabilities = _build_section(
        "Liabilities", "Total Liabilities", accounts, adjusted, LIABILITY_CATEGORIES
    )
    equity = _build_section("Equity", "Total Equity", accounts, adjusted, EQUITY_CATEGORIES)
    return Statement(
        title="Balance Sheet",
        sections=(assets, liabilities, equity),
        final_label="Total Liabilities & Equity",
        final_amount=liabilities.total_amount + equity.total_amount,
    )


def build_financial_statements(
    accounts: Sequence[Account],
    transactions: Iterable[Transaction],
    config: LedgerConfig = DEFAULT_CONFIG,
) -> FinancialStatements:
    """Derive both statements from full-history balances."""
    warnings: list[str] = []
    balances = compute_balances(accounts, transactions, warnings=warnings)

    income_statement = build_income_statement(accounts, balances)
    net_income = income_statement.final_amount
    balance_sheet = build_balance_sheet(
        accounts,
        balances,
        net_income,
        retained_earnings_account_id=config.retained_earnings_account_id,
    )
    assets, liabilities, equity = balance_sheet.sections

    return FinancialStatements(
        income_statement=income_statement,
        balance_sheet=balance_sheet,
        net_income=net_income,
        total_assets=assets.total_amount,
        total_liabilities=liabilities.total_amount,
        total_equity=equity.total_amount,
        total_liabilities_and_equity=balance_sheet.final_amount,
        warnings=tuple(warnings),
    )
