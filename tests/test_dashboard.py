"""Tests for dashboard figures."""

from datetime import date
from decimal import Decimal

from ledgerbook.domain.dashboard import build_dashboard_summary, group_transactions_by_month
from ledgerbook.domain.entities import Account, MonthlyTotals, Transaction


ACCOUNTS = [
    Account(id="1-1130", name="Cash", category="asset", normal_balance="debit"),
    Account(id="1-1200", name="Receivable", category="asset", normal_balance="debit"),
    Account(id="4-4000", name="Service Revenue", category="income", normal_balance="credit"),
    Account(id="4-9000", name="Interest", category="other_income", normal_balance="credit"),
    Account(id="6-1000", name="Rent", category="expense", normal_balance="debit"),
]


def _txn(txn_id, day, account_id, type_, amount):
    return Transaction(
        id=txn_id,
        date=day,
        description="Entry",
        account_id=account_id,
        type=type_,
        amount=Decimal(amount),
    )


TRANSACTIONS = [
    _txn(1, date(2025, 1, 10), "1-1200", "debit", "1000000"),
    _txn(2, date(2025, 1, 10), "4-4000", "credit", "1000000"),
    _txn(3, date(2025, 2, 1), "6-1000", "debit", "300000"),
    _txn(4, date(2025, 2, 1), "1-1130", "credit", "300000"),
    _txn(5, date(2025, 2, 15), "4-9000", "credit", "5000"),
    _txn(6, date(2025, 2, 15), "1-1130", "debit", "5000"),
    # Refund booked against revenue
    _txn(7, date(2025, 3, 5), "4-4000", "debit", "100000"),
    _txn(8, date(2025, 3, 5), "1-1200", "credit", "100000"),
]


def test_group_transactions_by_month():
    """Test grouping by YYYY-MM key."""
    grouped = group_transactions_by_month(TRANSACTIONS)
    assert sorted(grouped) == ["2025-01", "2025-02", "2025-03"]
    assert len(grouped["2025-02"]) == 4


def test_headline_totals():
    """Test income, expense, net income and cash."""
    summary = build_dashboard_summary(ACCOUNTS, TRANSACTIONS, cash_account_id="1-1130")

    # Other income is not part of the headline income figure
    assert summary.total_income == Decimal("900000")
    assert summary.total_expense == Decimal("300000")
    assert summary.net_income == Decimal("600000")
    assert summary.cash_balance == Decimal("-295000")


def test_monthly_totals_use_raw_amounts():
    """Test monthly rows add raw amounts and are sorted by month."""
    summary = build_dashboard_summary(ACCOUNTS, TRANSACTIONS, cash_account_id="1-1130")
    assert summary.monthly == (
        MonthlyTotals(month="2025-01", income=Decimal("1000000"), expense=Decimal("0")),
        MonthlyTotals(month="2025-02", income=Decimal("0"), expense=Decimal("300000")),
        MonthlyTotals(month="2025-03", income=Decimal("100000"), expense=Decimal("0")),
    )


def test_empty_dashboard():
    """Test a company without transactions."""
    summary = build_dashboard_summary(ACCOUNTS, [], cash_account_id="1-1130")
    assert summary.total_income == Decimal("0")
    assert summary.cash_balance == Decimal("0")
    assert summary.monthly == ()


def test_unknown_accounts_ignored():
    """Test orphan transactions do not count."""
    summary = build_dashboard_summary(
        ACCOUNTS, [_txn(1, date(2025, 1, 1), "9-9999", "credit", "10")], cash_account_id="1-1130"
    )
    assert summary.total_income == Decimal("0")
    assert summary.monthly == (
        MonthlyTotals(month="2025-01", income=Decimal("0"), expense=Decimal("0")),
    )
