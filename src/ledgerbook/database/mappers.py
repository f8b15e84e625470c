"""Mapper functions to convert between SQLAlchemy models and domain entities.

The ledger engine works on domain entities only; this layer is the single
place that knows how table columns map onto them.
"""

from decimal import Decimal

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Company as ORMCompany,
    Transaction as ORMTransaction,
)


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def company_to_domain(orm_company: ORMCompany) -> domain.Company:
    """Convert SQLAlchemy Company model to domain Company entity."""
    return domain.Company(
        id=orm_company.id,
        name=orm_company.name,
        address=orm_company.address,
        phone=orm_company.phone,
        tax_id=orm_company.tax_id,
        fiscal_year_start=orm_company.fiscal_year_start,
        fiscal_year_end=orm_company.fiscal_year_end,
        created_at=orm_company.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.code,
        name=orm_account.name,
        category=orm_account.category,
        normal_balance=orm_account.normal_balance,
        beginning_balance=_to_decimal(orm_account.beginning_balance),
        company_id=orm_account.company_id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        account_id=orm_transaction.account_code,
        type=orm_transaction.type,
        amount=_to_decimal(orm_transaction.amount),
        entry_id=orm_transaction.entry_id,
        company_id=orm_transaction.company_id,
    )
