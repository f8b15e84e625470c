"""Company domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Account, Company
from ledgerbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    company_not_found,
)

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for managing companies."""

    def __init__(self, db: Database):
        """Initialize company service.

        Args:
            db: Database instance
        """
        self.db = db

    @staticmethod
    def _check_fiscal_year(
        fiscal_year_start: Optional[date], fiscal_year_end: Optional[date]
    ) -> None:
        if (
            fiscal_year_start is not None
            and fiscal_year_end is not None
            and fiscal_year_end < fiscal_year_start
        ):
            raise ValidationError("Fiscal year end must not be before fiscal year start")

    def create_company(
        self,
        name: str,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        tax_id: Optional[str] = None,
        fiscal_year_start: Optional[date] = None,
        fiscal_year_end: Optional[date] = None,
    ) -> int:
        """Create a new company.

        Args:
            name: Company name
            address: Optional postal address
            phone: Optional phone number
            tax_id: Optional tax registration number
            fiscal_year_start: Optional first day of the reporting period
            fiscal_year_end: Optional last day of the reporting period

        Returns:
            Company ID

        Raises:
            ValidationError: If the name is empty or the fiscal year is inverted
            ConflictError: If a company with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Company name must not be empty")
        self._check_fiscal_year(fiscal_year_start, fiscal_year_end)
        if self.db.get_company_by_name(name) is not None:
            raise ConflictError(f"Company with name '{name}' already exists")

        company_id = self.db.create_company(
            name=name,
            address=address,
            phone=phone,
            tax_id=tax_id,
            fiscal_year_start=fiscal_year_start,
            fiscal_year_end=fiscal_year_end,
        )
        logger.info("Created company %s (%s)", company_id, name)
        return company_id

    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID.

        Args:
            company_id: Company ID

        Returns:
            Company entity or None if not found
        """
        return self.db.get_company(company_id)

    def require_company(self, company_id: int) -> Company:
        """Get company by ID or raise NotFoundError."""
        company = self.db.get_company(company_id)
        if company is None:
            raise NotFoundError(company_not_found(company_id))
        return company

    def resolve_company(self, company: str | int) -> Company:
        """Resolve a company name or ID.

        Numeric strings are tried as IDs first, then as names.

        Raises:
            NotFoundError: If no company matches
        """
        if isinstance(company, int):
            return self.require_company(company)

        try:
            found = self.db.get_company(int(company))
        except (TypeError, ValueError):
            found = None
        if found is not None:
            return found

        found = self.db.get_company_by_name(company)
        if found is None:
            raise NotFoundError(company_not_found(company))
        return found

    def list_companies(self) -> list[Company]:
        """List all companies ordered by name."""
        return self.db.list_companies()

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
        """Update company details. Fields left as None are unchanged.

        Raises:
            NotFoundError: If the company does not exist
            ValidationError: If the resulting fiscal year is inverted
            ConflictError: If the new name is taken
        """
        company = self.require_company(company_id)
        if name is not None and not name.strip():
            raise ValidationError("Company name must not be empty")
        self._check_fiscal_year(
            fiscal_year_start if fiscal_year_start is not None else company.fiscal_year_start,
            fiscal_year_end if fiscal_year_end is not None else company.fiscal_year_end,
        )
        self.db.update_company(
            company_id,
            name=name.strip() if name is not None else None,
            address=address,
            phone=phone,
            tax_id=tax_id,
            fiscal_year_start=fiscal_year_start,
            fiscal_year_end=fiscal_year_end,
        )

    def delete_company(self, company_id: int) -> None:
        """Delete a company together with its accounts and transactions."""
        company = self.require_company(company_id)
        self.db.delete_company(company_id)
        logger.info("Deleted company %s (%s)", company_id, company.name)

    def duplicate_company(self, company_id: int, new_name: str) -> int:
        """Start a new fiscal year as a copy of an existing company.

        The copy gets the same contact details, a calendar fiscal year
        following the original's fiscal year end (or today's year when it has
        none), and the same chart of accounts with zero beginning balances.
        Transactions are not copied. If copying the accounts fails the new
        company is removed again.

        Returns:
            ID of the new company
        """
        original = self.require_company(company_id)
        base_year = (original.fiscal_year_end or date.today()).year
        next_year = base_year + 1

        new_company_id = self.create_company(
            name=new_name,
            address=original.address,
            phone=original.phone,
            tax_id=original.tax_id,
            fiscal_year_start=date(next_year, 1, 1),
            fiscal_year_end=date(next_year, 12, 31),
        )

        accounts = [
            Account(
                id=account.id,
                name=account.name,
                category=account.category,
                normal_balance=account.normal_balance,
                beginning_balance=Decimal("0"),
            )
            for account in self.db.list_accounts(company_id)
        ]
        try:
            if accounts:
                self.db.create_accounts(new_company_id, accounts)
        except Exception:
            logger.exception("Copying accounts to company %s failed", new_company_id)
            self.db.delete_company(new_company_id)
            raise

        logger.info(
            "Duplicated company %s into %s with %d accounts",
            company_id,
            new_company_id,
            len(accounts),
        )
        return new_company_id
