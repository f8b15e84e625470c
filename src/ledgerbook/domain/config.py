"""Ledger configuration.

Fixed counter-account codes and illustrative tax rates used by the report
engine and the compound entry generator. Every value can be overridden from
the environment so that a company with a different chart of accounts does
not need code changes.
"""

import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from ledgerbook.domain.errors import ValidationError


@dataclass(frozen=True)
class LedgerConfig:
    """Account codes and rates consumed by the ledger engine."""

    retained_earnings_account_id: str = "3-9999"
    receivable_account_id: str = "1-1200"
    cash_account_id: str = "1-1130"
    tax_payable_account_id: str = "2-1250"
    withholding_payable_account_id: str = "2-1260"
    tax_rate: Decimal = Decimal("0.11")
    withholding_rate: Decimal = Decimal("0.02")
    balance_tolerance: Decimal = Decimal("0.01")


DEFAULT_CONFIG = LedgerConfig()

# Environment variable -> LedgerConfig field
_ACCOUNT_OVERRIDES = {
    "LEDGERBOOK_RETAINED_EARNINGS_ACCOUNT": "retained_earnings_account_id",
    "LEDGERBOOK_RECEIVABLE_ACCOUNT": "receivable_account_id",
    "LEDGERBOOK_CASH_ACCOUNT": "cash_account_id",
    "LEDGERBOOK_TAX_PAYABLE_ACCOUNT": "tax_payable_account_id",
    "LEDGERBOOK_WITHHOLDING_PAYABLE_ACCOUNT": "withholding_payable_account_id",
}

_RATE_OVERRIDES = {
    "LEDGERBOOK_TAX_RATE": "tax_rate",
    "LEDGERBOOK_WITHHOLDING_RATE": "withholding_rate",
    "LEDGERBOOK_BALANCE_TOLERANCE": "balance_tolerance",
}


def _parse_rate(name: str, raw: str) -> Decimal:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValidationError(f"{name} must be a decimal number, got '{raw}'")
    if not value.is_finite() or value < 0:
        raise ValidationError(f"{name} must be a non-negative number, got '{raw}'")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> LedgerConfig:
    """Build a LedgerConfig from environment overrides.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        LedgerConfig with any overrides applied on top of the defaults

    Raises:
        ValidationError: If an override has an invalid value
    """
    if environ is None:
        environ = os.environ

    overrides: dict[str, object] = {}
    for name, field_name in _ACCOUNT_OVERRIDES.items():
        raw = environ.get(name)
        if raw is None:
            continue
        if not raw.strip():
            raise ValidationError(f"{name} must not be empty")
        overrides[field_name] = raw.strip()

    for name, field_name in _RATE_OVERRIDES.items():
        raw = environ.get(name)
        if raw is not None:
            overrides[field_name] = _parse_rate(name, raw)

    if not overrides:
        return DEFAULT_CONFIG
    return replace(DEFAULT_CONFIG, **overrides)
