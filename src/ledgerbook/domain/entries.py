"""Journal entry validation and tax-aware compound entry generation."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from ledgerbook.domain.config import DEFAULT_CONFIG, LedgerConfig
from ledgerbook.domain.entities import (
    Account,
    AccountCategory,
    EntryLine,
    EntryType,
    JournalEntryDraft,
)
from ledgerbook.domain.errors import ValidationError, unbalanced_entry

CENT = Decimal("0.01")
ENTRY_TYPES = (EntryType.DEBIT.value, EntryType.CREDIT.value)


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount half-up to cents."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def check_cents(amount: Decimal, label: str) -> None:
    """Reject amounts that would lose precision when stored to cents."""
    if amount != quantize_amount(amount):
        raise ValidationError(f"{label} must not have more than two decimal places")


def entry_totals(lines: Sequence[EntryLine]) -> tuple[Decimal, Decimal]:
    """Return (total debit, total credit) of a set of lines."""
    total_debit = sum(
        (line.amount for line in lines if line.type == EntryType.DEBIT.value), Decimal("0")
    )
    total_credit = sum(
        (line.amount for line in lines if line.type == EntryType.CREDIT.value), Decimal("0")
    )
    return total_debit, total_credit


def validate_journal_entry(
    lines: Sequence[EntryLine], tolerance: Decimal = DEFAULT_CONFIG.balance_tolerance
) -> tuple[Decimal, Decimal]:
    """Check that a set of lines forms a balanced journal entry.

    Args:
        lines: Entry lines to check
        tolerance: Largest accepted difference between debit and credit totals

    Returns:
        Tuple of (total debit, total credit)

    Raises:
        ValidationError: If a line is malformed, has sub-cent precision,
            the debit total is zero, or the sides differ by more than ``tolerance``
    """
    if not lines:
        raise ValidationError("A journal entry needs at least one line")

    for index, line in enumerate(lines, start=1):
        if not line.account_id:
            raise ValidationError(f"Line {index}: account is required")
        if line.type not in ENTRY_TYPES:
            raise ValidationError(
                f"Line {index}: type must be 'debit' or 'credit', got '{line.type}'"
            )
        if line.amount is None:
            raise ValidationError(f"Line {index}: amount is required")
        if line.amount < 0:
            raise ValidationError(f"Line {index}: amount must not be negative")
        check_cents(line.amount, f"Line {index}: amount")

    total_debit, total_credit = entry_totals(lines)
    if total_debit == 0 or abs(total_debit - total_credit) > tolerance:
        raise ValidationError(unbalanced_entry())
    return total_debit, total_credit


def generate_compound_entry(
    account: Account,
    amount: Decimal,
    description: str,
    entry_date: date,
    apply_tax: bool = False,
    apply_withholding: bool = False,
    config: LedgerConfig = DEFAULT_CONFIG,
) -> JournalEntryDraft:
    """Expand a simple income or expense amount into balanced ledger lines.

    Income: debit the receivable account for amount plus output tax, credit
    the income account for the amount and, with ``apply_tax``, credit tax
    payable for the tax. Expense: debit the expense account for the amount,
    credit cash for the amount less withholding and, with
    ``apply_withholding``, credit withholding payable for the withheld part.
    Accounts in any other category produce a draft without lines.

    Derived tax amounts are rounded to cents and the counter line is computed
    from the rounded figure, so the emitted lines balance exactly.
    """
    lines: list[EntryLine] = []

    if account.category == AccountCategory.INCOME.value:
        tax = quantize_amount(amount * config.tax_rate) if apply_tax else Decimal("0")
        lines.append(
            EntryLine(
                account_id=config.receivable_account_id,
                type=EntryType.DEBIT.value,
                amount=amount + tax,
                description=description,
            )
        )
        lines.append(
            EntryLine(
                account_id=account.id,
                type=EntryType.CREDIT.value,
                amount=amount,
                description=description,
            )
        )
        if apply_tax:
            lines.append(
                EntryLine(
                    account_id=config.tax_payable_account_id,
                    type=EntryType.CREDIT.value,
                    amount=tax,
                    description=f"Output tax on {description}",
                )
            )
    elif account.category == AccountCategory.EXPENSE.value:
        withholding = (
            quantize_amount(amount * config.withholding_rate)
            if apply_withholding
            else Decimal("0")
        )
        lines.append(
            EntryLine(
                account_id=account.id,
                type=EntryType.DEBIT.value,
                amount=amount,
                description=description,
            )
        )
        lines.append(
            EntryLine(
                account_id=config.cash_account_id,
                type=EntryType.CREDIT.value,
                amount=amount - withholding,
                description=f"Cash for {description}",
            )
        )
        if apply_withholding:
            lines.append(
                EntryLine(
                    account_id=config.withholding_payable_account_id,
                    type=EntryType.CREDIT.value,
                    amount=withholding,
                    description=f"Withholding tax on {description}",
                )
            )

    if lines:
        validate_journal_entry(lines, tolerance=config.balance_tolerance)

    return JournalEntryDraft(date=entry_date, description=description, lines=tuple(lines))
