"""CSV import domain service."""

import csv
import logging
from pathlib import Path
from typing import Any

from ledgerbook.database.base import Database
from ledgerbook.domain.config import DEFAULT_CONFIG, LedgerConfig
from ledgerbook.domain.entities import EntryLine, EntryType
from ledgerbook.domain.errors import DomainError, ValidationError
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "description", "account_id", "type", "amount")
OPTIONAL_COLUMNS = ("entry_id",)

TEMPLATE_ROWS = (
    ("2025-01-10", "Capital contribution", "1-1130", "debit", "1000000", "E1"),
    ("2025-01-10", "Capital contribution", "3-1000", "credit", "1000000", "E1"),
)


class CSVImportService:
    """Service for importing journal entries from CSV files.

    Each row is one ledger line. Rows are grouped into journal entries by the
    optional ``entry_id`` column, or by matching date and description when
    that column is absent or empty. Every group must balance on its own.
    """

    def __init__(self, db: Database, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize CSV import service.

        Args:
            db: Database instance
            config: Ledger configuration passed to the transaction service
        """
        self.db = db
        self.transaction_service = TransactionService(db, config=config)

    @staticmethod
    def write_template(path: str) -> Path:
        """Write an import template with a header and one example entry."""
        template_path = Path(path)
        with open(template_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(REQUIRED_COLUMNS + OPTIONAL_COLUMNS)
            writer.writerows(TEMPLATE_ROWS)
        return template_path

    def import_csv(self, company_id: int, csv_file_path: str) -> dict[str, Any]:
        """Import journal entries from a CSV file.

        Args:
            company_id: Company receiving the entries
            csv_file_path: Path to CSV file

        Returns:
            Dict with import statistics:
            - imported: number of ledger lines imported
            - entries: number of journal entries created
            - errors: list of error messages

        Raises:
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        errors: list[str] = []
        groups: dict[tuple[str, ...], dict[str, Any]] = {}

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            columns = {name.strip().lower() for name in reader.fieldnames if name}
            missing_columns = [col for col in REQUIRED_COLUMNS if col not in columns]
            if missing_columns:
                raise ValidationError(
                    f"CSV file missing required columns: {', '.join(missing_columns)}"
                )

            for row_num, raw_row in enumerate(reader, start=2):  # header is row 1
                row = {
                    key.strip().lower(): (value or "").strip()
                    for key, value in raw_row.items()
                    if key is not None
                }
                key = (
                    ("entry", row["entry_id"])
                    if row.get("entry_id")
                    else ("match", row["date"], row["description"])
                )
                group = groups.setdefault(
                    key,
                    {"date": None, "description": row["description"], "lines": [], "failed": False},
                )

                try:
                    line_date = parse_date(row["date"]) if row["date"] else None
                    if line_date is None:
                        raise ValidationError("Missing date")
                    if not row["description"]:
                        raise ValidationError("Missing description")
                    if not row["account_id"]:
                        raise ValidationError("Missing account_id")
                    entry_type = row["type"].lower()
                    if entry_type not in (EntryType.DEBIT.value, EntryType.CREDIT.value):
                        raise ValidationError(
                            f"Type must be 'debit' or 'credit', got '{row['type']}'"
                        )
                    if not row["amount"]:
                        raise ValidationError("Missing amount")
                    amount = parse_amount(row["amount"])
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    group["failed"] = True
                    continue

                if group["date"] is None:
                    group["date"] = line_date
                group["lines"].append(
                    EntryLine(
                        account_id=row["account_id"],
                        type=entry_type,
                        amount=amount,
                        description=row["description"],
                    )
                )

        imported = 0
        entries = 0
        for key, group in groups.items():
            label = key[1] if key[0] == "entry" else f"{key[1]} / {key[2]}"
            if group["failed"]:
                errors.append(f"Entry '{label}': skipped because of row errors")
                continue
            try:
                self.transaction_service.record_journal_entry(
                    company_id,
                    entry_date=group["date"],
                    description=group["description"],
                    lines=group["lines"],
                )
            except DomainError as e:
                errors.append(f"Entry '{label}': {e}")
                continue
            imported += len(group["lines"])
            entries += 1

        logger.info(
            "Imported %d lines in %d entries from %s (%d errors)",
            imported,
            entries,
            csv_path,
            len(errors),
        )
        return {
            "imported": imported,
            "entries": entries,
            "errors": errors,
        }
