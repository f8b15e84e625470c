"""Tests for company service and commands."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.cli.main import cli
from ledgerbook.domain.errors import ConflictError, NotFoundError, ValidationError


class TestCompanyService:
    """Tests for CompanyService."""

    def test_create_company(self, company_service):
        """Test creating a company."""
        company_id = company_service.create_company(
            name="  Toko Maju  ", fiscal_year_start=date(2025, 1, 1), fiscal_year_end=date(2025, 12, 31)
        )
        company = company_service.get_company(company_id)
        assert company.name == "Toko Maju"
        assert company.fiscal_year_end == date(2025, 12, 31)

    def test_create_company_empty_name(self, company_service):
        """Test the name is required."""
        with pytest.raises(ValidationError):
            company_service.create_company(name="   ")

    def test_create_company_duplicate_name(self, company_service):
        """Test company names are unique."""
        company_service.create_company(name="Toko Maju")
        with pytest.raises(ConflictError, match="already exists"):
            company_service.create_company(name="Toko Maju")

    def test_create_company_inverted_fiscal_year(self, company_service):
        """Test the fiscal year end cannot precede its start."""
        with pytest.raises(ValidationError, match="Fiscal year end"):
            company_service.create_company(
                name="Toko", fiscal_year_start=date(2025, 12, 31), fiscal_year_end=date(2025, 1, 1)
            )

    def test_resolve_company_by_id_and_name(self, company_service, sample_company):
        """Test resolving by ID, numeric string and name."""
        assert company_service.resolve_company(sample_company.id) == sample_company
        assert company_service.resolve_company(str(sample_company.id)) == sample_company
        assert company_service.resolve_company("Toko Maju") == sample_company

    def test_resolve_company_missing(self, company_service):
        """Test resolving an unknown company."""
        with pytest.raises(NotFoundError, match="Company 'Nope' not found"):
            company_service.resolve_company("Nope")
        with pytest.raises(NotFoundError, match="Company 42 not found"):
            company_service.resolve_company(42)

    def test_update_company(self, company_service, sample_company):
        """Test updating only some fields."""
        company_service.update_company(sample_company.id, phone="0800")
        company = company_service.get_company(sample_company.id)
        assert company.phone == "0800"
        assert company.address == sample_company.address

    def test_update_company_inverted_fiscal_year(self, company_service, sample_company):
        """Test the merged fiscal year is checked."""
        with pytest.raises(ValidationError):
            company_service.update_company(sample_company.id, fiscal_year_end=date(2024, 6, 30))

    def test_delete_company(self, company_service, sample_accounts, sample_company, transaction_service, temp_db):
        """Test deleting a company removes its data."""
        transaction_service.record_simple_entry(
            sample_company.id, "6-1000", Decimal("100"), "Paper", date(2025, 1, 5)
        )
        company_service.delete_company(sample_company.id)

        assert company_service.get_company(sample_company.id) is None
        assert temp_db.list_accounts(sample_company.id) == []
        assert temp_db.list_transactions(sample_company.id) == []

    def test_delete_missing_company(self, company_service):
        """Test deleting an unknown company."""
        with pytest.raises(NotFoundError):
            company_service.delete_company(99)


class TestDuplicateCompany:
    """Tests for starting a new fiscal year from an existing company."""

    def test_duplicate_copies_chart_without_balances(
        self, company_service, account_service, transaction_service, sample_company, sample_accounts
    ):
        """Test the copy has next year's dates, the same accounts and no transactions."""
        transaction_service.record_simple_entry(
            sample_company.id, "4-4000", Decimal("1000"), "Sale", date(2025, 3, 1)
        )
        new_id = company_service.duplicate_company(sample_company.id, "Toko Maju 2026")
        copy = company_service.get_company(new_id)

        assert copy.fiscal_year_start == date(2026, 1, 1)
        assert copy.fiscal_year_end == date(2026, 12, 31)
        assert copy.address == sample_company.address
        assert copy.tax_id == sample_company.tax_id

        copied = account_service.list_accounts(new_id)
        assert [a.id for a in copied] == [a.id for a in sample_accounts]
        assert all(a.beginning_balance == 0 for a in copied)
        assert [a.normal_balance for a in copied] == [a.normal_balance for a in sample_accounts]
        assert transaction_service.list_transactions(new_id) == []

    def test_duplicate_name_conflict(self, company_service, sample_company):
        """Test the new name must be free."""
        with pytest.raises(ConflictError):
            company_service.duplicate_company(sample_company.id, "Toko Maju")

    def test_duplicate_rolls_back_on_failure(
        self, company_service, sample_company, sample_accounts, temp_db, monkeypatch
    ):
        """Test the new company is removed again when copying accounts fails."""

        def fail(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "create_accounts", fail)
        with pytest.raises(RuntimeError):
            company_service.duplicate_company(sample_company.id, "Broken Copy")
        assert temp_db.get_company_by_name("Broken Copy") is None

    def test_duplicate_without_fiscal_year_uses_today(self, company_service):
        """Test a company without dates duplicates into next calendar year."""
        company_id = company_service.create_company(name="Undated")
        new_id = company_service.duplicate_company(company_id, "Undated Next")
        next_year = date.today().year + 1
        assert company_service.get_company(new_id).fiscal_year_start == date(next_year, 1, 1)


class TestCompanyCommands:
    """Tests for company CLI commands."""

    def test_company_create_and_list(self, cli_runner, temp_db):
        """Test creating and listing companies."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "company", "create", "Toko Maju", "--year", "2025"]
        )
        assert result.exit_code == 0
        assert "Created company 'Toko Maju'" in result.output

        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "company", "list"])
        assert result.exit_code == 0
        assert "Toko Maju" in result.output
        assert "2025-01-01 to 2025-12-31" in result.output

    def test_company_list_empty(self, cli_runner, temp_db):
        """Test listing when no companies exist."""
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "company", "list"])
        assert result.exit_code == 0
        assert "No companies found" in result.output

    def test_company_create_duplicate(self, cli_runner, temp_db, sample_company):
        """Test a duplicate name fails with exit code 1."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "company", "create", "Toko Maju"]
        )
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_company_create_year_conflicts_with_dates(self, cli_runner, temp_db):
        """Test --year cannot be mixed with explicit dates."""
        result = cli_runner.invoke(
            cli,
            [
                "--db-path", temp_db.database_path, "company", "create", "Toko",
                "--year", "2025", "--fiscal-year-start", "2025-01-01",
            ],
        )
        assert result.exit_code == 1
        assert "--year cannot be combined" in result.output

    def test_company_show(self, cli_runner, temp_db, sample_company, sample_accounts):
        """Test showing company details."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "company", "show", "Toko Maju"]
        )
        assert result.exit_code == 0
        assert "Jl. Merdeka 1, Jakarta" in result.output
        assert "Fiscal year start: 2025-01-01" in result.output
        assert f"Accounts: {len(sample_accounts)}" in result.output

    def test_company_show_unknown(self, cli_runner, temp_db):
        """Test showing an unknown company."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "company", "show", "Nope"]
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_company_update(self, cli_runner, temp_db, sample_company):
        """Test updating a company."""
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "company", "update", str(sample_company.id), "--name", "Toko Baru"],
        )
        assert result.exit_code == 0
        assert temp_db.get_company(sample_company.id).name == "Toko Baru"

    def test_company_delete_confirm(self, cli_runner, temp_db, sample_company):
        """Test deleting asks for confirmation."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "company", "delete", "Toko Maju"], input="n\n"
        )
        assert result.exit_code == 0
        assert "Deletion cancelled" in result.output
        assert temp_db.get_company(sample_company.id) is not None

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "company", "delete", "Toko Maju"], input="y\n"
        )
        assert result.exit_code == 0
        assert "Deleted company 'Toko Maju'" in result.output
        assert temp_db.get_company(sample_company.id) is None

    def test_company_duplicate(self, cli_runner, temp_db, sample_company, sample_accounts):
        """Test duplicating into the next fiscal year."""
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "company", "duplicate", "Toko Maju", "Toko Maju 2026"],
        )
        assert result.exit_code == 0
        assert "Fiscal year: 2026-01-01 to 2026-12-31" in result.output
        copy = temp_db.get_company_by_name("Toko Maju 2026")
        assert len(temp_db.list_accounts(copy.id)) == len(sample_accounts)
