"""Tests for account service and commands."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.cli.main import cli
from ledgerbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)


class TestAccountService:
    """Tests for AccountService."""

    def test_create_account_derives_normal_balance(self, account_service, sample_company):
        """Test the normal balance follows the category."""
        account_service.create_account(sample_company.id, "6-2000", "Utilities", "expense")
        account_service.create_account(sample_company.id, "2-3000", "Bank Loan", "liability")

        assert account_service.get_account(sample_company.id, "6-2000").normal_balance == "debit"
        assert account_service.get_account(sample_company.id, "2-3000").normal_balance == "credit"

    def test_create_account_duplicate_id(self, account_service, sample_company):
        """Test account IDs are unique per company."""
        account_service.create_account(sample_company.id, "1-1130", "Cash", "asset")
        with pytest.raises(ConflictError, match="Please use a unique ID"):
            account_service.create_account(sample_company.id, "1-1130", "Petty Cash", "asset")

    @pytest.mark.parametrize("account_id, name", [("", "Cash"), ("1-1130", "  ")])
    def test_create_account_requires_id_and_name(self, account_service, sample_company, account_id, name):
        """Test ID and name are required."""
        with pytest.raises(ValidationError):
            account_service.create_account(sample_company.id, account_id, name, "asset")

    def test_create_account_unknown_category(self, account_service, sample_company):
        """Test the category must be known."""
        with pytest.raises(ValidationError, match="Unknown account category"):
            account_service.create_account(sample_company.id, "9-0001", "Misc", "suspense")

    def test_update_account_rederives_normal_balance(self, account_service, sample_company):
        """Test changing the category changes the normal balance."""
        account_service.create_account(sample_company.id, "4-8000", "Misc", "other_income")
        account_service.update_account(
            sample_company.id, "4-8000", category="other_expense", beginning_balance=Decimal("25")
        )
        account = account_service.get_account(sample_company.id, "4-8000")
        assert account.category == "other_expense"
        assert account.normal_balance == "debit"
        assert account.beginning_balance == Decimal("25")
        assert account.name == "Misc"

    def test_sub_cent_beginning_balance(self, account_service, sample_company):
        """Test beginning balances finer than a cent are refused on create and update."""
        with pytest.raises(ValidationError, match="Beginning balance must not have more than two decimal places"):
            account_service.create_account(
                sample_company.id, "1-1130", "Cash", "asset", beginning_balance=Decimal("10.005")
            )
        assert account_service.get_account(sample_company.id, "1-1130") is None

        account_service.create_account(
            sample_company.id, "1-1130", "Cash", "asset", beginning_balance=Decimal("10.50")
        )
        with pytest.raises(ValidationError, match="two decimal places"):
            account_service.update_account(
                sample_company.id, "1-1130", beginning_balance=Decimal("0.001")
            )
        assert account_service.get_account(sample_company.id, "1-1130").beginning_balance == Decimal("10.50")

    def test_update_missing_account(self, account_service, sample_company):
        """Test updating an unknown account."""
        with pytest.raises(NotFoundError):
            account_service.update_account(sample_company.id, "0-0000", name="X")

    def test_delete_unused_account(self, account_service, sample_company):
        """Test deleting an account without transactions."""
        account_service.create_account(sample_company.id, "6-9000", "Misc", "expense")
        account_service.delete_account(sample_company.id, "6-9000")
        assert account_service.get_account(sample_company.id, "6-9000") is None

    def test_delete_account_in_use(self, account_service, transaction_service, sample_company, sample_accounts):
        """Test an account referenced by transactions cannot be deleted."""
        transaction_service.record_simple_entry(
            sample_company.id, "6-1000", Decimal("100"), "Paper", date(2025, 1, 5)
        )
        assert account_service.is_account_in_use(sample_company.id, "6-1000")
        with pytest.raises(DependencyError, match="it has 1 transaction\\."):
            account_service.delete_account(sample_company.id, "6-1000")

    def test_list_accounts_sorted(self, account_service, sample_company, sample_accounts):
        """Test the directory is listed in code order."""
        ids = [a.id for a in account_service.list_accounts(sample_company.id)]
        assert ids == sorted(ids)


class TestAccountCommands:
    """Tests for account CLI commands."""

    def test_account_create(self, cli_runner, temp_db, sample_company):
        """Test creating an account."""
        result = cli_runner.invoke(
            cli,
            [
                "--db-path", temp_db.database_path, "account", "create", "1-1130", "Cash",
                "--category", "asset", "--beginning-balance", "1,000,000",
            ],
        )
        assert result.exit_code == 0
        assert "Created account 1-1130 'Cash' (asset, normal balance: debit)" in result.output
        account = temp_db.get_account(sample_company.id, "1-1130")
        assert account.beginning_balance == Decimal("1000000")

    def test_account_create_duplicate(self, cli_runner, temp_db, sample_accounts):
        """Test creating a duplicate account ID fails."""
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "account", "create", "1-1130", "Kas", "--category", "asset"],
        )
        assert result.exit_code == 1
        assert "already exists" in result.output.lower()

    def test_account_create_bad_category(self, cli_runner, temp_db, sample_company):
        """Test click rejects unknown categories."""
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "account", "create", "9-1", "X", "--category", "misc"],
        )
        assert result.exit_code == 2

    def test_account_list_empty(self, cli_runner, temp_db, sample_company):
        """Test listing accounts when none exist."""
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
        assert result.exit_code == 0
        assert "No accounts found" in result.output

    def test_account_list_with_data(self, cli_runner, temp_db, sample_accounts):
        """Test listing accounts with data."""
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
        assert result.exit_code == 0
        assert "Retained Earnings" in result.output
        assert "1,000,000.00" in result.output

    def test_account_commands_need_a_company(self, cli_runner, temp_db):
        """Test company-scoped commands fail without any company."""
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
        assert result.exit_code == 1
        assert "No companies found" in result.output

    def test_account_commands_with_several_companies(self, cli_runner, temp_db, company_service, sample_company):
        """Test --company selects among several companies."""
        company_service.create_company(name="Other Co")
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
        assert result.exit_code == 1
        assert "--company" in result.output

        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "--company", "Other Co", "account", "list"]
        )
        assert result.exit_code == 0
        assert "No accounts found" in result.output

    def test_company_from_environment(self, cli_runner, temp_db, company_service, sample_company, monkeypatch):
        """Test LEDGERBOOK_COMPANY selects the company."""
        company_service.create_company(name="Other Co")
        monkeypatch.setenv("LEDGERBOOK_COMPANY", "Toko Maju")
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
        assert result.exit_code == 0

    def test_account_update(self, cli_runner, temp_db, sample_company, sample_accounts):
        """Test updating an account."""
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "account", "update", "1-1130", "--name", "Cash on Hand"],
        )
        assert result.exit_code == 0
        assert temp_db.get_account(sample_company.id, "1-1130").name == "Cash on Hand"

    def test_account_update_bad_balance(self, cli_runner, temp_db, sample_accounts):
        """Test an unparseable balance is rejected."""
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "account", "update", "1-1130", "--beginning-balance", "lots"],
        )
        assert result.exit_code == 1
        assert "Invalid beginning balance" in result.output

    def test_account_delete(self, cli_runner, temp_db, sample_company, sample_accounts):
        """Test deleting an unused account."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "account", "delete", "6-1000", "--yes"]
        )
        assert result.exit_code == 0
        assert "Deleted account 6-1000" in result.output
        assert temp_db.get_account(sample_company.id, "6-1000") is None

    def test_account_delete_in_use(self, cli_runner, temp_db, transaction_service, sample_company, sample_accounts):
        """Test deleting an account with transactions fails."""
        transaction_service.record_simple_entry(
            sample_company.id, "6-1000", Decimal("100"), "Paper", date(2025, 1, 5)
        )
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "account", "delete", "6-1000", "--yes"]
        )
        assert result.exit_code == 1
        assert "Cannot delete account '6-1000'" in result.output

    def test_account_delete_unknown(self, cli_runner, temp_db, sample_company):
        """Test deleting an unknown account."""
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "account", "delete", "0-0000", "--yes"]
        )
        assert result.exit_code == 1
        assert "not found" in result.output
