"""Tests for CLI commands."""

import json

import pytest

from finplan.cli.main import cli


@pytest.fixture
def client_file(tmp_path, sample_document):
    """Write the sample client to a JSON file."""
    path = tmp_path / "client.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return str(path)


def _run(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--client", "default", *args])


def test_help(cli_runner):
    """Test that help lists the commands."""
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("import", "records", "portfolio", "cashflow", "goal", "healthcheck", "tax", "tax-plan"):
        assert command in result.output


def test_import(cli_runner, temp_db, client_file):
    """Test importing a client file."""
    result = _run(cli_runner, temp_db, "import", client_file)
    assert result.exit_code == 0
    assert "Import complete" in result.output
    assert "incomes: 2" in result.output
    assert temp_db.get("holdings")[0]["name"] == "SET50 fund"


def test_import_invalid_file(cli_runner, temp_db, tmp_path):
    """Test importing a document with a missing field."""
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"goals": [{"name": "Car", "horizon_years": 2}]}), encoding="utf-8")
    result = _run(cli_runner, temp_db, "import", str(path))
    assert result.exit_code == 1
    assert "Error: goals[0].target_value: missing required field" in result.output


def test_import_malformed_json(cli_runner, temp_db, tmp_path):
    """Test importing a file that is not JSON."""
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    result = _run(cli_runner, temp_db, "import", str(path))
    assert result.exit_code == 1
    assert "Error:" in result.output


class TestWithClient:
    """Tests running commands against an imported client."""

    @pytest.fixture(autouse=True)
    def imported(self, cli_runner, temp_db, client_file):
        result = _run(cli_runner, temp_db, "import", client_file)
        assert result.exit_code == 0

    def test_records_list(self, cli_runner, temp_db):
        """Test listing named records."""
        result = _run(cli_runner, temp_db, "records", "list", "incomes")
        assert result.exit_code == 0
        assert "Salary" in result.output
        assert "Bank interest" in result.output

    def test_records_list_single_value(self, cli_runner, temp_db):
        """Test listing a single-value key."""
        result = _run(cli_runner, temp_db, "records", "list", "expense_portion")
        assert result.exit_code == 0
        assert "0.7" in result.output

    def test_records_delete(self, cli_runner, temp_db):
        """Test deleting a record by name."""
        result = _run(cli_runner, temp_db, "records", "delete", "goals", "Car")
        assert result.exit_code == 0
        assert "Deleted 'Car' from goals" in result.output
        assert temp_db.get("goals") == []

    def test_records_delete_missing(self, cli_runner, temp_db):
        """Test deleting a name that does not exist."""
        result = _run(cli_runner, temp_db, "records", "delete", "goals", "Boat")
        assert result.exit_code == 1
        assert "Error: Record 'Boat' not found in 'goals'" in result.output

    def test_records_clear(self, cli_runner, temp_db):
        """Test clearing a key."""
        result = _run(cli_runner, temp_db, "records", "clear", "debts", "--yes")
        assert result.exit_code == 0
        assert temp_db.get("debts") is None

        result = _run(cli_runner, temp_db, "records", "list", "debts")
        assert "No debts found." in result.output

    def test_portfolio(self, cli_runner, temp_db):
        """Test the portfolio summary."""
        result = _run(cli_runner, temp_db, "portfolio")
        assert result.exit_code == 0
        assert "1,000,000.00" in result.output
        assert "6.00%" in result.output

    def test_cashflow(self, cli_runner, temp_db):
        """Test the cash flow table."""
        result = _run(cli_runner, temp_db, "cashflow", "--years", "3", "--details")
        assert result.exit_code == 0
        assert "612,000.00" in result.output
        assert "47,846.89" in result.output
        assert "Cash flow covers all goal payments." in result.output

    def test_cashflow_invalid_years(self, cli_runner, temp_db):
        """Test rejecting zero projection years."""
        result = _run(cli_runner, temp_db, "cashflow", "--years", "0")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_goal_general(self, cli_runner, temp_db):
        """Test the general goal command."""
        result = _run(cli_runner, temp_db, "goal", "general")
        assert result.exit_code == 0
        assert "Annual saving needed" in result.output
        assert "already cover" in result.output

    def test_goal_retirement(self, cli_runner, temp_db):
        """Test the retirement goal command with a portion override."""
        result = _run(cli_runner, temp_db, "goal", "retirement", "--portion", "70%")
        assert result.exit_code == 0
        assert "Capital required" in result.output
        assert "25" in result.output

    def test_healthcheck(self, cli_runner, temp_db):
        """Test the health check table."""
        result = _run(cli_runner, temp_db, "healthcheck")
        assert result.exit_code == 0
        assert "liquidity" in result.output
        assert "PASS" in result.output
        assert "FAIL" in result.output

    def test_tax(self, cli_runner, temp_db):
        """Test the tax estimate with breakdown."""
        result = _run(cli_runner, temp_db, "tax")
        assert result.exit_code == 0
        assert "18,800.00" in result.output
        assert "employment_and_service" in result.output
        assert "social_security_premium" in result.output

    def test_tax_plan_save(self, cli_runner, temp_db):
        """Test the what-if run and saving the plan."""
        result = _run(cli_runner, temp_db, "tax-plan", "--rmf", "20,000", "--save")
        assert result.exit_code == 0
        assert "Tax saved" in result.output
        assert "2,000.00" in result.output
        assert "Plan saved." in result.output
        assert temp_db.get("tax_plan")["rmf"] == 20000

    def test_tax_plan_invalid_amount(self, cli_runner, temp_db):
        """Test an unparseable plan amount."""
        result = _run(cli_runner, temp_db, "tax-plan", "--rmf", "lots")
        assert result.exit_code == 1
        assert "Error: Could not parse amount" in result.output


def test_goal_missing(cli_runner, temp_db):
    """Test a goal command with no stored goal."""
    result = _run(cli_runner, temp_db, "goal", "general")
    assert result.exit_code == 1
    assert "Error: No general goal stored" in result.output


def test_clients_are_separate(cli_runner, temp_db, client_file):
    """Test that --client selects a separate set of records."""
    _run(cli_runner, temp_db, "import", client_file)
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--client", "other", "records", "list", "incomes"]
    )
    assert result.exit_code == 0
    assert "No incomes found." in result.output
