"""Shared pytest fixtures for finplan tests."""

import tempfile
import os
import pytest

from finplan.database.factories import create_sqlite_database
from finplan.domain.records import RecordService
from finplan.domain.planning import PlanningService


@pytest.fixture
def temp_db():
    """Create a temporary record store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path, owner="default")
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def record_service(temp_db):
    """Create a RecordService with a temporary store."""
    return RecordService(temp_db)


@pytest.fixture
def planning_service(temp_db):
    """Create a PlanningService with a temporary store."""
    return PlanningService(temp_db)


@pytest.fixture
def sample_document():
    """A complete client document as it would be imported from JSON."""
    return {
        "incomes": [
            {"name": "Salary", "category": "employment", "frequency": "monthly", "amount": 50000},
            {
                "name": "Bank interest",
                "category": "interest_dividend",
                "frequency": "annual",
                "amount": 12000,
            },
        ],
        "expenses": [
            {"name": "Living", "expense_type": "variable", "frequency": "monthly", "amount": 20000},
            {
                "name": "Mortgage",
                "expense_type": "fixed",
                "frequency": "monthly",
                "amount": 10000,
                "is_debt_payment": True,
            },
            {
                "name": "Car loan",
                "expense_type": "fixed",
                "frequency": "monthly",
                "amount": 5000,
                "is_debt_payment": True,
                "is_non_mortgage_debt_payment": True,
            },
            {
                "name": "Monthly saving",
                "expense_type": "saving",
                "frequency": "monthly",
                "amount": 6000,
                "annual_growth_rate": 0.03,
                "is_saving_payment": True,
            },
        ],
        "assets": [
            {"name": "Cash", "asset_type": "liquid", "amount": 300000},
            {
                "name": "Equity fund",
                "asset_type": "investment",
                "amount": 500000,
                "invest_type": "thai_equity",
                "invest_risk": "high",
                "purchase_date": "2021-03-01",
            },
            {"name": "House", "asset_type": "personal", "amount": 2000000},
        ],
        "debts": [
            {"name": "Credit card", "debt_type": "credit_card", "term": "short_term", "amount": 50000},
            {
                "name": "Home loan",
                "debt_type": "mortgage",
                "term": "long_term",
                "amount": 1000000,
                "annual_interest_rate": 0.04,
                "start_date": "2020-01-01",
                "duration_years": 30,
                "principal": 1500000,
            },
        ],
        "holdings": [
            {"name": "SET50 fund", "invest_type": "thai_equity", "amount": 600000, "yearly_return": 0.08},
            {"name": "Bond fund", "invest_type": "bond", "amount": 400000, "yearly_return": 0.03},
        ],
        "goals": [
            {"name": "Car", "target_value": 100000, "horizon_years": 2},
        ],
        "general_goal": {
            "name": "House down payment",
            "target_value": 1000000,
            "horizon_years": 5,
            "net_annual_cashflow": 120000,
            "net_cashflow_growth_rate": 0.0,
        },
        "retirement_goal": {
            "current_age": 35,
            "retirement_age": 60,
            "life_expectancy": 85,
            "current_annual_expense": 300000,
            "expected_post_retirement_return": 0.05,
            "inflation_rate": 0.03,
        },
        "expense_portion": 0.7,
        "tax_deduction": {
            "marital_status": "single",
            "social_security_premium": 9000,
            "pvd": 30000,
        },
    }


@pytest.fixture
def seeded_db(record_service, sample_document, temp_db):
    """A temporary store holding the sample client."""
    record_service.import_document(sample_document)
    return temp_db


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
