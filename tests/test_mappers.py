"""Tests for JSON to entity mappers."""

from datetime import date

import pytest

from finplan.database.mappers import (
    asset_from_dict,
    debt_from_dict,
    expense_from_dict,
    entity_from_value,
    expense_portion_from_value,
    goal_from_dict,
    income_from_dict,
    record_to_dict,
    records_from_value,
    tax_deduction_from_dict,
)
from finplan.domain.entities import (
    AssetType,
    DebtTerm,
    Frequency,
    IncomeCategory,
    IncomeRecord,
    InvestRisk,
    MaritalStatus,
    RecordKey,
    RentalType,
    TaxPlan,
)
from finplan.domain.errors import ValidationError


class TestIncomeMapper:
    """Tests for income records."""

    def test_income_from_dict(self):
        """Test converting a stored income."""
        income = income_from_dict(
            {
                "name": "Condo rent",
                "category": "rental",
                "frequency": "monthly",
                "amount": 15000,
                "annual_growth_rate": 0.02,
                "rental_type": "building_or_vehicle",
            }
        )
        assert isinstance(income, IncomeRecord)
        assert income.category == IncomeCategory.RENTAL
        assert income.frequency == Frequency.MONTHLY
        assert income.amount == 15000
        assert income.rental_type == RentalType.BUILDING_OR_VEHICLE
        assert income.profession_type is None

    def test_missing_field_is_named(self):
        """Test that a missing required field fails with its path."""
        with pytest.raises(ValidationError, match=r"incomes\[0\]\.category: missing required field"):
            income_from_dict(
                {"name": "Salary", "frequency": "monthly", "amount": 1}, "incomes[0]"
            )

    def test_invalid_choice(self):
        """Test an unknown enum value."""
        with pytest.raises(ValidationError, match="invalid value 'weekly'"):
            income_from_dict(
                {"name": "Salary", "category": "employment", "frequency": "weekly", "amount": 1}
            )

    def test_negative_amount_clamped(self):
        """Test that negative amounts become 0."""
        income = income_from_dict(
            {"name": "Salary", "category": "employment", "frequency": "annual", "amount": -5}
        )
        assert income.amount == 0

    def test_non_numeric_amount(self):
        """Test a text amount."""
        with pytest.raises(ValidationError, match="expected a number"):
            income_from_dict(
                {"name": "Salary", "category": "employment", "frequency": "annual", "amount": "lots"}
            )


class TestExpenseMapper:
    """Tests for expense records."""

    def test_flags(self):
        """Test reading boolean payment flags, absent flags being False."""
        expense = expense_from_dict(
            {
                "name": "Car loan",
                "expense_type": "fixed",
                "frequency": "monthly",
                "amount": 5000,
                "is_debt_payment": True,
                "is_non_mortgage_debt_payment": False,
            }
        )
        assert expense.is_debt_payment is True
        assert expense.is_non_mortgage_debt_payment is False
        assert expense.is_saving_payment is False

    def test_text_flag_rejected(self):
        """Test that a text flag is not read as a boolean."""
        with pytest.raises(ValidationError, match=r"expenses\[0\]\.is_debt_payment: expected a boolean"):
            expense_from_dict(
                {
                    "name": "Car loan",
                    "expense_type": "fixed",
                    "frequency": "monthly",
                    "amount": 5000,
                    "is_debt_payment": "false",
                },
                "expenses[0]",
            )


def test_asset_dates_and_optional_enums():
    """Test parsing dates and optional enums on assets."""
    asset = asset_from_dict(
        {
            "name": "Fund",
            "asset_type": "investment",
            "amount": 1000,
            "purchase_date": "2021-03-01",
            "invest_risk": "medium",
        }
    )
    assert asset.asset_type == AssetType.INVESTMENT
    assert asset.purchase_date == date(2021, 3, 1)
    assert asset.invest_risk == InvestRisk.MEDIUM
    assert asset.invest_type is None


def test_invalid_date():
    """Test an unparseable date."""
    with pytest.raises(ValidationError, match="start_date"):
        debt_from_dict(
            {"name": "Loan", "debt_type": "car", "term": "long_term", "amount": 1, "start_date": "soon"}
        )


def test_debt_defaults():
    """Test optional debt fields."""
    debt = debt_from_dict({"name": "Card", "debt_type": "credit_card", "term": "short_term", "amount": 2000})
    assert debt.term == DebtTerm.SHORT_TERM
    assert debt.annual_interest_rate == 0
    assert debt.duration_years == 0
    assert debt.start_date is None


def test_goal_horizon_must_be_positive():
    """Test that a goal needs at least one year."""
    with pytest.raises(ValidationError, match="horizon_years"):
        goal_from_dict({"name": "Car", "target_value": 1000, "horizon_years": 0})


def test_tax_deduction_defaults():
    """Test that every deduction field is optional."""
    deduction = tax_deduction_from_dict({"child": 2, "rmf": "50000"})
    assert deduction.marital_status == MaritalStatus.UNSPECIFIED
    assert deduction.child == 2
    assert deduction.rmf == 50000
    assert deduction.life_insurance == 0


def test_expense_portion_clamped():
    """Test the expense portion stays within 0 and 1."""
    assert expense_portion_from_value(1.5) == 1.0
    assert expense_portion_from_value(-0.2) == 0
    assert expense_portion_from_value("0.7") == 0.7


def test_records_from_value():
    """Test converting stored lists."""
    assert records_from_value(RecordKey.GOALS, None) == []
    goals = records_from_value(
        RecordKey.GOALS, [{"name": "Car", "target_value": 500000, "horizon_years": 3}]
    )
    assert goals[0].name == "Car"

    with pytest.raises(ValidationError, match=r"goals\[1\]\.target_value"):
        records_from_value(
            RecordKey.GOALS,
            [
                {"name": "Car", "target_value": 500000, "horizon_years": 3},
                {"name": "Trip", "horizon_years": 1},
            ],
        )

    with pytest.raises(ValidationError, match="expected array"):
        records_from_value(RecordKey.GOALS, {"name": "Car"})


def test_entity_from_value():
    """Test converting stored single values."""
    assert entity_from_value(RecordKey.TAX_PLAN, None) is None
    assert entity_from_value(RecordKey.TAX_PLAN, {"rmf": 1000}) == TaxPlan(rmf=1000)


def test_record_to_dict():
    """Test converting an entity back to stored JSON."""
    asset = asset_from_dict(
        {"name": "Fund", "asset_type": "investment", "amount": 1000, "purchase_date": "2021-03-01"}
    )
    data = record_to_dict(asset)
    assert data["asset_type"] == "investment"
    assert data["purchase_date"] == "2021-03-01"
    assert data["invest_type"] is None
    assert asset_from_dict(data) == asset
