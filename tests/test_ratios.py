"""Tests for financial health aggregation and ratios."""

from dataclasses import asdict

import pytest

from finplan.domain.entities import (
    AssetRecord,
    AssetType,
    DebtRecord,
    DebtTerm,
    DebtType,
    ExpenseRecord,
    ExpenseType,
    FinancialAggregates,
    Frequency,
    IncomeCategory,
    IncomeRecord,
    RatioStatus,
)
from finplan.domain.errors import ValidationError
from finplan.domain.ratios import (
    RATIO_STANDARDS,
    aggregate_financials,
    classify_ratio,
    compute_ratios,
    evaluate_ratios,
)


@pytest.fixture
def aggregates():
    incomes = [
        IncomeRecord("Salary", IncomeCategory.EMPLOYMENT, Frequency.MONTHLY, 50000),
        IncomeRecord("Interest", IncomeCategory.INTEREST_DIVIDEND, Frequency.ANNUAL, 12000),
    ]
    expenses = [
        ExpenseRecord("Living", ExpenseType.VARIABLE, Frequency.MONTHLY, 20000),
        ExpenseRecord("Mortgage", ExpenseType.FIXED, Frequency.MONTHLY, 10000, is_debt_payment=True),
        ExpenseRecord(
            "Car loan",
            ExpenseType.FIXED,
            Frequency.MONTHLY,
            5000,
            is_debt_payment=True,
            is_non_mortgage_debt_payment=True,
        ),
        ExpenseRecord("Saving", ExpenseType.SAVING, Frequency.MONTHLY, 6000, is_saving_payment=True),
    ]
    assets = [
        AssetRecord("Cash", AssetType.LIQUID, 300000),
        AssetRecord("Fund", AssetType.INVESTMENT, 500000),
        AssetRecord("House", AssetType.PERSONAL, 2000000),
    ]
    debts = [
        DebtRecord("Card", DebtType.CREDIT_CARD, DebtTerm.SHORT_TERM, 50000),
        DebtRecord("Home loan", DebtType.MORTGAGE, DebtTerm.LONG_TERM, 1000000),
    ]
    return aggregate_financials(incomes, expenses, assets, debts)


def test_aggregate_financials(aggregates):
    """Test summing records into ratio inputs."""
    assert aggregates.total_income == 612000
    assert aggregates.total_expense == 492000
    assert aggregates.monthly_expense == 41000
    assert aggregates.net_income == 120000
    assert aggregates.savings == 72000 + 120000
    assert aggregates.total_liquid_assets == 300000
    assert aggregates.total_short_term_debt == 50000
    assert aggregates.total_debt == 1050000
    assert aggregates.total_asset == 2800000
    assert aggregates.total_invest_asset == 500000
    assert aggregates.total_debt_expense == 180000
    assert aggregates.total_non_mortgage_debt_expense == 60000
    assert aggregates.net_worth == 1750000
    assert aggregates.total_asset_income == 12000


def test_annual_expense_counts_monthly_share():
    """Test that an annual expense adds a twelfth to the monthly expense."""
    totals = aggregate_financials(
        [], [ExpenseRecord("Insurance", ExpenseType.FIXED, Frequency.ANNUAL, 24000)], [], []
    )
    assert totals.monthly_expense == 2000
    assert totals.total_expense == 24000


def test_compute_ratios(aggregates):
    """Test ratio values."""
    ratios = compute_ratios(aggregates)
    assert ratios.liquidity == 6
    assert ratios.basic_liquidity == pytest.approx(300000 / 41000)
    assert ratios.debt_to_asset == pytest.approx(0.375)
    assert ratios.repay_all_debts == pytest.approx(0.625)
    assert ratios.net_worth_ratio == ratios.repay_all_debts
    assert ratios.survival_ratio == pytest.approx(612000 / 492000)
    assert ratios.wealth_ratio == pytest.approx(12000 / 492000)


def test_zero_denominators_give_zero():
    """Test that every ratio is 0 when there is no data."""
    ratios = compute_ratios(FinancialAggregates())
    assert all(value == 0 for value in asdict(ratios).values())
    assert compute_ratios(FinancialAggregates()) == ratios


def test_evaluate_ratios(aggregates):
    """Test pass/fail status against the standards."""
    statuses = evaluate_ratios(compute_ratios(aggregates))
    assert list(statuses) == list(RATIO_STANDARDS)
    assert statuses["liquidity"] == RatioStatus.PASS
    assert statuses["basic_liquidity"] == RatioStatus.FAIL
    assert statuses["liquidity_to_net_worth"] == RatioStatus.PASS
    assert statuses["debt_to_asset"] == RatioStatus.PASS
    assert statuses["debt_service_to_income"] == RatioStatus.PASS
    assert statuses["non_mortgage_debt_service_to_income"] == RatioStatus.PASS
    assert statuses["saving_ratio"] == RatioStatus.PASS
    assert statuses["invest_ratio"] == RatioStatus.FAIL
    assert statuses["survival_ratio"] == RatioStatus.PASS
    assert statuses["wealth_ratio"] == RatioStatus.FAIL


def test_zero_ratio_is_indeterminate():
    """Test that a zero ratio is neither passing nor failing."""
    statuses = evaluate_ratios(compute_ratios(FinancialAggregates()))
    assert set(statuses.values()) == {RatioStatus.INDETERMINATE}


def test_basic_liquidity_range():
    """Test the inclusive 3 to 6 months range."""
    assert classify_ratio("basic_liquidity", 3) == RatioStatus.PASS
    assert classify_ratio("basic_liquidity", 6) == RatioStatus.PASS
    assert classify_ratio("basic_liquidity", 2.9) == RatioStatus.FAIL
    assert classify_ratio("basic_liquidity", 6.1) == RatioStatus.FAIL


def test_unknown_ratio_rejected():
    """Test classifying an unknown ratio name."""
    with pytest.raises(ValidationError, match="Unknown ratio"):
        classify_ratio("leverage", 1.0)
