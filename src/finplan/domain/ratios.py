"""Financial health aggregation, ratios and pass/fail standards."""

from dataclasses import asdict
from typing import Callable, Iterable

from finplan.domain.entities import (
    AssetRecord,
    AssetType,
    DebtRecord,
    DebtTerm,
    ExpenseRecord,
    FinancialAggregates,
    FinancialRatios,
    Frequency,
    IncomeCategory,
    IncomeRecord,
    RatioStatus,
)
from finplan.domain.errors import ValidationError
from finplan.domain.money import safe_divide


def _annual_amount(amount: float, frequency: Frequency) -> float:
    return amount * 12 if frequency == Frequency.MONTHLY else amount


def aggregate_financials(
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
    assets: Iterable[AssetRecord],
    debts: Iterable[DebtRecord],
) -> FinancialAggregates:
    """Sum the client's records into the totals the ratios are built from.

    Monthly incomes and expenses are annualized; every other frequency is
    taken as already annual. The monthly expense is the reverse view: annual
    expenses are divided by 12, everything else counts as monthly.
    """
    incomes = list(incomes)
    expenses = list(expenses)
    assets = list(assets)
    debts = list(debts)

    annual_incomes = [(inc, _annual_amount(inc.amount, inc.frequency)) for inc in incomes]
    annual_expenses = [(exp, _annual_amount(exp.amount, exp.frequency)) for exp in expenses]

    total_income = sum(amount for _, amount in annual_incomes)
    total_expense = sum(amount for _, amount in annual_expenses)
    net_income = total_income - total_expense

    monthly_expense = 0.0
    for expense in expenses:
        amount = expense.amount
        if expense.frequency == Frequency.ANNUAL:
            amount = amount / 12
        monthly_expense += amount

    saving_expenses = sum(amount for exp, amount in annual_expenses if exp.is_saving_payment)
    savings = saving_expenses + (net_income if net_income > 0 else 0)

    total_asset = sum(asset.amount for asset in assets)
    total_debt = sum(debt.amount for debt in debts)

    return FinancialAggregates(
        total_liquid_assets=sum(a.amount for a in assets if a.asset_type == AssetType.LIQUID),
        total_income=total_income,
        total_expense=total_expense,
        monthly_expense=monthly_expense,
        net_income=net_income,
        savings=savings,
        total_short_term_debt=sum(d.amount for d in debts if d.term == DebtTerm.SHORT_TERM),
        total_debt=total_debt,
        total_asset=total_asset,
        total_invest_asset=sum(
            a.amount for a in assets if a.asset_type == AssetType.INVESTMENT
        ),
        total_debt_expense=sum(amount for exp, amount in annual_expenses if exp.is_debt_payment),
        total_non_mortgage_debt_expense=sum(
            amount for exp, amount in annual_expenses if exp.is_non_mortgage_debt_payment
        ),
        net_worth=total_asset - total_debt,
        total_asset_income=sum(
            amount
            for inc, amount in annual_incomes
            if inc.category == IncomeCategory.INTEREST_DIVIDEND
        ),
    )


def compute_ratios(totals: FinancialAggregates) -> FinancialRatios:
    """Compute the 12 personal-finance ratios.

    Every ratio is 0 when its denominator is 0; callers treat 0 as
    "not enough data" rather than as a failing value.
    """
    return FinancialRatios(
        liquidity=safe_divide(totals.total_liquid_assets, totals.total_short_term_debt),
        basic_liquidity=safe_divide(totals.total_liquid_assets, totals.monthly_expense),
        liquidity_to_net_worth=safe_divide(totals.total_liquid_assets, totals.net_worth),
        debt_to_asset=safe_divide(totals.total_debt, totals.total_asset),
        repay_all_debts=safe_divide(totals.net_worth, totals.total_asset),
        debt_service_to_income=safe_divide(totals.total_debt_expense, totals.total_income),
        non_mortgage_debt_service_to_income=safe_divide(
            totals.total_non_mortgage_debt_expense, totals.total_income
        ),
        saving_ratio=safe_divide(totals.savings, totals.total_income),
        invest_ratio=safe_divide(totals.total_invest_asset, totals.net_worth),
        net_worth_ratio=safe_divide(totals.net_worth, totals.total_asset),
        survival_ratio=safe_divide(totals.total_income, totals.total_expense),
        wealth_ratio=safe_divide(totals.total_asset_income, totals.total_expense),
    )


# Pass thresholds per ratio: (human readable standard, check)
RATIO_STANDARDS: dict[str, tuple[str, Callable[[float], bool]]] = {
    "liquidity": ("> 1", lambda v: v > 1),
    "basic_liquidity": ("3 - 6 months", lambda v: 3 <= v <= 6),
    "liquidity_to_net_worth": (">= 15%", lambda v: v >= 0.15),
    "debt_to_asset": ("< 50%", lambda v: v < 0.5),
    "repay_all_debts": ("> 50%", lambda v: v > 0.5),
    "debt_service_to_income": ("< 45%", lambda v: v < 0.45),
    "non_mortgage_debt_service_to_income": ("< 20%", lambda v: v < 0.20),
    "saving_ratio": ("> 10%", lambda v: v > 0.10),
    "invest_ratio": ("> 50%", lambda v: v > 0.50),
    "net_worth_ratio": ("> 50%", lambda v: v > 0.50),
    "survival_ratio": ("> 1", lambda v: v > 1),
    "wealth_ratio": ("> 1", lambda v: v > 1),
}


def classify_ratio(name: str, value: float) -> RatioStatus:
    """Classify a ratio value against its standard.

    Raises:
        ValidationError: If the ratio name is unknown
    """
    if name not in RATIO_STANDARDS:
        raise ValidationError(f"Unknown ratio '{name}'")
    if value == 0:
        return RatioStatus.INDETERMINATE
    _, check = RATIO_STANDARDS[name]
    return RatioStatus.PASS if check(value) else RatioStatus.FAIL


def evaluate_ratios(ratios: FinancialRatios) -> dict[str, RatioStatus]:
    """Status of every ratio, keyed by ratio name in display order."""
    return {name: classify_ratio(name, value) for name, value in asdict(ratios).items()}
