"""Cash-flow projection and goal payment solving."""

from typing import Iterable, Sequence, Union

from finplan.domain.entities import (
    CashflowTable,
    CashflowYear,
    ExpenseRecord,
    ExpenseType,
    Frequency,
    Goal,
    IncomeRecord,
    ProjectedAmount,
)
from finplan.domain.errors import ValidationError
from finplan.domain.money import round_to

FlowRecord = Union[IncomeRecord, ExpenseRecord]


def _normalized_amount(record: FlowRecord, year: int) -> float:
    if record.frequency == Frequency.MONTHLY:
        return record.amount * 12
    if record.frequency == Frequency.LUMP_SUM:
        return record.amount if year == 1 else 0.0
    return record.amount


def project_amount(record: FlowRecord, year: int) -> float:
    """Project one income or expense record to a 1-indexed year.

    The normalized annual amount is compounded by repeated multiplication,
    once per elapsed year, so results match year-by-year rounding of the
    original tables. Lump sums never grow.
    """
    if year < 1:
        raise ValidationError(f"Projection year must be at least 1, got {year}")

    amount = _normalized_amount(record, year)
    if record.frequency != Frequency.LUMP_SUM:
        for _ in range(1, year):
            amount *= 1 + record.annual_growth_rate
    return amount


def project_yearly_amounts(records: Iterable[FlowRecord], year: int) -> list[ProjectedAmount]:
    """Project every record to ``year``, each rounded to 2 decimals."""
    return [
        ProjectedAmount(name=record.name, amount=round_to(project_amount(record, year), 2))
        for record in records
    ]


def find_saving_growth_rate(expenses: Iterable[ExpenseRecord]) -> float:
    """Growth rate of the first saving-type expense, 0 if there is none."""
    for expense in expenses:
        if expense.expense_type == ExpenseType.SAVING:
            return expense.annual_growth_rate
    return 0.0


def growing_annuity_payment(
    future_value: float, rate: float, growth_rate: float, periods: int
) -> float:
    """First payment of a growing annuity accumulating to ``future_value``.

    Returns 0 when the denominator is exactly zero.
    """
    denominator = (1 + rate) ** periods - (1 + growth_rate) ** periods
    if denominator == 0:
        return 0.0
    return future_value * ((rate - growth_rate) / denominator)


def calculate_goal_payments(
    goals: Iterable[Goal],
    portfolio_return: float,
    saving_growth_rate: float,
    year: int,
) -> list[ProjectedAmount]:
    """Required contribution toward each goal in ``year``.

    Goals past their horizon need no payment.
    """
    payments = []
    for goal in goals:
        payment = 0.0
        if year <= goal.horizon_years:
            payment = growing_annuity_payment(
                goal.target_value, portfolio_return, saving_growth_rate, goal.horizon_years
            )
        payments.append(ProjectedAmount(name=goal.name, amount=round_to(payment, 2)))
    return payments


def build_cashflow_table(
    incomes: Sequence[IncomeRecord],
    expenses: Sequence[ExpenseRecord],
    goals: Sequence[Goal],
    portfolio_return: float,
    years: int,
) -> CashflowTable:
    """Build the year-by-year cash-flow table netted against goal payments.

    Args:
        incomes: Income records
        expenses: Expense records; the saving-type expense sets the goal
            payment growth rate
        goals: Cash-flow goals
        portfolio_return: Expected portfolio return
        years: Number of years to project, starting at year 1

    Returns:
        CashflowTable with one row per year

    Raises:
        ValidationError: If years is less than 1
    """
    if years < 1:
        raise ValidationError(f"Number of projection years must be at least 1, got {years}")

    saving_growth_rate = find_saving_growth_rate(expenses)
    rows = []
    for year in range(1, years + 1):
        income_details = tuple(project_yearly_amounts(incomes, year))
        expense_details = tuple(project_yearly_amounts(expenses, year))
        goal_payments = tuple(
            calculate_goal_payments(goals, portfolio_return, saving_growth_rate, year)
        )

        total_income = sum(item.amount for item in income_details)
        total_expense = sum(item.amount for item in expense_details)
        total_goal_payments = sum(item.amount for item in goal_payments)
        net_income = total_income - total_expense

        rows.append(
            CashflowYear(
                year=year,
                income_details=income_details,
                expense_details=expense_details,
                goal_payments=goal_payments,
                total_income=total_income,
                total_expense=total_expense,
                total_goal_payments=total_goal_payments,
                net_income=net_income,
                net_income_after_goals=net_income - total_goal_payments,
            )
        )

    return CashflowTable(
        portfolio_return=portfolio_return,
        saving_growth_rate=saving_growth_rate,
        years=tuple(rows),
    )
