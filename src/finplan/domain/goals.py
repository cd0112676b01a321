"""General and retirement goal calculations."""

from finplan.domain.cashflow import growing_annuity_payment
from finplan.domain.entities import (
    GeneralGoal,
    GeneralGoalResult,
    RetirementGoal,
    RetirementGoalResult,
)
from finplan.domain.money import round_to


def calculate_general_goal(
    goal: GeneralGoal, total_value: float, portfolio_return: float
) -> GeneralGoalResult:
    """Annual saving needed to reach a lump-sum goal on top of the portfolio.

    The current portfolio is grown at the portfolio return over the goal
    horizon; whatever is left of the goal is funded by a growing annuity of
    net cash flow. A negative ``annual_saving`` means the portfolio alone
    already exceeds the goal.

    Args:
        goal: General goal
        total_value: Current total portfolio value
        portfolio_return: Expected portfolio return

    Returns:
        GeneralGoalResult, future value and annual saving rounded to 2 decimals
    """
    future_value = total_value * (1 + portfolio_return) ** goal.horizon_years
    remaining = goal.target_value - future_value
    annual_saving = growing_annuity_payment(
        remaining, portfolio_return, goal.net_cashflow_growth_rate, goal.horizon_years
    )
    return GeneralGoalResult(
        future_value_of_current_investment=round_to(future_value, 2),
        remaining_goal_value=remaining,
        annual_saving=round_to(annual_saving, 2),
    )


def calculate_retirement_goal(
    goal: RetirementGoal, expense_portion: float
) -> RetirementGoalResult:
    """Capital required at retirement to fund the post-retirement expenses.

    Withdrawals start at the retirement date itself, so the stream is valued
    as an annuity-due at the inflation-adjusted (real) rate.

    Args:
        goal: Retirement goal inputs
        expense_portion: Expected retirement spending as a fraction of the
            inflated current expense

    Returns:
        RetirementGoalResult
    """
    years_to_retirement = goal.retirement_age - goal.current_age
    future_expense = goal.current_annual_expense * (1 + goal.inflation_rate) ** years_to_retirement
    real_rate = (1 + goal.expected_post_retirement_return) / (1 + goal.inflation_rate) - 1
    adjusted_expense = future_expense * expense_portion
    duration = goal.life_expectancy - goal.retirement_age

    if real_rate == 0:
        capital_required = adjusted_expense * duration
    else:
        one_plus_rate = 1 + real_rate
        factor = 1 - 1 / one_plus_rate**duration
        capital_required = adjusted_expense * (factor / real_rate) * one_plus_rate

    return RetirementGoalResult(
        years_to_retirement=years_to_retirement,
        future_expense_at_retirement=future_expense,
        real_discount_rate=real_rate,
        adjusted_future_expense=adjusted_expense,
        retirement_duration=duration,
        capital_required=capital_required,
    )
