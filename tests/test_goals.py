"""Tests for general and retirement goal calculations."""

import pytest

from finplan.domain.entities import GeneralGoal, RetirementGoal
from finplan.domain.goals import calculate_general_goal, calculate_retirement_goal


class TestGeneralGoal:
    """Tests for the general goal engine."""

    def test_annual_saving_needed(self):
        """Test a goal funded entirely from new savings."""
        goal = GeneralGoal(
            name="House",
            target_value=1000000,
            horizon_years=10,
            net_annual_cashflow=0,
            net_cashflow_growth_rate=0.0,
        )
        result = calculate_general_goal(goal, total_value=0, portfolio_return=0.05)
        assert result.future_value_of_current_investment == 0
        assert result.remaining_goal_value == 1000000
        assert result.annual_saving == 79504.57
        assert not result.is_sufficient

    def test_already_funded_goal_has_negative_saving(self):
        """Test that a portfolio larger than the goal signals sufficiency."""
        goal = GeneralGoal(
            name="Trip",
            target_value=100,
            horizon_years=5,
            net_annual_cashflow=0,
            net_cashflow_growth_rate=0.02,
        )
        result = calculate_general_goal(goal, total_value=200, portfolio_return=0.0)
        assert result.future_value_of_current_investment == 200
        assert result.remaining_goal_value == -100
        assert result.annual_saving < 0
        assert result.is_sufficient

    def test_degenerate_rates_give_zero_saving(self):
        """Test that equal return and growth rates give 0 saving."""
        goal = GeneralGoal(
            name="Trip",
            target_value=100000,
            horizon_years=3,
            net_annual_cashflow=0,
            net_cashflow_growth_rate=0.04,
        )
        result = calculate_general_goal(goal, total_value=0, portfolio_return=0.04)
        assert result.annual_saving == 0


class TestRetirementGoal:
    """Tests for the retirement goal engine."""

    def test_zero_real_rate_is_simple_sum(self):
        """Test that a zero real rate sums the expenses without discounting."""
        goal = RetirementGoal(
            current_age=60,
            retirement_age=60,
            life_expectancy=85,
            current_annual_expense=300000,
            expected_post_retirement_return=0.03,
            inflation_rate=0.03,
        )
        result = calculate_retirement_goal(goal, expense_portion=0.7)
        assert result.years_to_retirement == 0
        assert result.real_discount_rate == 0
        assert result.retirement_duration == 25
        assert result.capital_required == pytest.approx(300000 * 0.7 * 25)

    def test_withdrawals_start_at_retirement(self):
        """Test the annuity-due valuation of the withdrawal stream."""
        goal = RetirementGoal(
            current_age=60,
            retirement_age=60,
            life_expectancy=62,
            current_annual_expense=100000,
            expected_post_retirement_return=0.05,
            inflation_rate=0.0,
        )
        result = calculate_retirement_goal(goal, expense_portion=1.0)
        # First withdrawal undiscounted, second discounted one year
        assert result.capital_required == pytest.approx(100000 + 100000 / 1.05)

    def test_inflation_before_retirement(self):
        """Test inflating today's expense to the retirement date."""
        goal = RetirementGoal(
            current_age=35,
            retirement_age=60,
            life_expectancy=85,
            current_annual_expense=300000,
            expected_post_retirement_return=0.05,
            inflation_rate=0.03,
        )
        result = calculate_retirement_goal(goal, expense_portion=0.5)
        assert result.years_to_retirement == 25
        assert result.future_expense_at_retirement == pytest.approx(300000 * 1.03**25)
        assert result.adjusted_future_expense == pytest.approx(150000 * 1.03**25)
        assert result.real_discount_rate == pytest.approx(1.05 / 1.03 - 1)
        assert result.capital_required > result.adjusted_future_expense
