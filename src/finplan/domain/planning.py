"""Planning domain service.

Loads a client snapshot from the record store and runs the calculation
engine over it. The engine functions themselves never touch the store.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from finplan.database.base import RecordStore
from finplan.domain.cashflow import build_cashflow_table
from finplan.domain.entities import (
    CashflowTable,
    ClientSnapshot,
    FinancialAggregates,
    FinancialRatios,
    GeneralGoalResult,
    PortfolioSummary,
    RatioStatus,
    RecordKey,
    RetirementGoalResult,
    TaxPlan,
    TaxPlanResult,
    TaxResult,
)
from finplan.domain.errors import NotFoundError
from finplan.domain.goals import calculate_general_goal, calculate_retirement_goal
from finplan.domain.portfolio import calculate_portfolio_summary
from finplan.domain.ratios import aggregate_financials, compute_ratios, evaluate_ratios
from finplan.domain.records import RecordService
from finplan.domain.tax import calculate_tax, calculate_tax_plan

logger = logging.getLogger(__name__)

DEFAULT_PROJECTION_YEARS = 5


@dataclass(frozen=True)
class HealthCheck:
    """Financial health ratios with their pass/fail status."""

    aggregates: FinancialAggregates
    ratios: FinancialRatios
    statuses: dict[str, RatioStatus]


class PlanningService:
    """Service running financial-planning calculations for one client."""

    def __init__(self, store: RecordStore):
        """Initialize planning service.

        Args:
            store: Record store scoped to one client
        """
        self.store = store
        self.records = RecordService(store)

    def _snapshot(self) -> ClientSnapshot:
        snapshot = self.records.load_snapshot()
        logger.debug(
            "Loaded snapshot for %s: %d incomes, %d expenses, %d holdings, %d goals",
            self.store.owner,
            len(snapshot.incomes),
            len(snapshot.expenses),
            len(snapshot.holdings),
            len(snapshot.goals),
        )
        return snapshot

    def portfolio_summary(self) -> PortfolioSummary:
        """Total value and weighted return of the client's holdings."""
        return calculate_portfolio_summary(self._snapshot().holdings)

    def cashflow_table(self, years: int = DEFAULT_PROJECTION_YEARS) -> CashflowTable:
        """Project the yearly cash flow netted against goal payments.

        Args:
            years: Number of years to project

        Returns:
            CashflowTable

        Raises:
            ValidationError: If years is less than 1
        """
        snapshot = self._snapshot()
        portfolio = calculate_portfolio_summary(snapshot.holdings)
        return build_cashflow_table(
            snapshot.incomes,
            snapshot.expenses,
            snapshot.goals,
            portfolio.weighted_return,
            years,
        )

    def general_goal(self) -> GeneralGoalResult:
        """Annual saving needed for the stored general goal.

        Raises:
            NotFoundError: If no general goal is stored
        """
        snapshot = self._snapshot()
        if snapshot.general_goal is None:
            raise NotFoundError(f"No general goal stored for client '{self.store.owner}'")
        portfolio = calculate_portfolio_summary(snapshot.holdings)
        return calculate_general_goal(
            snapshot.general_goal, portfolio.total_value, portfolio.weighted_return
        )

    def retirement_goal(self, expense_portion: Optional[float] = None) -> RetirementGoalResult:
        """Capital required for the stored retirement goal.

        Args:
            expense_portion: Overrides the stored expense portion when given

        Raises:
            NotFoundError: If no retirement goal is stored
        """
        snapshot = self._snapshot()
        if snapshot.retirement_goal is None:
            raise NotFoundError(f"No retirement goal stored for client '{self.store.owner}'")
        portion = snapshot.expense_portion if expense_portion is None else expense_portion
        return calculate_retirement_goal(snapshot.retirement_goal, portion)

    def health_check(self) -> HealthCheck:
        snapshot = self._snapshot()
        aggregates = aggregate_financials(
            snapshot.incomes, snapshot.expenses, snapshot.assets, snapshot.debts
        )
        ratios = compute_ratios(aggregates)
        return HealthCheck(aggregates=aggregates, ratios=ratios, statuses=evaluate_ratios(ratios))

    def tax(self) -> TaxResult:
        """Baseline tax from the stored incomes and declared deductions."""
        snapshot = self._snapshot()
        return calculate_tax(snapshot.incomes, snapshot.tax_deduction)

    def tax_plan(self, plan: Optional[TaxPlan] = None, save: bool = False) -> TaxPlanResult:
        """Re-run the tax with hypothetical retirement-fund contributions.

        Args:
            plan: Contributions to try; defaults to the stored plan, or an
                empty plan when none is stored
            save: Persist the capped plan as the client's stored plan

        Returns:
            TaxPlanResult
        """
        snapshot = self._snapshot()
        if plan is None:
            plan = snapshot.tax_plan or TaxPlan()
        result = calculate_tax_plan(snapshot.incomes, snapshot.tax_deduction, plan)
        logger.debug(
            "Tax plan for %s: %.2f -> %.2f",
            self.store.owner,
            result.baseline.tax_to_pay,
            result.planned.tax_to_pay,
        )
        if save:
            self.records.set_value(RecordKey.TAX_PLAN, result.plan)
        return result
