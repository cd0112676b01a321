"""Portfolio summary calculation."""

from typing import Iterable

from finplan.domain.entities import Holding, PortfolioSummary
from finplan.domain.money import round_to


def calculate_portfolio_summary(holdings: Iterable[Holding]) -> PortfolioSummary:
    """Aggregate holdings into total value and value-weighted expected return.

    Args:
        holdings: Portfolio holdings

    Returns:
        PortfolioSummary with the weighted return rounded to 4 decimals
        (0 when the portfolio is empty or worthless)
    """
    holdings = list(holdings)
    total_value = sum(holding.amount for holding in holdings)

    weighted_return = 0.0
    if total_value > 0:
        for holding in holdings:
            weighted_return += holding.amount / total_value * holding.yearly_return

    return PortfolioSummary(
        total_value=total_value,
        weighted_return=round_to(weighted_return, 4),
    )
