"""Utility functions for finplan."""

from finplan.utils.amount_parser import parse_amount, parse_rate
from finplan.utils.date_parser import parse_date

__all__ = ["parse_amount", "parse_rate", "parse_date"]
