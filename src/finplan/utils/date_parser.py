"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15 January 2024", ...) and a few
    relative forms: "today", "yesterday", "this year", "last year", "N years ago".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    # "3 years ago", "1 year ago"
    parts = date_str.split()
    if len(parts) == 3 and parts[2] == "ago" and parts[1] in ("year", "years"):
        try:
            return today - relativedelta(years=int(parts[0]))
        except ValueError:
            raise ValueError(f"Could not parse date '{date_str}'")

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
