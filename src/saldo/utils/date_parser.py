"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from saldo.domain.entities import DateConfig

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "last month",
      "this month", "next month", "next year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # "last/this/next month|year" resolve to the first day of the period
    offsets = {"last": -1, "this": 0, "next": 1}
    parts = date_str.split()
    if len(parts) == 2 and parts[0] in offsets:
        step = offsets[parts[0]]
        if parts[1] == "month":
            return today.replace(day=1) + relativedelta(months=step)
        if parts[1] == "year":
            return today.replace(month=1, day=1) + relativedelta(years=step)

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> date:
    """Parse a month into the first day of that month.

    Accepts "YYYY-MM" as well as anything parse_date understands.

    Raises:
        ValueError: If the month cannot be parsed
    """
    match = MONTH_PATTERN.match(month_str.strip())
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month '{month_str}'")
        return date(year, month, 1)
    return parse_date(month_str).replace(day=1)


def parse_date_config(value: Optional[str], month_only: bool = False) -> DateConfig:
    """Parse a command line date into a raw date configuration.

    "YYYY-MM" values are month-only; a missing value or "indefinite" gives
    an indefinite configuration.

    Args:
        value: Date string or None
        month_only: Force the date to cover its whole month

    Returns:
        DateConfig

    Raises:
        ValueError: If the date cannot be parsed
    """
    if value is None or value.strip().lower() in ("", "indefinite", "none"):
        return DateConfig(is_month_only=month_only, date=None, is_indefinite=True)
    if MONTH_PATTERN.match(value.strip()):
        return DateConfig(is_month_only=True, date=parse_month(value))
    return DateConfig(is_month_only=month_only, date=parse_date(value))
