"""Remaining installments of recurring records."""

from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from saldo.domain.entities import Record, Until
from saldo.domain.window import ceil_bound, floor_bound


def next_month_start(today: Optional[date] = None) -> date:
    """First day of the month following ``today`` (defaults to the real date)."""
    today = today or date.today()
    return today.replace(day=1) + relativedelta(months=1)


def months_between(start: date, end: date) -> int:
    """Number of calendar months from ``start`` through ``end`` inclusive."""
    return (end.year - start.year) * 12 + end.month - start.month + 1


def remaining_months(record: Record, today: Optional[date] = None) -> int:
    """Count the monthly installments still due after the current month.

    Args:
        record: Record to project
        today: Reference date, defaults to today

    Returns:
        1 for one-time records and for recurrences without an end date,
        0 when the recurrence ended before next month, otherwise the number
        of months from next month (or the later recurrence start) through
        the end date inclusive
    """
    recurrence = record.recurrence
    if not recurrence.is_recurring:
        return 1
    if not isinstance(recurrence.end, Until):
        return 1

    first_due = next_month_start(today)
    if isinstance(recurrence.start, Until):
        first_due = max(first_due, floor_bound(recurrence.start).replace(day=1))
    last_due = ceil_bound(recurrence.end)
    if last_due < first_due:
        return 0
    return months_between(first_due, last_due)
