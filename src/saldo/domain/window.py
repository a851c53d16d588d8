"""Month membership of records.

Decides whether a record is active in a calendar month. A concrete date
always wins over an indefinite marker: ``normalize_date_config`` is the only
place where the raw flag is looked at.
"""

from datetime import date, datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from saldo.domain.entities import (
    Bound,
    DateConfig,
    INDEFINITE,
    Record,
    RecordKind,
    Until,
)
from saldo.domain.errors import ConfigurationError, missing_target_month

# One-time records of these kinds are placed by their execution date
EXECUTION_DATE_KINDS = frozenset(
    kind.value
    for kind in (
        RecordKind.DEBT,
        RecordKind.CREDIT,
        RecordKind.INVESTMENT,
        RecordKind.COMMITMENT,
    )
)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def normalize_date_config(config: Optional[DateConfig]) -> Bound:
    """Convert a raw date configuration into a window bound.

    Args:
        config: Raw configuration, or None when absent

    Returns:
        Until when a date is present (even if flagged indefinite),
        INDEFINITE otherwise
    """
    if config is None or config.date is None:
        return INDEFINITE
    return Until(date=_as_date(config.date), month_only=config.is_month_only)


def require_month(target_month: Optional[date]) -> date:
    """Validate a target month argument and return it as a date."""
    if target_month is None:
        raise ConfigurationError(missing_target_month())
    if not isinstance(target_month, date):
        raise ConfigurationError(
            f"Target month must be a date, got {type(target_month).__name__}"
        )
    return _as_date(target_month)


def month_bounds(target_month: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``target_month``."""
    target = require_month(target_month)
    start = target.replace(day=1)
    end = start + relativedelta(months=1, days=-1)
    return start, end


def floor_bound(bound: Until) -> date:
    """Earliest day covered by a bound."""
    if bound.month_only:
        return bound.date.replace(day=1)
    return bound.date


def ceil_bound(bound: Until) -> date:
    """Latest day covered by a bound."""
    if bound.month_only:
        return month_bounds(bound.date)[1]
    return bound.date


def same_month(first: date, second: date) -> bool:
    """Check whether two dates fall in the same calendar month."""
    return (first.year, first.month) == (second.year, second.month)


def occurrence_date(record: Record) -> Optional[date]:
    """Date that places a one-time record in a month, if any."""
    kind = getattr(record.kind, "value", record.kind)
    if kind in EXECUTION_DATE_KINDS and isinstance(record.execution_date, Until):
        return record.execution_date.date
    if isinstance(record.recurrence.start, Until):
        return record.recurrence.start.date
    return None


def is_active_in_month(record: Record, target_month: date) -> bool:
    """Check whether a record is active in the month of ``target_month``.

    Recurring records are active when their window overlaps the month; an
    indefinite side leaves the window open. One-time records are active in
    the month of their occurrence date and never when they have none.
    """
    month_start, month_end = month_bounds(target_month)
    recurrence = record.recurrence

    if recurrence.is_recurring:
        start, end = recurrence.start, recurrence.end
        start_ok = not isinstance(start, Until) or floor_bound(start) <= month_end
        end_ok = not isinstance(end, Until) or ceil_bound(end) >= month_start
        return start_ok and end_ok

    occurred_on = occurrence_date(record)
    if occurred_on is None:
        return False
    return same_month(occurred_on, month_start)
