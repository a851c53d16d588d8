"""Grouping of records into period and lifetime totals."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from saldo.domain.classifier import classify, contribution_amount
from saldo.domain.entities import (
    AccountBalance,
    FlowType,
    LifetimeTotals,
    PeriodTotals,
    Policy,
    Record,
    RecordKind,
)
from saldo.domain.errors import MalformedRecordError
from saldo.domain.window import is_active_in_month, month_bounds

logger = logging.getLogger(__name__)

KIND_TOTALS = {
    RecordKind.DEBT: "debts",
    RecordKind.CREDIT: "credits",
    RecordKind.INVESTMENT: "investments",
    RecordKind.COMMITMENT: "commitments",
}


def _plain_total_name(record: Record, split_recurring: bool) -> str:
    name = "income" if FlowType(record.flow) is FlowType.INCOME else "expense"
    if split_recurring and record.recurrence.is_recurring:
        return f"recurring_{name}"
    return name


def _total_name(kind: RecordKind, record: Record, split_recurring: bool) -> str:
    if kind is RecordKind.PLAIN:
        return _plain_total_name(record, split_recurring)
    return KIND_TOTALS[kind]


def _skip(record: Record, error: MalformedRecordError) -> None:
    logger.warning("Skipping record %s: %s", record.id, error)


def aggregate(
    records: Iterable[Record], target_month: date, policy: Optional[Policy] = None
) -> PeriodTotals:
    """Sum the records active in a month into named totals.

    Malformed records are logged, counted in ``skipped_count`` and left out
    whatever their dates; they never abort the pass.

    Args:
        records: Records to aggregate
        target_month: Any date inside the month to evaluate
        policy: Aggregation toggles, defaults to Policy()

    Returns:
        PeriodTotals for the month

    Raises:
        ConfigurationError: If target_month is missing
    """
    policy = policy or Policy()
    month_start, _ = month_bounds(target_month)

    sums: dict[str, Decimal] = defaultdict(Decimal)
    transaction_count = 0
    skipped_count = 0

    for record in records:
        try:
            kind = classify(record)
            amount = contribution_amount(record, policy)
        except MalformedRecordError as e:
            _skip(record, e)
            skipped_count += 1
            continue
        if not is_active_in_month(record, month_start):
            continue
        sums[_total_name(kind, record, split_recurring=True)] += amount
        transaction_count += 1

    return PeriodTotals(
        month=month_start,
        transaction_count=transaction_count,
        skipped_count=skipped_count,
        **sums,
    )


def aggregate_lifetime(
    records: Iterable[Record],
    policy: Optional[Policy] = None,
    today: Optional[date] = None,
) -> LifetimeTotals:
    """Sum every record regardless of month.

    Debts are scaled by their remaining installments; every other record
    counts once.
    """
    policy = policy or Policy()

    sums: dict[str, Decimal] = defaultdict(Decimal)
    record_count = 0
    skipped_count = 0

    for record in records:
        try:
            kind = classify(record)
            amount = contribution_amount(record, policy, lifetime=True, today=today)
        except MalformedRecordError as e:
            _skip(record, e)
            skipped_count += 1
            continue
        sums[_total_name(kind, record, split_recurring=False)] += amount
        record_count += 1

    return LifetimeTotals(
        record_count=record_count, skipped_count=skipped_count, **sums
    )


def summarize_account(records: Iterable[Record], account_id: int) -> AccountBalance:
    """Balance of the plain records attached to an account."""
    income = Decimal("0")
    expense = Decimal("0")
    count = 0

    for record in records:
        if record.account_id != account_id or record.kind != RecordKind.PLAIN.value:
            continue
        if record.flow == FlowType.INCOME.value:
            income += record.amount
        elif record.flow == FlowType.EXPENSE.value:
            expense += record.amount
        else:
            logger.warning(
                "Record %s has unknown flow '%s'", record.id, record.flow
            )
            continue
        count += 1

    return AccountBalance(
        account_id=account_id, income=income, expense=expense, transaction_count=count
    )
