"""Mapper functions to convert between domain models and SQLAlchemy models.

Reading a record is where raw date configurations get normalized into
bounds; writing goes the other way and stores a bound as date plus flags.
"""

from datetime import date
from typing import Optional

from saldo.domain import entities as domain
from saldo.domain.window import normalize_date_config
from saldo.database.models import (
    Account as ORMAccount,
    Record as ORMRecord,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        label=orm_account.label,
        kind=orm_account.kind,
        created_at=orm_account.created_at,
    )


def _bound(value: Optional[date], month_only: bool, indefinite: bool) -> domain.Bound:
    return normalize_date_config(
        domain.DateConfig(
            is_month_only=bool(month_only), date=value, is_indefinite=bool(indefinite)
        )
    )


def record_to_domain(orm_record: ORMRecord) -> domain.Record:
    """Convert SQLAlchemy Record model to domain Record entity."""
    recurrence = domain.Recurrence(
        is_recurring=bool(orm_record.is_recurring),
        start=_bound(
            orm_record.start_date,
            orm_record.start_month_only,
            orm_record.start_indefinite,
        ),
        end=_bound(
            orm_record.end_date, orm_record.end_month_only, orm_record.end_indefinite
        ),
    )
    return domain.Record(
        id=orm_record.id,
        user_id=orm_record.user_id,
        kind=orm_record.kind,
        flow=orm_record.flow,
        amount=orm_record.amount,
        description=orm_record.description or "",
        category=orm_record.category,
        account_id=orm_record.account_id,
        recurrence=recurrence,
        execution_date=_bound(
            orm_record.execution_date, orm_record.execution_month_only, False
        ),
        probability=orm_record.probability,
        created_at=orm_record.created_at,
    )


def bound_to_columns(bound: domain.Bound) -> tuple[Optional[date], bool, bool]:
    """Split a bound into (date, month_only, indefinite) column values."""
    if isinstance(bound, domain.Until):
        return bound.date, bound.month_only, False
    return None, False, True


def recurrence_to_columns(recurrence: domain.Recurrence) -> dict:
    """Column values for a recurrence window."""
    start_date, start_month_only, start_indefinite = bound_to_columns(recurrence.start)
    end_date, end_month_only, end_indefinite = bound_to_columns(recurrence.end)
    return {
        "is_recurring": recurrence.is_recurring,
        "start_date": start_date,
        "start_month_only": start_month_only,
        "start_indefinite": start_indefinite,
        "end_date": end_date,
        "end_month_only": end_month_only,
        "end_indefinite": end_indefinite,
    }


def execution_to_columns(bound: domain.Bound) -> dict:
    """Column values for an execution date."""
    execution_date, month_only, _ = bound_to_columns(bound)
    return {"execution_date": execution_date, "execution_month_only": month_only}
