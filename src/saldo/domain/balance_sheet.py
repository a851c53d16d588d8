"""Balance sheet domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from saldo.database.base import RecordStore
from saldo.domain.aggregation import aggregate, aggregate_lifetime
from saldo.domain.entities import (
    BalanceSheet,
    LifetimeTotals,
    PeriodStatus,
    PeriodTotals,
    Policy,
)
from saldo.domain.window import month_bounds, require_month


def period_status(target_month: date, today: Optional[date] = None) -> PeriodStatus:
    """Tell whether a month is a forecast, the current month or closed."""
    month_start, _ = month_bounds(target_month)
    current_start, _ = month_bounds(today or date.today())
    if month_start > current_start:
        return PeriodStatus.FORECAST
    if month_start < current_start:
        return PeriodStatus.ACTUAL
    return PeriodStatus.CURRENT


def build_balance_sheet(
    month_totals: PeriodTotals,
    lifetime_totals: LifetimeTotals,
    policy: Optional[Policy] = None,
    today: Optional[date] = None,
) -> BalanceSheet:
    """Combine month and lifetime totals into assets, liabilities and net worth.

    Args:
        month_totals: Totals of the selected month
        lifetime_totals: Totals over the whole history
        policy: Aggregation toggles, defaults to Policy()
        today: Reference date used to label the month

    Returns:
        BalanceSheet with both the month view and the lifetime view
    """
    policy = policy or Policy()

    assets = (
        month_totals.credits + month_totals.income + month_totals.recurring_income
    )
    liabilities = (
        month_totals.debts + month_totals.expense + month_totals.recurring_expense
    )
    if policy.include_commitments:
        liabilities += month_totals.commitments

    liquid_assets = lifetime_totals.income - lifetime_totals.expense
    total_commitments = (
        lifetime_totals.commitments if policy.include_commitments else Decimal("0")
    )
    net_worth_total = (
        liquid_assets
        + lifetime_totals.credits
        - lifetime_totals.debts
        - total_commitments
    )

    return BalanceSheet(
        month=month_totals.month,
        status=period_status(month_totals.month, today=today),
        assets=assets,
        liabilities=liabilities,
        net_worth=assets - liabilities,
        liquid_assets=liquid_assets,
        total_credits=lifetime_totals.credits,
        total_debts=lifetime_totals.debts,
        total_commitments=total_commitments,
        net_worth_total=net_worth_total,
        policy=policy,
    )


class BalanceSheetService:
    """Service building balance sheets from the records of a user."""

    def __init__(self, store: RecordStore):
        """Initialize balance sheet service.

        Args:
            store: Record store instance
        """
        self.store = store

    def build(
        self,
        user_id: str,
        target_month: date,
        policy: Optional[Policy] = None,
        today: Optional[date] = None,
    ) -> tuple[PeriodTotals, LifetimeTotals, BalanceSheet]:
        """Build month totals, lifetime totals and the balance sheet.

        Args:
            user_id: Owner of the records
            target_month: Any date inside the month to evaluate
            policy: Aggregation toggles
            today: Reference date for projections

        Returns:
            Tuple of (PeriodTotals, LifetimeTotals, BalanceSheet)
        """
        policy = policy or Policy()
        target_month = require_month(target_month)
        records = self.store.list_records(user_id)

        month_totals = aggregate(records, target_month, policy)
        lifetime_totals = aggregate_lifetime(records, policy, today=today)
        sheet = build_balance_sheet(month_totals, lifetime_totals, policy, today=today)
        return month_totals, lifetime_totals, sheet
