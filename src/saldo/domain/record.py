"""Record domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from saldo.database.base import RecordStore
from saldo.domain.entities import (
    Bound,
    CREDIT_PROBABILITIES,
    DateConfig,
    FIXED_FLOWS,
    FlowType,
    INDEFINITE,
    Record as RecordEntity,
    RecordKind,
    Recurrence,
    Until,
)
from saldo.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    not_settleable,
    record_not_found,
    transfer_same_account,
)
from saldo.domain.window import is_active_in_month, normalize_date_config

logger = logging.getLogger(__name__)

SETTLEMENT_PREFIXES = {
    RecordKind.DEBT: "Payment",
    RecordKind.CREDIT: "Collection",
}


def _parse_kind(kind: str) -> RecordKind:
    try:
        return RecordKind(kind)
    except ValueError:
        allowed = ", ".join(k.value for k in RecordKind)
        raise ValidationError(f"Unknown record kind '{kind}'. Expected one of: {allowed}") from None


def _check_has_date(recurrence: Recurrence, execution: Bound) -> None:
    if not recurrence.is_recurring and not (
        isinstance(recurrence.start, Until) or isinstance(execution, Until)
    ):
        raise ValidationError("One-time records need a date")


def _resolve_flow(kind: RecordKind, flow: Optional[str]) -> FlowType:
    if kind is not RecordKind.PLAIN:
        fixed = FIXED_FLOWS[kind]
        if flow is not None and flow != fixed.value:
            logger.debug("Ignoring flow '%s' for %s record, using %s", flow, kind.value, fixed.value)
        return fixed
    if flow is None:
        raise ValidationError("Plain records need a flow (income or expense)")
    try:
        return FlowType(flow)
    except ValueError:
        raise ValidationError(f"Unknown flow '{flow}'. Expected income or expense") from None


class RecordService:
    """Service for managing financial records."""

    def __init__(self, store: RecordStore):
        """Initialize record service.

        Args:
            store: Record store instance
        """
        self.store = store

    def _require_record(self, user_id: str, record_id: int) -> RecordEntity:
        record = self.store.get_record(user_id, record_id)
        if record is None:
            raise NotFoundError(record_not_found(record_id))
        return record

    def _require_account(self, user_id: str, account_id: Optional[int]) -> None:
        if account_id is not None and self.store.get_account(user_id, account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _check_probability(self, kind: RecordKind, probability: Optional[int]) -> None:
        if probability is None:
            return
        if kind is not RecordKind.CREDIT:
            raise ValidationError("Probability can only be set on credit records")
        if probability not in CREDIT_PROBABILITIES:
            raise ValidationError(
                f"Probability must be one of {', '.join(str(p) for p in CREDIT_PROBABILITIES)}"
            )

    def create_record(
        self,
        user_id: str,
        kind: str,
        amount: Decimal,
        flow: Optional[str] = None,
        is_recurring: bool = False,
        start_date: Optional[DateConfig] = None,
        end_date: Optional[DateConfig] = None,
        execution_date: Optional[DateConfig] = None,
        description: str = "",
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        probability: Optional[int] = None,
    ) -> int:
        """Create a record.

        Args:
            user_id: Owner of the record
            kind: Record kind (plain, debt, credit, investment, commitment)
            amount: Nominal amount, never negative
            flow: income or expense; required for plain records and fixed
                for every other kind
            is_recurring: If True, the record repeats monthly
            start_date: Start of the recurrence, or the date of a one-time record
            end_date: End of the recurrence
            execution_date: Due date of a one-time non-plain record
            description: Free text description
            category: Category label
            account_id: Optional account the record belongs to
            probability: Collection probability of a credit, in percent

        Returns:
            Record ID

        Raises:
            ValidationError: If a field is invalid
            NotFoundError: If the account doesn't exist
        """
        record_kind = _parse_kind(kind)
        record_flow = _resolve_flow(record_kind, flow)

        if amount < 0:
            raise ValidationError("Amount cannot be negative")
        self._check_probability(record_kind, probability)
        self._require_account(user_id, account_id)

        execution = normalize_date_config(execution_date)
        if record_kind is RecordKind.PLAIN and isinstance(execution, Until):
            raise ValidationError("Plain records have no execution date")

        recurrence = Recurrence(
            is_recurring=is_recurring,
            start=normalize_date_config(start_date),
            end=normalize_date_config(end_date),
        )
        _check_has_date(recurrence, execution)

        record_id = self.store.create_record(
            user_id=user_id,
            kind=record_kind.value,
            flow=record_flow.value,
            amount=amount,
            recurrence=recurrence,
            description=description,
            category=category,
            account_id=account_id,
            execution_date=execution,
            probability=probability,
        )
        logger.debug("Created %s record %s for user %s", record_kind.value, record_id, user_id)
        return record_id

    def get_record(self, user_id: str, record_id: int) -> Optional[RecordEntity]:
        """Get record by ID.

        Args:
            user_id: Owner of the record
            record_id: Record ID

        Returns:
            Record entity or None if not found
        """
        return self.store.get_record(user_id, record_id)

    def update_record(
        self,
        user_id: str,
        record_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        probability: Optional[int] = None,
        is_recurring: Optional[bool] = None,
        start_date: Optional[DateConfig] = None,
        end_date: Optional[DateConfig] = None,
        execution_date: Optional[DateConfig] = None,
    ) -> None:
        """Update record fields. Arguments left as None are not changed.

        Raises:
            NotFoundError: If the record or the new account doesn't exist
            ValidationError: If a new value is invalid
        """
        record = self._require_record(user_id, record_id)
        kind = _parse_kind(record.kind)
        fields: dict = {}

        if amount is not None:
            if amount < 0:
                raise ValidationError("Amount cannot be negative")
            fields["amount"] = amount
        if description is not None:
            fields["description"] = description
        if category is not None:
            fields["category"] = category
        if account_id is not None:
            self._require_account(user_id, account_id)
            fields["account_id"] = account_id
        if probability is not None:
            self._check_probability(kind, probability)
            fields["probability"] = probability

        if is_recurring is not None or start_date is not None or end_date is not None:
            current = record.recurrence
            fields["recurrence"] = Recurrence(
                is_recurring=current.is_recurring if is_recurring is None else is_recurring,
                start=current.start if start_date is None else normalize_date_config(start_date),
                end=current.end if end_date is None else normalize_date_config(end_date),
            )
        if execution_date is not None:
            if kind is RecordKind.PLAIN:
                raise ValidationError("Plain records have no execution date")
            fields["execution_date"] = normalize_date_config(execution_date)

        if "recurrence" in fields or "execution_date" in fields:
            _check_has_date(
                fields.get("recurrence", record.recurrence),
                fields.get("execution_date", record.execution_date),
            )

        if fields:
            self.store.update_record(user_id, record_id, **fields)

    def delete_record(self, user_id: str, record_id: int) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        self._require_record(user_id, record_id)
        self.store.delete_record(user_id, record_id)

    def list_records(
        self,
        user_id: str,
        kind: Optional[str] = None,
        target_month: Optional[date] = None,
    ) -> list[RecordEntity]:
        """List records with filters.

        Args:
            user_id: Owner of the records
            kind: Optional record kind filter
            target_month: If given, only records active in that month

        Returns:
            List of record entities, newest first
        """
        if kind is not None:
            kind = _parse_kind(kind).value
        records = self.store.list_records(user_id, kind=kind)
        if target_month is not None:
            records = [r for r in records if is_active_in_month(r, target_month)]
        return records

    def settle_record(
        self, user_id: str, record_id: int, settled_on: date, month_only: bool = False
    ) -> int:
        """Record the payment of a debt or the collection of a credit.

        Creates a one-time plain record with the same amount, category and
        account. The debt or credit itself is left unchanged.

        Returns:
            ID of the new plain record

        Raises:
            NotFoundError: If the record doesn't exist
            ValidationError: If the record is neither a debt nor a credit
        """
        record = self._require_record(user_id, record_id)
        kind = _parse_kind(record.kind)
        if kind not in SETTLEMENT_PREFIXES:
            raise ValidationError(not_settleable(record_id, kind.value))

        return self.store.create_record(
            user_id=user_id,
            kind=RecordKind.PLAIN.value,
            flow=FIXED_FLOWS[kind].value,
            amount=record.amount,
            recurrence=Recurrence(
                is_recurring=False,
                start=Until(date=settled_on, month_only=month_only),
                end=INDEFINITE,
            ),
            description=f"{SETTLEMENT_PREFIXES[kind]}: {record.description}",
            category=record.category,
            account_id=record.account_id,
        )

    def transfer(
        self,
        user_id: str,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
        on_date: date,
        description: str = "",
        month_only: bool = False,
    ) -> tuple[int, int]:
        """Move money between two accounts.

        Creates a plain expense on the source account and a plain income on
        the destination account.

        Returns:
            Tuple of (expense record ID, income record ID)

        Raises:
            ValidationError: If the accounts match or the amount is not positive
            NotFoundError: If either account doesn't exist
        """
        if from_account_id == to_account_id:
            raise ValidationError(transfer_same_account(from_account_id))
        if amount <= 0:
            raise ValidationError("Transfer amount must be positive")
        self._require_account(user_id, from_account_id)
        self._require_account(user_id, to_account_id)

        label = f"Transfer: {description.strip() or 'Transfer'}"
        recurrence = Recurrence(
            is_recurring=False,
            start=Until(date=on_date, month_only=month_only),
            end=INDEFINITE,
        )
        expense_id, income_id = self.store.create_records(
            user_id,
            [
                dict(
                    kind=RecordKind.PLAIN.value,
                    flow=flow.value,
                    amount=amount,
                    recurrence=recurrence,
                    description=label,
                    account_id=account_id,
                )
                for account_id, flow in (
                    (from_account_id, FlowType.EXPENSE),
                    (to_account_id, FlowType.INCOME),
                )
            ],
        )
        return expense_id, income_id
