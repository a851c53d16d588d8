"""Record classification and amount contribution rules."""

from datetime import date
from decimal import Decimal
from typing import Optional

from saldo.domain.entities import (
    CREDIT_PROBABILITIES,
    DEFAULT_PROBABILITY,
    FlowType,
    Policy,
    Record,
    RecordKind,
)
from saldo.domain.errors import MalformedRecordError, unknown_kind
from saldo.domain.projection import remaining_months
from saldo.domain.window import occurrence_date

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def classify(record: Record) -> RecordKind:
    """Return the kind of a record after checking its classification fields.

    Raises:
        MalformedRecordError: If the kind is unknown, a plain record has no
            valid flow, a credit probability is not allowed or a one-time
            record carries no date at all
    """
    try:
        kind = RecordKind(record.kind)
    except ValueError:
        raise MalformedRecordError(unknown_kind(record.kind)) from None

    if kind is RecordKind.PLAIN:
        try:
            FlowType(record.flow)
        except ValueError:
            raise MalformedRecordError(
                f"Record {record.id} has unknown flow '{record.flow}'"
            ) from None

    if kind is RecordKind.CREDIT and record.probability is not None:
        if record.probability not in CREDIT_PROBABILITIES:
            raise MalformedRecordError(
                f"Record {record.id} has probability {record.probability}, "
                f"expected one of {', '.join(str(p) for p in CREDIT_PROBABILITIES)}"
            )

    if not record.recurrence.is_recurring and occurrence_date(record) is None:
        raise MalformedRecordError(f"One-time record {record.id} has no date")

    return kind


def effective_probability(record: Record) -> int:
    """Probability of a credit in percent, 100 when not set."""
    if record.probability is None:
        return DEFAULT_PROBABILITY
    return record.probability


def contribution_amount(
    record: Record,
    policy: Policy,
    lifetime: bool = False,
    today: Optional[date] = None,
) -> Decimal:
    """Compute how much a record adds to its total.

    The stored amount is never modified; weighting and scaling happen here.

    Args:
        record: Record to evaluate
        policy: Aggregation toggles
        lifetime: If True, scale debts by their remaining installments
        today: Reference date for the remaining installments

    Returns:
        Unsigned contribution; the sign follows from the record flow

    Raises:
        MalformedRecordError: If the record cannot be classified
    """
    kind = classify(record)

    if kind is RecordKind.CREDIT:
        if policy.use_probabilistic:
            return record.amount * effective_probability(record) / HUNDRED
        return record.amount

    if kind is RecordKind.DEBT:
        if lifetime:
            return record.amount * remaining_months(record, today=today)
        return record.amount

    if kind is RecordKind.COMMITMENT and not policy.include_commitments:
        return ZERO

    return record.amount
