"""Domain model entities for saldo.

These are pure data classes representing business concepts, independent of
database schema. Date configuration coming from storage or user input is
normalized into ``Bound`` values before it reaches any record, so the
computation core never sees the raw indefinite flag.
"""

from dataclasses import dataclass, field
import datetime as dt
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class RecordKind(str, Enum):
    """Semantic category of a financial record."""

    PLAIN = "plain"
    DEBT = "debt"
    CREDIT = "credit"
    INVESTMENT = "investment"
    COMMITMENT = "commitment"


class FlowType(str, Enum):
    """Direction of value for a record."""

    INCOME = "income"
    EXPENSE = "expense"


class AccountKind(str, Enum):
    """Kind of account a record can be attached to."""

    MAIN = "main"
    CARD = "card"
    PIGGYBANK = "piggybank"


class PeriodStatus(str, Enum):
    """Whether a month is projected, in progress or already closed."""

    FORECAST = "forecast"
    CURRENT = "current"
    ACTUAL = "actual"


# Allowed credit probabilities, in percent
CREDIT_PROBABILITIES = (30, 50, 70, 100)
DEFAULT_PROBABILITY = 100

# Kinds whose direction is fixed regardless of user input
FIXED_FLOWS = {
    RecordKind.DEBT: FlowType.EXPENSE,
    RecordKind.CREDIT: FlowType.INCOME,
    RecordKind.INVESTMENT: FlowType.EXPENSE,
    RecordKind.COMMITMENT: FlowType.EXPENSE,
}


@dataclass(frozen=True)
class DateConfig:
    """Raw date configuration as stored or entered.

    Only used at the edges; see ``saldo.domain.window.normalize_date_config``.
    """

    is_month_only: bool = False
    date: Optional[dt.date] = None
    is_indefinite: bool = False


@dataclass(frozen=True)
class Indefinite:
    """Open side of a date window."""


INDEFINITE = Indefinite()


@dataclass(frozen=True)
class Until:
    """Concrete side of a date window.

    When ``month_only`` is set the date stands for its whole calendar month.
    """

    date: date
    month_only: bool = False


Bound = Union[Indefinite, Until]


@dataclass(frozen=True)
class Recurrence:
    """Monthly recurrence window of a record.

    For one-time records ``start`` holds the single occurrence date and
    ``end`` is ignored for membership.
    """

    is_recurring: bool
    start: Bound = INDEFINITE
    end: Bound = INDEFINITE


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    user_id: str
    label: str
    kind: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Record:
    """Financial record domain entity.

    ``kind`` is kept as text so that records with an unknown kind can still be
    loaded; the classifier rejects them at aggregation time.
    """

    id: int
    kind: str
    flow: str
    amount: Decimal
    recurrence: Recurrence
    description: str = ""
    category: Optional[str] = None
    account_id: Optional[int] = None
    execution_date: Bound = INDEFINITE
    probability: Optional[int] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Policy:
    """Toggles that change how totals are computed."""

    use_probabilistic: bool = False
    include_commitments: bool = True


@dataclass(frozen=True)
class PeriodTotals:
    """Totals of the records active in one month.

    ``income`` and ``expense`` only cover non-recurring plain records; the
    recurring ones are tracked separately.
    """

    month: date
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    recurring_income: Decimal = Decimal("0")
    recurring_expense: Decimal = Decimal("0")
    debts: Decimal = Decimal("0")
    credits: Decimal = Decimal("0")
    investments: Decimal = Decimal("0")
    commitments: Decimal = Decimal("0")
    transaction_count: int = 0
    skipped_count: int = 0

    @property
    def total_income(self) -> Decimal:
        return self.income + self.recurring_income

    @property
    def total_expense(self) -> Decimal:
        return self.expense + self.recurring_expense

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class LifetimeTotals:
    """Totals over the whole history, independent of any month."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    credits: Decimal = Decimal("0")
    debts: Decimal = Decimal("0")
    investments: Decimal = Decimal("0")
    commitments: Decimal = Decimal("0")
    record_count: int = 0
    skipped_count: int = 0


@dataclass(frozen=True)
class BalanceSheet:
    """Assets, liabilities and net worth for a month plus the lifetime view."""

    month: date
    status: PeriodStatus
    assets: Decimal
    liabilities: Decimal
    net_worth: Decimal
    liquid_assets: Decimal
    total_credits: Decimal
    total_debts: Decimal
    total_commitments: Decimal
    net_worth_total: Decimal
    policy: Policy = field(default_factory=Policy)


@dataclass(frozen=True)
class AccountBalance:
    """Running balance of the plain records attached to one account."""

    account_id: int
    income: Decimal
    expense: Decimal
    transaction_count: int

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense
