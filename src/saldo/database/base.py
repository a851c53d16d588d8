"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from saldo.domain.entities import (
    Account,
    Bound,
    INDEFINITE,
    Record,
    Recurrence,
)


class RecordStore(ABC):
    """Abstract store for the accounts and records of each user."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: str, label: str, kind: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, user_id: str, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str, kind: Optional[str] = None) -> list[Account]:
        """List accounts of a user, optionally filtered by kind."""
        pass

    @abstractmethod
    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete an account. Records referencing it are left untouched."""
        pass

    # Record operations
    @abstractmethod
    def create_record(
        self,
        user_id: str,
        kind: str,
        flow: str,
        amount: Decimal,
        recurrence: Recurrence,
        description: str = "",
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        execution_date: Bound = INDEFINITE,
        probability: Optional[int] = None,
    ) -> int:
        """Create a record. Returns record ID."""
        pass

    @abstractmethod
    def create_records(self, user_id: str, records: list[dict]) -> list[int]:
        """Create several records in one transaction.

        Each item holds the keyword arguments of create_record. Either all
        records are stored or none.
        """
        pass

    @abstractmethod
    def get_record(self, user_id: str, record_id: int) -> Optional[Record]:
        """Get record by ID."""
        pass

    @abstractmethod
    def list_records(self, user_id: str, kind: Optional[str] = None) -> list[Record]:
        """List records of a user, optionally filtered by kind."""
        pass

    @abstractmethod
    def update_record(self, user_id: str, record_id: int, **fields) -> None:
        """Update record fields. Unknown field names raise ValueError."""
        pass

    @abstractmethod
    def delete_record(self, user_id: str, record_id: int) -> None:
        """Delete a record."""
        pass

    @abstractmethod
    def get_account_record_count(self, user_id: str, account_id: int) -> int:
        """Get count of records referencing an account."""
        pass
