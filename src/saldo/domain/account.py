"""Account domain service."""

import logging
from typing import Optional

from saldo.database.base import RecordStore
from saldo.domain.aggregation import summarize_account
from saldo.domain.entities import Account as AccountEntity, AccountBalance, AccountKind
from saldo.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_account_label,
)

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS = (
    (AccountKind.MAIN, "Main account"),
    (AccountKind.CARD, "Credit card"),
)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, store: RecordStore):
        """Initialize account service.

        Args:
            store: Record store instance
        """
        self.store = store

    def ensure_default_accounts(self, user_id: str) -> list[int]:
        """Create the main and card accounts a user is missing.

        Meant to run once per user when the store is opened.

        Args:
            user_id: Owner of the accounts

        Returns:
            IDs of the accounts created (empty when nothing was missing)
        """
        existing_kinds = {acc.kind for acc in self.store.list_accounts(user_id)}
        created = []
        for kind, label in DEFAULT_ACCOUNTS:
            if kind.value in existing_kinds:
                continue
            account_id = self.store.create_account(
                user_id=user_id, label=label, kind=kind.value
            )
            logger.info("Created default %s account %s for user %s", kind.value, account_id, user_id)
            created.append(account_id)
        return created

    def create_piggy_bank(self, user_id: str, label: str) -> int:
        """Create a new piggy bank account.

        Args:
            user_id: Owner of the account
            label: Account label

        Returns:
            Account ID

        Raises:
            ValidationError: If the label is blank
            ConflictError: If the label is already used by the user
        """
        label = label.strip()
        if not label:
            raise ValidationError("Account label cannot be empty")

        for acc in self.store.list_accounts(user_id):
            if acc.label == label:
                raise ConflictError(duplicate_account_label(label))

        return self.store.create_account(
            user_id=user_id, label=label, kind=AccountKind.PIGGYBANK.value
        )

    def get_account(self, user_id: str, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            user_id: Owner of the account
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.store.get_account(user_id, account_id)

    def list_accounts(self, user_id: str, kind: Optional[str] = None) -> list[AccountEntity]:
        """List the accounts of a user.

        Args:
            user_id: Owner of the accounts
            kind: Optional account kind filter

        Returns:
            List of account entities
        """
        return self.store.list_accounts(user_id, kind=kind)

    def delete_account(self, user_id: str, account_id: int) -> int:
        """Delete an account.

        Records attached to the account are kept and keep pointing at the
        deleted ID.

        Args:
            user_id: Owner of the account
            account_id: Account ID to delete

        Returns:
            Number of records left without an account

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.store.get_account(user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        orphaned = self.store.get_account_record_count(user_id, account_id)
        self.store.delete_account(user_id, account_id)
        if orphaned:
            logger.info(
                "Deleted account %s, %d record(s) keep the stale reference",
                account_id,
                orphaned,
            )
        return orphaned

    def piggy_bank_balances(self, user_id: str) -> list[tuple[AccountEntity, AccountBalance]]:
        """Balance of every piggy bank of a user.

        Args:
            user_id: Owner of the accounts

        Returns:
            List of (account, balance) pairs in creation order
        """
        records = self.store.list_records(user_id)
        return [
            (account, summarize_account(records, account.id))
            for account in self.store.list_accounts(
                user_id, kind=AccountKind.PIGGYBANK.value
            )
        ]
