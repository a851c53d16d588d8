"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ConfigurationError(DomainError):
    """Structurally invalid call, such as a missing target month."""


class MalformedRecordError(DomainError):
    """Record that cannot be classified and must be left out of totals."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def record_not_found(record_id: int) -> str:
    """Return message for missing record."""
    return f"Record {record_id} not found"


def duplicate_account_label(label: str) -> str:
    """Return message for an account label already in use."""
    return f"Account with label '{label}' already exists"


def unknown_kind(kind: object) -> str:
    """Return message for a record kind outside the known set."""
    return f"Unknown record kind '{kind}'"


def missing_target_month() -> str:
    """Return message for aggregation calls without a target month."""
    return "A target month is required"


def not_settleable(record_id: int, kind: str) -> str:
    """Return message when settling a record that is neither debt nor credit."""
    return f"Record {record_id} is a {kind} record; only debts and credits can be settled"


def transfer_same_account(account_id: int) -> str:
    """Return message for a transfer whose source and destination match."""
    return f"Cannot transfer from account {account_id} to itself"
