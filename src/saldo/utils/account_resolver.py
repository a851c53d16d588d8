"""Utility for resolving account labels to IDs."""

from saldo.domain.account import AccountService


def resolve_account(account_service: AccountService, user_id: str, account: str | int) -> int:
    """Resolve an account reference to an account ID.

    The reference can be an ID, a label, or the kind of a single-instance
    account ("main" or "card").

    Args:
        account_service: AccountService instance
        user_id: Owner of the account
        account: Account ID, label or kind

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(user_id, account) is None:
            raise ValueError(f"Account ID {account} not found")
        return account

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        pass
    else:
        if account_service.get_account(user_id, account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    accounts = account_service.list_accounts(user_id)
    for acc in accounts:
        if acc.label == account:
            return acc.id

    by_kind = [acc for acc in accounts if acc.kind == account]
    if len(by_kind) == 1:
        return by_kind[0].id

    raise ValueError(f"Account '{account}' not found")
