"""Account management commands."""

import click
from saldo.cli.account_resolution import resolve_account_or_exit
from saldo.cli.error_handling import handle_domain_error
from saldo.domain.account import AccountService
from saldo.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts and piggy banks."""
    pass


@account_group.command("create")
@click.argument("label", metavar="LABEL")
@click.pass_context
def create_account(ctx, label: str):
    """Create a new piggy bank.

    The main account and the credit card are created automatically.

    Examples:
        saldo account create "Holidays"
        saldo account create "Emergency fund"
    """
    service = AccountService(ctx.obj["store"])

    try:
        account_id = service.create_piggy_bank(ctx.obj["user_id"], label)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created piggy bank '{label.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    service = AccountService(ctx.obj["store"])

    accounts = service.list_accounts(ctx.obj["user_id"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.label:25s} | Kind: {acc.kind}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account label, kind or ID.

    Records attached to the account are kept; they simply no longer point
    to an existing account.

    Examples:
        saldo account delete "Holidays"
        saldo account delete 3 --yes
    """
    service = AccountService(ctx.obj["store"])
    user_id = ctx.obj["user_id"]

    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(user_id, account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.label}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        orphaned = service.delete_account(user_id, account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.label}'")
    if orphaned:
        click.echo(
            f"{orphaned} record{'s' if orphaned != 1 else ''} still reference the deleted account"
        )


@account_group.command("balances")
@click.pass_context
def piggy_bank_balances(ctx) -> None:
    """Show the balance of every piggy bank."""
    service = AccountService(ctx.obj["store"])

    balances = service.piggy_bank_balances(ctx.obj["user_id"])
    if not balances:
        click.echo("No piggy banks found.")
        return

    total = sum(balance.balance for _, balance in balances)
    click.echo(f"\n{'Piggy bank':<25} {'Income':>12} {'Expense':>12} {'Balance':>12}")
    click.echo("-" * 64)
    for acc, balance in balances:
        click.echo(
            f"{acc.label:<25} {balance.income:>12,.2f} {balance.expense:>12,.2f} "
            f"{balance.balance:>12,.2f}"
        )
    click.echo("-" * 64)
    click.echo(f"{'Total':<25} {'':>12} {'':>12} {total:>12,.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
