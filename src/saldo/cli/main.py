"""Main CLI entry point."""

import logging

import click
from saldo.database.factories import create_sqlite_store
from saldo.domain.account import AccountService

# Import and register all commands at module level
from saldo.cli.commands import account, record, balance


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SALDO_DB_PATH environment variable)",
    envvar="SALDO_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="default",
    show_default=True,
    help="User whose records are used (overrides SALDO_USER environment variable)",
    envvar="SALDO_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Show diagnostic messages")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, verbose: bool):
    """Saldo - Personal finance tracking.

    Record income, expenses, debts, credits, investments and commitments on
    your accounts and piggy banks, then look at the balance of any month,
    past or future.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        AccountService(store).ensure_default_accounts(user_id)
        ctx.obj["store"] = store
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(store.disconnect)


# Register all commands
account.register_commands(cli)
record.register_commands(cli)
balance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
