"""Balance sheet command."""

from datetime import date

import click
from saldo.cli.error_handling import handle_domain_error, handle_input_error
from saldo.domain.balance_sheet import BalanceSheetService
from saldo.domain.entities import PeriodStatus, Policy
from saldo.domain.errors import DomainError
from saldo.utils.date_parser import parse_month

STATUS_LABELS = {
    PeriodStatus.FORECAST: "forecast",
    PeriodStatus.CURRENT: "current month",
    PeriodStatus.ACTUAL: "actual",
}


def _line(label: str, amount, indent: int = 2) -> str:
    return f"{' ' * indent}{label:<30} {amount:>14,.2f}"


@click.command("balance")
@click.option("--month", default="this month", show_default=True, help="Month to show (YYYY-MM or relative like 'next month')")
@click.option("--probabilistic", is_flag=True, help="Weight credits by their collection probability")
@click.option("--exclude-commitments", is_flag=True, help="Leave commitments out of liabilities")
@click.pass_context
def show_balance(ctx, month: str, probabilistic: bool, exclude_commitments: bool):
    """Show the totals and balance sheet of a month.

    The month view includes recurring records that have not happened yet,
    so a future month is a forecast. The lifetime view is the net worth
    today, with outstanding debt installments projected forward.

    Examples:
        saldo balance
        saldo balance --month 2024-06 --probabilistic
        saldo balance --month "next month" --exclude-commitments
    """
    try:
        target_month = parse_month(month)
    except ValueError as e:
        handle_input_error(ctx, "month", e)

    policy = Policy(
        use_probabilistic=probabilistic, include_commitments=not exclude_commitments
    )
    service = BalanceSheetService(ctx.obj["store"])
    try:
        totals, _, sheet = service.build(
            ctx.obj["user_id"], target_month, policy, today=date.today()
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{target_month:%B %Y} ({STATUS_LABELS[sheet.status]})")
    click.echo("=" * 48)
    click.echo(_line("Income", totals.income))
    click.echo(_line("Recurring income", totals.recurring_income))
    click.echo(_line("Expenses", totals.expense))
    click.echo(_line("Recurring expenses", totals.recurring_expense))
    click.echo(_line("Credits", totals.credits))
    click.echo(_line("Debts", totals.debts))
    click.echo(_line("Investments", totals.investments))
    if policy.include_commitments:
        click.echo(_line("Commitments", totals.commitments))
    click.echo(f"  {totals.transaction_count} record{'s' if totals.transaction_count != 1 else ''} in this month")
    if totals.skipped_count:
        click.echo(f"  {totals.skipped_count} malformed record(s) skipped", err=True)

    click.echo("\nBalance sheet")
    click.echo("-" * 48)
    click.echo(_line("Assets", sheet.assets))
    click.echo(_line("Liabilities", sheet.liabilities))
    click.echo(_line("Net worth", sheet.net_worth))

    click.echo("\nLifetime")
    click.echo("-" * 48)
    click.echo(_line("Liquid assets", sheet.liquid_assets))
    click.echo(_line("Credits", sheet.total_credits))
    click.echo(_line("Outstanding debts", sheet.total_debts))
    if policy.include_commitments:
        click.echo(_line("Commitments", sheet.total_commitments))
    click.echo(_line("Net worth", sheet.net_worth_total))


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
