"""Record management commands."""

import click
from saldo.cli.account_resolution import resolve_account_or_exit
from saldo.cli.error_handling import exit_with_error, handle_domain_error, handle_input_error
from saldo.domain.account import AccountService
from saldo.domain.entities import CREDIT_PROBABILITIES, FlowType, RecordKind, Until
from saldo.domain.errors import DomainError, record_not_found
from saldo.domain.record import RecordService
from saldo.utils.amount_parser import parse_amount
from saldo.utils.date_parser import parse_date, parse_date_config, parse_month

KIND_CHOICES = [kind.value for kind in RecordKind]
FLOW_CHOICES = [flow.value for flow in FlowType]
PROBABILITY_CHOICES = [str(p) for p in CREDIT_PROBABILITIES]


def _format_bound(bound) -> str:
    if not isinstance(bound, Until):
        return "indefinite"
    if bound.month_only:
        return bound.date.strftime("%Y-%m")
    return bound.date.isoformat()


def _format_when(record) -> str:
    recurrence = record.recurrence
    if recurrence.is_recurring:
        return f"monthly {_format_bound(recurrence.start)} .. {_format_bound(recurrence.end)}"
    if isinstance(record.execution_date, Until):
        return f"due {_format_bound(record.execution_date)}"
    return _format_bound(recurrence.start)


@click.group()
def record_group():
    """Manage records."""
    pass


@record_group.command("add")
@click.option("--kind", type=click.Choice(KIND_CHOICES), default="plain", show_default=True)
@click.option("--flow", type=click.Choice(FLOW_CHOICES), help="Required for plain records")
@click.option("--amount", required=True, help="Nominal amount (e.g., 19.99 or 1.234,56)")
@click.option("--date", "on_date", help="Date of a one-time record, or recurrence start (YYYY-MM-DD or YYYY-MM)")
@click.option("--recurring", is_flag=True, help="Repeat the record every month")
@click.option("--end", help="Recurrence end (YYYY-MM-DD or YYYY-MM), indefinite if omitted")
@click.option("--due", help="Execution date of a one-time debt, credit, investment or commitment")
@click.option("--month-only", is_flag=True, help="Dates cover their whole month")
@click.option("--probability", type=click.Choice(PROBABILITY_CHOICES), help="Collection probability of a credit, in percent")
@click.option("--account", help="Account label, kind or ID")
@click.option("--description", default="", help="Record description")
@click.option("--category", help="Category label")
@click.pass_context
def add_record(
    ctx,
    kind: str,
    flow: str | None,
    amount: str,
    on_date: str | None,
    recurring: bool,
    end: str | None,
    due: str | None,
    month_only: bool,
    probability: str | None,
    account: str | None,
    description: str,
    category: str | None,
):
    """Add a record.

    Examples:
        saldo record add --flow income --amount 2500 --date 2024-01 --recurring --description Salary
        saldo record add --kind debt --amount 200 --date today --due 2024-06-15
        saldo record add --kind credit --amount 1000 --date today --probability 30
    """
    store = ctx.obj["store"]
    user_id = ctx.obj["user_id"]
    record_service = RecordService(store)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(store), account)

    try:
        record_amount = parse_amount(amount)
        start_date = parse_date_config(on_date, month_only=month_only)
        end_date = parse_date_config(end, month_only=month_only)
        execution_date = parse_date_config(due, month_only=month_only) if due else None
    except ValueError as e:
        handle_input_error(ctx, "input", e)

    try:
        record_id = record_service.create_record(
            user_id=user_id,
            kind=kind,
            amount=record_amount,
            flow=flow,
            is_recurring=recurring,
            start_date=start_date,
            end_date=end_date,
            execution_date=execution_date,
            description=description,
            category=category,
            account_id=account_id,
            probability=int(probability) if probability else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    created = record_service.get_record(user_id, record_id)
    click.echo(f"Created {created.kind} record {record_id}")
    click.echo(f"  Amount: {created.amount:,.2f} ({created.flow})")
    click.echo(f"  When: {_format_when(created)}")
    if description:
        click.echo(f"  Description: {description}")


@record_group.command("list")
@click.option("--kind", type=click.Choice(KIND_CHOICES), help="Only records of this kind")
@click.option("--month", help="Only records active in this month (YYYY-MM)")
@click.pass_context
def list_records(ctx, kind: str | None, month: str | None):
    """List records."""
    service = RecordService(ctx.obj["store"])

    target_month = None
    if month is not None:
        try:
            target_month = parse_month(month)
        except ValueError as e:
            handle_input_error(ctx, "month", e)

    records = service.list_records(ctx.obj["user_id"], kind=kind, target_month=target_month)
    if not records:
        click.echo("No records found.")
        return

    click.echo(f"\n{'ID':>4}  {'Kind':<10} {'Flow':<7} {'Amount':>12}  {'When':<30} Description")
    click.echo("-" * 90)
    for rec in records:
        probability = f" ({rec.probability}%)" if rec.probability is not None else ""
        click.echo(
            f"{rec.id:>4}  {rec.kind:<10} {rec.flow:<7} {rec.amount:>12,.2f}  "
            f"{_format_when(rec):<30} {rec.description}{probability}"
        )
    click.echo(f"\nTotal: {len(records)} record{'s' if len(records) != 1 else ''}")


@record_group.command("delete")
@click.argument("record_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_record(ctx, record_id: int, yes: bool):
    """Delete a record."""
    service = RecordService(ctx.obj["store"])
    user_id = ctx.obj["user_id"]

    record = service.get_record(user_id, record_id)
    if record is None:
        exit_with_error(ctx, record_not_found(record_id))

    if not yes and not click.confirm(f"Delete record {record_id} ({record.description or record.kind})?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_record(user_id, record_id)
    click.echo(f"Deleted record {record_id}")


@record_group.command("settle")
@click.argument("record_id", type=int)
@click.option("--date", "on_date", default="today", show_default=True, help="Settlement date")
@click.option("--month-only", is_flag=True, help="Settlement date covers its whole month")
@click.pass_context
def settle_record(ctx, record_id: int, on_date: str, month_only: bool):
    """Record the payment of a debt or the collection of a credit.

    Examples:
        saldo record settle 3
        saldo record settle 4 --date 2024-07-01
    """
    service = RecordService(ctx.obj["store"])

    try:
        settled_on = parse_date(on_date)
    except ValueError as e:
        handle_input_error(ctx, "date", e)

    try:
        new_id = service.settle_record(
            ctx.obj["user_id"], record_id, settled_on, month_only=month_only
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Settled record {record_id} with record {new_id}")


@record_group.command("transfer")
@click.option("--from", "from_account", required=True, help="Source account label, kind or ID")
@click.option("--to", "to_account", required=True, help="Destination account label, kind or ID")
@click.option("--amount", required=True, help="Amount to move")
@click.option("--date", "on_date", default="today", show_default=True, help="Transfer date")
@click.option("--description", default="", help="Transfer description")
@click.pass_context
def transfer(ctx, from_account: str, to_account: str, amount: str, on_date: str, description: str):
    """Move money between two accounts.

    Examples:
        saldo record transfer --from main --to "Holidays" --amount 100
    """
    store = ctx.obj["store"]
    account_service = AccountService(store)
    from_id = resolve_account_or_exit(ctx, account_service, from_account)
    to_id = resolve_account_or_exit(ctx, account_service, to_account)

    try:
        transfer_amount = parse_amount(amount)
        transfer_date = parse_date(on_date)
    except ValueError as e:
        handle_input_error(ctx, "input", e)

    try:
        expense_id, income_id = RecordService(store).transfer(
            ctx.obj["user_id"],
            from_id,
            to_id,
            transfer_amount,
            transfer_date,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transferred {transfer_amount:,.2f} (records {expense_id} and {income_id})")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(record_group, name="record")
