"""Monthly payment CLI commands."""

from __future__ import annotations

import click

from fintrack.cli.common import (
    build_record,
    delete_record,
    echo_records,
    edit_record,
    get_client,
    parse_amount_option,
)
from fintrack.exceptions import DuplicateError
from fintrack.models import MonthlyPayment

KIND = "payments"


@click.group()
def payment() -> None:
    """Monthly payment commands."""


@payment.command("add")
@click.option("--name", required=True, help="Payment name (e.g., Rent).")
@click.option("--amount", "amount_value", required=True, help="Amount per month.")
@click.option("--currency", required=True, help="Currency code.")
@click.option("--id", "record_id", default=None, help="Explicit record id.")
@click.pass_context
def add_payment(
    ctx: click.Context,
    name: str,
    amount_value: str,
    currency: str,
    record_id: str | None,
) -> None:
    """Add a monthly payment."""
    fields = {"name": name, "amount": parse_amount_option(amount_value, "--amount"), "currency": currency}
    if record_id:
        fields["id"] = record_id
    record = build_record(MonthlyPayment, "Payment add", **fields)
    client = get_client(ctx)
    try:
        client.add_record(KIND, record)
    except DuplicateError as exc:
        raise click.ClickException(f"Payment add failed: id {record.id!r} already exists.") from exc
    click.echo(f"Added payment {record.id}")


@payment.command("list")
@click.pass_context
def list_payments(ctx: click.Context) -> None:
    """List monthly payments."""
    echo_records(get_client(ctx).list_records(KIND), "No monthly payments found.")


@payment.command("delete")
@click.argument("record_id")
@click.confirmation_option(prompt="Delete this payment?")
@click.pass_context
def delete_payment(ctx: click.Context, record_id: str) -> None:
    """Delete a monthly payment by id."""
    delete_record(ctx, KIND, record_id, "payment")


@payment.command("edit")
@click.argument("record_id")
@click.option("--name", default=None, help="New name.")
@click.option("--amount", "amount_value", default=None, help="Amount per month.")
@click.option("--currency", default=None, help="New currency code.")
@click.pass_context
def edit_payment(
    ctx: click.Context,
    record_id: str,
    name: str | None,
    amount_value: str | None,
    currency: str | None,
) -> None:
    """Change fields of an existing payment record."""
    edit_record(
        ctx,
        KIND,
        record_id,
        "Payment",
        "--amount",
        name=name,
        amount=amount_value,
        currency=currency,
    )
