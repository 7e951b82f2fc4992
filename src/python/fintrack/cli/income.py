"""Income source CLI commands."""

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
from fintrack.models import IncomeSource

KIND = "income"


@click.group()
def income() -> None:
    """Income source commands."""


@income.command("add")
@click.option("--name", required=True, help="Income source name.")
@click.option("--amount", "amount_value", required=True, help="Amount per month.")
@click.option("--currency", required=True, help="Currency code.")
@click.option("--id", "record_id", default=None, help="Explicit record id.")
@click.pass_context
def add_income(
    ctx: click.Context,
    name: str,
    amount_value: str,
    currency: str,
    record_id: str | None,
) -> None:
    """Add an income source."""
    fields = {"name": name, "amount": parse_amount_option(amount_value, "--amount"), "currency": currency}
    if record_id:
        fields["id"] = record_id
    record = build_record(IncomeSource, "Income add", **fields)
    client = get_client(ctx)
    try:
        client.add_record(KIND, record)
    except DuplicateError as exc:
        raise click.ClickException(f"Income add failed: id {record.id!r} already exists.") from exc
    click.echo(f"Added income {record.id}")


@income.command("list")
@click.pass_context
def list_income(ctx: click.Context) -> None:
    """List income sources."""
    echo_records(get_client(ctx).list_records(KIND), "No income sources found.")


@income.command("delete")
@click.argument("record_id")
@click.confirmation_option(prompt="Delete this income source?")
@click.pass_context
def delete_income(ctx: click.Context, record_id: str) -> None:
    """Delete an income source by id."""
    delete_record(ctx, KIND, record_id, "income")


@income.command("edit")
@click.argument("record_id")
@click.option("--name", default=None, help="New name.")
@click.option("--amount", "amount_value", default=None, help="Amount per month.")
@click.option("--currency", default=None, help="New currency code.")
@click.pass_context
def edit_income(
    ctx: click.Context,
    record_id: str,
    name: str | None,
    amount_value: str | None,
    currency: str | None,
) -> None:
    """Change fields of an existing income record."""
    edit_record(
        ctx,
        KIND,
        record_id,
        "Income",
        "--amount",
        name=name,
        amount=amount_value,
        currency=currency,
    )
