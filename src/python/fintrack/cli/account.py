"""Account CLI commands."""

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
from fintrack.models import Account

KIND = "accounts"


@click.group()
def account() -> None:
    """Account commands."""


@account.command("add")
@click.option("--name", required=True, help="Account name.")
@click.option("--balance", "balance_value", required=True, help="Balance; negative for debt.")
@click.option("--currency", required=True, help="Currency code (e.g., RUB, USD).")
@click.option("--id", "record_id", default=None, help="Explicit record id.")
@click.pass_context
def add_account(
    ctx: click.Context,
    name: str,
    balance_value: str,
    currency: str,
    record_id: str | None,
) -> None:
    """Add an account.

    Examples:
        fintrack account add --name Cash --balance 10000 --currency RUB
        fintrack account add --name "Credit card" --balance -250 --currency USD
    """
    fields = {"name": name, "amount": parse_amount_option(balance_value, "--balance"), "currency": currency}
    if record_id:
        fields["id"] = record_id
    record = build_record(Account, "Account add", **fields)
    client = get_client(ctx)
    try:
        client.add_record(KIND, record)
    except DuplicateError as exc:
        raise click.ClickException(f"Account add failed: id {record.id!r} already exists.") from exc
    click.echo(f"Added account {record.id}")


@account.command("list")
@click.option("--currency", default=None, help="Filter by currency code.")
@click.pass_context
def list_accounts(ctx: click.Context, currency: str | None) -> None:
    """List accounts with their balances."""
    records = get_client(ctx).list_records(KIND)
    if currency:
        records = tuple(r for r in records if r.currency == currency.upper())
    echo_records(records, "No accounts found.")


@account.command("delete")
@click.argument("record_id")
@click.confirmation_option(prompt="Delete this account?")
@click.pass_context
def delete_account(ctx: click.Context, record_id: str) -> None:
    """Delete an account by id."""
    delete_record(ctx, KIND, record_id, "account")


@account.command("edit")
@click.argument("record_id")
@click.option("--name", default=None, help="New name.")
@click.option("--balance", "amount_value", default=None, help="Balance; negative for debt.")
@click.option("--currency", default=None, help="New currency code.")
@click.pass_context
def edit_account(
    ctx: click.Context,
    record_id: str,
    name: str | None,
    amount_value: str | None,
    currency: str | None,
) -> None:
    """Change fields of an existing account record."""
    edit_record(
        ctx,
        KIND,
        record_id,
        "Account",
        "--balance",
        name=name,
        amount=amount_value,
        currency=currency,
    )
