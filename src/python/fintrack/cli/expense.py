"""Expense CLI commands."""

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
from fintrack.conversion import group_by_category
from fintrack.exceptions import DuplicateError
from fintrack.models import Expense

KIND = "expenses"


@click.group()
def expense() -> None:
    """Expense commands."""


@expense.command("add")
@click.option("--name", required=True, help="Expense name.")
@click.option("--amount", "amount_value", required=True, help="Expense amount.")
@click.option("--currency", required=True, help="Currency code.")
@click.option("--category", default="", help="Expense category.")
@click.option("--id", "record_id", default=None, help="Explicit record id.")
@click.pass_context
def add_expense(
    ctx: click.Context,
    name: str,
    amount_value: str,
    currency: str,
    category: str,
    record_id: str | None,
) -> None:
    """Add an expense.

    Examples:
        fintrack expense add --name Groceries --amount 2500 --currency RUB --category Food
    """
    fields = {
        "name": name,
        "amount": parse_amount_option(amount_value, "--amount"),
        "currency": currency,
        "category": category,
    }
    if record_id:
        fields["id"] = record_id
    record = build_record(Expense, "Expense add", **fields)
    client = get_client(ctx)
    try:
        client.add_record(KIND, record)
    except DuplicateError as exc:
        raise click.ClickException(f"Expense add failed: id {record.id!r} already exists.") from exc
    click.echo(f"Added expense {record.id}")


@expense.command("list")
@click.option("--by-category", is_flag=True, help="Group expenses by category.")
@click.pass_context
def list_expenses(ctx: click.Context, by_category: bool) -> None:
    """List expenses, optionally grouped by category."""
    records = get_client(ctx).list_records(KIND)
    if not by_category:
        echo_records(records, "No expenses found.")
        return
    if not records:
        click.echo("No expenses found.")
        return
    for category, items in group_by_category(records).items():
        click.echo(f"\n{category}:")
        echo_records(tuple(items), "")


@expense.command("delete")
@click.argument("record_id")
@click.confirmation_option(prompt="Delete this expense?")
@click.pass_context
def delete_expense(ctx: click.Context, record_id: str) -> None:
    """Delete an expense by id."""
    delete_record(ctx, KIND, record_id, "expense")


@expense.command("edit")
@click.argument("record_id")
@click.option("--name", default=None, help="New name.")
@click.option("--amount", "amount_value", default=None, help="Expense amount.")
@click.option("--currency", default=None, help="New currency code.")
@click.option("--category", default=None, help="New category; pass an empty string to clear it.")
@click.pass_context
def edit_expense(
    ctx: click.Context,
    record_id: str,
    name: str | None,
    amount_value: str | None,
    currency: str | None,
    category: str | None,
) -> None:
    """Change fields of an existing expense record."""
    edit_record(
        ctx,
        KIND,
        record_id,
        "Expense",
        "--amount",
        name=name,
        amount=amount_value,
        currency=currency,
        category=category,
    )
