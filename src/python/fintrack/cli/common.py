"""Shared CLI helpers."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Awaitable, TypeVar

import click

from fintrack.client import FinanceClient
from fintrack.config import FintrackConfig
from fintrack.exceptions import NotFoundError
from fintrack.models import AnyRecord, parse_amount

T = TypeVar("T")


def parse_amount_option(value: str, field_name: str) -> float:
    """Parse a user-entered amount into a float."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise click.BadParameter("Use a valid numeric amount.", param_hint=field_name) from exc


def build_record(record_type: type, label: str, **fields: Any) -> AnyRecord:
    """Construct a record, turning validation errors into CLI errors."""
    try:
        return record_type(**fields)
    except ValueError as exc:
        raise click.ClickException(f"{label}: {exc}") from exc


def run(awaitable: Awaitable[T]) -> T:
    return asyncio.run(awaitable)


def get_client(ctx: click.Context) -> FinanceClient:
    """Build a client from Click context."""
    payload = ctx.obj or {}
    try:
        config = FintrackConfig.load(payload.get("config_path"))
    except ValueError as exc:
        raise click.ClickException(f"Invalid config: {exc}") from exc
    return FinanceClient(config)


def echo_records(records: tuple[AnyRecord, ...], empty_message: str) -> None:
    """Print records as a fixed-width table."""
    if not records:
        click.echo(empty_message)
        return
    has_category = any(hasattr(record, "category") for record in records)
    header = f"{'Id':<34} {'Name':<25} {'Amount':>15} {'Currency':<10}"
    if has_category:
        header += f" {'Category':<20}"
    click.echo("-" * len(header))
    click.echo(header)
    click.echo("-" * len(header))
    for record in records:
        line = f"{record.id:<34} {record.name:<25} {record.amount:>15.2f} {record.currency:<10}"
        if has_category:
            line += f" {getattr(record, 'category', ''):<20}"
        click.echo(line)
    click.echo("-" * len(header))


def delete_record(ctx: click.Context, kind: str, record_id: str, label: str) -> None:
    client = get_client(ctx)
    try:
        client.delete_record(kind, record_id)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Deleted {label} {record_id}")


def edit_record(
    ctx: click.Context,
    kind: str,
    record_id: str,
    label: str,
    amount_option: str,
    **changes: Any,
) -> None:
    """Apply the given field changes to a stored record.

    ``None`` values mean "keep the current value". The amount arrives as
    text and is parsed here.
    """
    updates = {name: value for name, value in changes.items() if value is not None}
    if not updates:
        raise click.UsageError(f"{label} edit: provide at least one field to change.")
    if "amount" in updates:
        updates["amount"] = parse_amount_option(updates["amount"], amount_option)
    client = get_client(ctx)
    try:
        current = client.get_record(kind, record_id)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    try:
        record = dataclasses.replace(current, **updates)
    except ValueError as exc:
        raise click.ClickException(f"{label} edit: {exc}") from exc
    client.update_record(kind, record)
    click.echo(f"Updated {label.lower()} {record_id}")
