"""Display currency CLI commands."""

from __future__ import annotations

import click

from fintrack.cli.common import get_client, run
from fintrack.models import SUPPORTED_CURRENCIES
from fintrack.settings import RateState


@click.group()
def currency() -> None:
    """Display currency commands."""


@currency.command("show")
@click.pass_context
def show_currency(ctx: click.Context) -> None:
    """Show the display currency."""
    client = get_client(ctx)
    click.echo(f"Display currency: {client.display_currency}")
    click.echo(f"Common choices: {', '.join(SUPPORTED_CURRENCIES)}")


@currency.command("set")
@click.argument("code")
@click.pass_context
def set_currency(ctx: click.Context, code: str) -> None:
    """Set the display currency and load exchange rates for it.

    Examples:
        fintrack currency set USD
    """
    client = get_client(ctx)
    try:
        state = run(client.set_display_currency(code))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="CODE") from exc
    click.echo(f"Display currency set to {client.display_currency}")
    if state is RateState.FAILED:
        click.echo(f"Warning: {client.settings.error}", err=True)
    elif state is RateState.READY:
        click.echo(f"Loaded {len(client.settings.exchange_rates)} exchange rates")
