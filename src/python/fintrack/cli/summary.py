"""Summary CLI command."""

from __future__ import annotations

import click

from fintrack.cli.common import get_client, run
from fintrack.models import normalize_currency
from fintrack.settings import RateState


@click.command("summary")
@click.option(
    "--currency",
    "currency_code",
    default=None,
    help="Show totals in this currency for this run only; the saved display currency is unchanged.",
)
@click.pass_context
def summary(ctx: click.Context, currency_code: str | None) -> None:
    """Show totals for all records in one currency.

    Records in currencies without a known rate are left out of the totals,
    which are then flagged as approximate. ``--currency`` loads rates for
    that currency for this run only; use ``fintrack currency set`` to change
    the saved display currency.

    Examples:
        fintrack summary
        fintrack --offline summary --currency USD
    """
    target = None
    if currency_code:
        try:
            target = normalize_currency(currency_code)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--currency") from exc

    client = get_client(ctx)
    offline = (ctx.obj or {}).get("offline", False)
    if not offline:
        if target:
            # Not persisted: the config keeps its display currency.
            run(client.settings.set_display_currency(target))
        else:
            run(client.load_rates())
    result = client.summary(target)

    if client.settings.state is RateState.FAILED:
        click.echo(f"Warning: {client.settings.error}", err=True)

    code = result.currency
    click.echo(f"\nSummary ({code})")
    click.echo("-" * 40)
    click.echo(f"{'Accounts':<24} {result.accounts_total:>15.2f}")
    click.echo(f"{'Income':<24} {result.income_total:>15.2f}")
    click.echo(f"{'Monthly payments':<24} {result.payments_total:>15.2f}")
    click.echo(f"{'Expenses':<24} {result.expenses_total:>15.2f}")
    click.echo(f"{'Monthly balance':<24} {result.monthly_balance:>15.2f}")
    if result.expenses_by_category:
        click.echo("\nExpenses by category:")
        for category, total in result.expenses_by_category.items():
            click.echo(f"  {category:<22} {total:>15.2f}")
    click.echo("-" * 40)
    if result.is_approximate:
        click.echo(
            f"Approximate: no exchange rate for {', '.join(sorted(result.unconverted))}"
        )
