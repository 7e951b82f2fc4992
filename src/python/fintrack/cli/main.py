"""fintrack CLI entry point."""

from __future__ import annotations

from pathlib import Path

import click

from fintrack.__version__ import __version__
from fintrack.cli.account import account
from fintrack.cli.currency import currency
from fintrack.cli.expense import expense
from fintrack.cli.income import income
from fintrack.cli.payment import payment
from fintrack.cli.summary import summary


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fintrack")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to the fintrack config file.",
)
@click.option("--offline", is_flag=True, help="Do not fetch exchange rates.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, offline: bool) -> None:
    """fintrack CLI entry point."""
    ctx.obj = {
        "config_path": config_path,
        "offline": offline,
    }


main.add_command(account)
main.add_command(income)
main.add_command(payment)
main.add_command(expense)
main.add_command(currency)
main.add_command(summary)


if __name__ == "__main__":
    main()
