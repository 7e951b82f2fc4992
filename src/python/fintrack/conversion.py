"""Currency conversion and aggregation over monetary records.

All functions here are pure: they read records and an optional rate table
and return derived numbers. A rate table is always scoped to the target
(display) currency as its base, so ``table[X]`` is the number of ``X`` units
per one unit of the target currency and an amount in ``X`` converts to the
target as ``amount / table[X]``.

Missing rates never raise. A single conversion falls back to the unchanged
amount, while totals drop records that cannot be converted instead of
mixing unconverted currencies into one number.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Mapping, Sequence

from fintrack.models import (
    Account,
    Expense,
    IncomeSource,
    MonetaryRecord,
    MonthlyPayment,
)

UNCATEGORIZED = "Uncategorized"

RateTable = Mapping[str, float]


@dataclass(frozen=True)
class ConvertedAmount:
    """Result of converting one amount.

    ``converted`` is False when the amount is still in its original
    currency because no usable rate was available.
    """
    amount: float
    currency: str
    converted: bool


@dataclass(frozen=True)
class RecordSnapshot:
    """Read-only view of every record list at one point in time."""
    accounts: tuple[Account, ...] = ()
    income: tuple[IncomeSource, ...] = ()
    payments: tuple[MonthlyPayment, ...] = ()
    expenses: tuple[Expense, ...] = ()


@dataclass(frozen=True)
class Summary:
    """Aggregated totals in a single currency."""
    currency: str
    accounts_total: float
    income_total: float
    payments_total: float
    expenses_total: float
    expenses_by_category: dict[str, float]
    unconverted: frozenset[str]

    @property
    def monthly_balance(self) -> float:
        return self.income_total - self.payments_total - self.expenses_total

    @property
    def is_approximate(self) -> bool:
        return bool(self.unconverted)


def _lookup_rate(currency: str, table: RateTable | None) -> float | None:
    if table is None:
        return None
    rate = table.get(currency)
    if rate is None or not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def convert_detailed(
    amount: float,
    from_currency: str,
    to_currency: str,
    table: RateTable | None,
) -> ConvertedAmount:
    """Convert ``amount`` and report whether a rate was actually applied."""
    if from_currency == to_currency:
        return ConvertedAmount(amount=amount, currency=to_currency, converted=True)
    rate = _lookup_rate(from_currency, table)
    if rate is None:
        return ConvertedAmount(amount=amount, currency=from_currency, converted=False)
    return ConvertedAmount(amount=amount / rate, currency=to_currency, converted=True)


def convert(
    amount: float,
    from_currency: str,
    to_currency: str,
    table: RateTable | None,
) -> float:
    """Convert ``amount`` from ``from_currency`` into ``to_currency``.

    ``table`` must be based on ``to_currency``. Without a table, or without
    an entry for ``from_currency``, the amount is returned unchanged.
    """
    return convert_detailed(amount, from_currency, to_currency, table).amount


def total_in_currency(
    records: Iterable[MonetaryRecord],
    target_currency: str,
    table: RateTable | None,
) -> float:
    """Sum record amounts converted into ``target_currency``.

    Records with no usable rate contribute nothing; without a table only
    records already in ``target_currency`` count.
    """
    total = 0.0
    for record in records:
        if (
            record.currency != target_currency
            and _lookup_rate(record.currency, table) is None
        ):
            continue
        total += convert(record.amount, record.currency, target_currency, table)
    return total


def unconverted_currencies(
    records: Iterable[MonetaryRecord],
    target_currency: str,
    table: RateTable | None,
) -> set[str]:
    """Return currencies whose records could not be converted."""
    return {
        record.currency
        for record in records
        if record.currency != target_currency
        and _lookup_rate(record.currency, table) is None
    }


def group_by_category(expenses: Iterable[Expense]) -> dict[str, list[Expense]]:
    """Group expenses by category, keeping input order inside each group."""
    groups: dict[str, list[Expense]] = {}
    for expense in expenses:
        category = (getattr(expense, "category", None) or "").strip() or UNCATEGORIZED
        groups.setdefault(category, []).append(expense)
    return groups


def totals_by_category(
    expenses: Iterable[Expense],
    target_currency: str,
    table: RateTable | None,
) -> dict[str, float]:
    return {
        category: total_in_currency(items, target_currency, table)
        for category, items in group_by_category(expenses).items()
    }


def summarize(
    snapshot: RecordSnapshot,
    target_currency: str,
    table: RateTable | None,
) -> Summary:
    """Compute every total shown on the overview screen."""
    all_records: Sequence[MonetaryRecord] = (
        snapshot.accounts + snapshot.income + snapshot.payments + snapshot.expenses
    )
    return Summary(
        currency=target_currency,
        accounts_total=total_in_currency(snapshot.accounts, target_currency, table),
        income_total=total_in_currency(snapshot.income, target_currency, table),
        payments_total=total_in_currency(snapshot.payments, target_currency, table),
        expenses_total=total_in_currency(snapshot.expenses, target_currency, table),
        expenses_by_category=totals_by_category(snapshot.expenses, target_currency, table),
        unconverted=frozenset(unconverted_currencies(all_records, target_currency, table)),
    )
