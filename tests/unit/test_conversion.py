from __future__ import annotations

import math

import pytest

from fintrack.conversion import (
    UNCATEGORIZED,
    RecordSnapshot,
    convert,
    convert_detailed,
    group_by_category,
    summarize,
    total_in_currency,
    totals_by_category,
    unconverted_currencies,
)
from fintrack.models import (
    Account,
    ExchangeRateTable,
    Expense,
    IncomeSource,
    MonthlyPayment,
)


@pytest.mark.parametrize("table", [None, {}, {"USD": 0.5}])
@pytest.mark.parametrize("amount", [0.0, 12.34, -50.0, 1e9])
def test_convert_same_currency_is_identity(amount: float, table) -> None:
    assert convert(amount, "USD", "USD", table) == amount


def test_convert_without_table_returns_amount() -> None:
    assert convert(42.0, "USD", "RUB", None) == 42.0


def test_convert_divides_by_source_rate() -> None:
    table = ExchangeRateTable(base="GBP", rates={"EUR": 2.0})

    assert convert(10, "EUR", "GBP", table) == 5.0


def test_convert_accepts_plain_mapping() -> None:
    assert convert(10, "EUR", "GBP", {"EUR": 2.0}) == 5.0


def test_convert_missing_rate_returns_amount() -> None:
    table = ExchangeRateTable(base="RUB", rates={"USD": 0.011})

    assert convert(7.5, "CNY", "RUB", table) == 7.5


def test_convert_ignores_target_rate() -> None:
    # A table entry for the target currency must not scale the result.
    table = {"USD": 0.011, "RUB": 3.0}

    assert convert(20, "USD", "RUB", table) == pytest.approx(20 / 0.011)


def test_convert_detailed_flags_fallback() -> None:
    table = {"USD": 0.011}

    converted = convert_detailed(20, "USD", "RUB", table)
    fallback = convert_detailed(20, "CNY", "RUB", table)
    no_table = convert_detailed(20, "USD", "RUB", None)
    same = convert_detailed(20, "RUB", "RUB", None)

    assert converted.converted and converted.currency == "RUB"
    assert not fallback.converted and fallback.currency == "CNY" and fallback.amount == 20
    assert not no_table.converted and no_table.amount == 20
    assert same.converted and same.amount == 20


def test_convert_treats_zero_rate_as_unknown() -> None:
    assert convert(10, "USD", "RUB", {"USD": 0.0}) == 10


@pytest.mark.parametrize("table", [None, {}, {"USD": 0.011}])
def test_total_of_nothing_is_zero(table) -> None:
    assert total_in_currency([], "RUB", table) == 0


def test_total_without_table_skips_foreign_records() -> None:
    records = [
        Account(name="Cash", amount=500, currency="RUB"),
        Account(name="Wallet", amount=20, currency="USD"),
        Account(name="Bank", amount=-100, currency="RUB"),
    ]

    assert total_in_currency(records, "RUB", None) == 400


def test_total_with_partial_table_skips_unknown_currencies() -> None:
    records = [
        Account(name="Cash", amount=500, currency="RUB"),
        Account(name="Yuan", amount=10, currency="CNY"),
        Account(name="Dollars", amount=1.1, currency="USD"),
    ]

    assert total_in_currency(records[:2], "RUB", {"USD": 0.011}) == 500
    assert total_in_currency(records, "RUB", {"USD": 0.011}) == pytest.approx(600.0)


@pytest.mark.parametrize("rate", [math.nan, math.inf, -math.inf])
def test_non_finite_rate_is_unknown(rate: float) -> None:
    table = ExchangeRateTable(base="RUB", rates={"USD": rate})
    records = [
        Account(name="Cash", amount=500, currency="RUB"),
        Account(name="Dollars", amount=20, currency="USD"),
    ]

    assert convert(20, "USD", "RUB", table) == 20
    assert not convert_detailed(20, "USD", "RUB", table).converted
    assert total_in_currency(records, "RUB", table) == 500
    assert unconverted_currencies(records, "RUB", table) == {"USD"}


def test_accounts_scenario_in_roubles() -> None:
    table = ExchangeRateTable(base="RUB", rates={"USD": 0.011})
    accounts = [
        Account(name="Cash", amount=500, currency="RUB"),
        Account(name="Dollars", amount=20, currency="USD"),
    ]

    assert convert(20, "USD", "RUB", table) == pytest.approx(1818.18, abs=0.01)
    assert total_in_currency(accounts, "RUB", table) == pytest.approx(2318.18, abs=0.01)


def test_total_never_nan() -> None:
    records = [Account(name="Cash", amount=1, currency="USD")]

    assert not math.isnan(total_in_currency(records, "RUB", {"USD": 0.0}))


def test_group_by_category_preserves_order() -> None:
    expenses = [
        Expense(name="Bread", amount=50, currency="RUB", category="Food"),
        Expense(name="Bus", amount=40, currency="RUB", category="Transport"),
        Expense(name="Gift", amount=10, currency="EUR"),
        Expense(name="Milk", amount=80, currency="RUB", category="Food"),
        Expense(name="Misc", amount=5, currency="RUB", category="   "),
    ]

    groups = group_by_category(expenses)

    assert list(groups) == ["Food", "Transport", UNCATEGORIZED]
    assert [e.name for e in groups["Food"]] == ["Bread", "Milk"]
    assert [e.name for e in groups[UNCATEGORIZED]] == ["Gift", "Misc"]


def test_group_by_category_empty() -> None:
    assert group_by_category([]) == {}


def test_totals_by_category(rub_rates: dict[str, float]) -> None:
    expenses = [
        Expense(name="Bread", amount=50, currency="RUB", category="Food"),
        Expense(name="Coffee", amount=1.1, currency="USD", category="Food"),
        Expense(name="Bus", amount=40, currency="RUB", category="Transport"),
    ]

    totals = totals_by_category(expenses, "RUB", rub_rates)

    assert totals["Food"] == pytest.approx(150.0)
    assert totals["Transport"] == 40


def test_unconverted_currencies() -> None:
    records = [
        Account(name="Cash", amount=500, currency="RUB"),
        Account(name="Dollars", amount=20, currency="USD"),
        Account(name="Yuan", amount=10, currency="CNY"),
    ]

    assert unconverted_currencies(records, "RUB", {"USD": 0.011}) == {"CNY"}
    assert unconverted_currencies(records, "RUB", None) == {"USD", "CNY"}


def test_summarize(rub_rates: dict[str, float]) -> None:
    snapshot = RecordSnapshot(
        accounts=(Account(name="Cash", amount=1000, currency="RUB"),),
        income=(IncomeSource(name="Salary", amount=1100, currency="USD"),),
        payments=(MonthlyPayment(name="Rent", amount=30000, currency="RUB"),),
        expenses=(
            Expense(name="Food", amount=5000, currency="RUB", category="Food"),
            Expense(name="Trip", amount=100, currency="GBP"),
        ),
    )

    summary = summarize(snapshot, "RUB", rub_rates)

    assert summary.currency == "RUB"
    assert summary.accounts_total == 1000
    assert summary.income_total == pytest.approx(100000.0)
    assert summary.payments_total == 30000
    assert summary.expenses_total == 5000
    assert summary.expenses_by_category == {"Food": 5000, UNCATEGORIZED: 0}
    assert summary.monthly_balance == pytest.approx(65000.0)
    assert summary.unconverted == frozenset({"GBP"})
    assert summary.is_approximate


def test_summarize_without_rates() -> None:
    snapshot = RecordSnapshot(
        accounts=(
            Account(name="Cash", amount=1000, currency="RUB"),
            Account(name="Dollars", amount=20, currency="USD"),
        ),
    )

    summary = summarize(snapshot, "RUB", None)

    assert summary.accounts_total == 1000
    assert summary.income_total == 0
    assert summary.monthly_balance == 0
    assert summary.unconverted == frozenset({"USD"})
