"""Integration tests for the finance client."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from fintrack.client import FinanceClient
from fintrack.config import FintrackConfig
from fintrack.forex import StaticRateProvider
from fintrack.models import Account, Expense
from fintrack.settings import RateState


@pytest.fixture()
def client(config_path: Path, rub_rates: dict, usd_rates: dict) -> FinanceClient:
    provider = StaticRateProvider({"RUB": rub_rates, "USD": usd_rates})
    client = FinanceClient(FintrackConfig.load(config_path), provider=provider)
    client.add_record("accounts", Account(name="Cash", amount=500, currency="RUB"))
    client.add_record("accounts", Account(name="Dollars", amount=20, currency="USD"))
    client.add_record("expenses", Expense(name="Coffee", amount=5, currency="USD", category="Food"))
    return client


@pytest.mark.sit
def test_summary_before_rates_load(client: FinanceClient) -> None:
    summary = client.summary()

    assert client.settings.state is RateState.IDLE
    assert summary.accounts_total == 500
    assert summary.expenses_total == 0
    assert summary.unconverted == frozenset({"USD"})


@pytest.mark.sit
def test_summary_after_rates_load(client: FinanceClient) -> None:
    state = asyncio.run(client.load_rates())
    summary = client.summary()

    assert state is RateState.READY
    assert summary.accounts_total == pytest.approx(2318.18, abs=0.01)
    assert not summary.is_approximate


@pytest.mark.sit
def test_summary_for_other_currency_ignores_loaded_table(client: FinanceClient) -> None:
    asyncio.run(client.load_rates())

    summary = client.summary("USD")

    assert summary.currency == "USD"
    assert summary.accounts_total == 20
    assert summary.expenses_total == 5


@pytest.mark.sit
def test_set_display_currency_persists(client: FinanceClient, config_path: Path) -> None:
    state = asyncio.run(client.set_display_currency("usd"))
    summary = client.summary()

    assert state is RateState.READY
    assert client.display_currency == "USD"
    assert json.loads(config_path.read_text(encoding="utf-8"))["display_currency"] == "USD"
    assert summary.accounts_total == pytest.approx(20 + 500 / 90.0)


@pytest.mark.sit
def test_delete_record(client: FinanceClient) -> None:
    record = client.list_records("expenses")[0]

    client.delete_record("expenses", record.id)

    assert client.list_records("expenses") == ()
