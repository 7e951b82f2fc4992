"""Public fintrack package exports."""

from __future__ import annotations

from fintrack.__version__ import __version__
from fintrack.client import FinanceClient
from fintrack.conversion import (
    UNCATEGORIZED,
    ConvertedAmount,
    RecordSnapshot,
    Summary,
    convert,
    convert_detailed,
    group_by_category,
    summarize,
    total_in_currency,
    totals_by_category,
)
from fintrack.exceptions import DuplicateError, NotFoundError, RateFetchError
from fintrack.forex import ExchangeRateProvider, StaticRateProvider
from fintrack.models import (
    Account,
    ExchangeRateTable,
    Expense,
    IncomeSource,
    MonthlyPayment,
)
from fintrack.settings import RateState, SettingsContext
from fintrack.storage import RecordStore

__all__ = [
    "__version__",
    "FinanceClient",
    "UNCATEGORIZED",
    "ConvertedAmount",
    "RecordSnapshot",
    "Summary",
    "convert",
    "convert_detailed",
    "group_by_category",
    "summarize",
    "total_in_currency",
    "totals_by_category",
    "DuplicateError",
    "NotFoundError",
    "RateFetchError",
    "ExchangeRateProvider",
    "StaticRateProvider",
    "Account",
    "ExchangeRateTable",
    "Expense",
    "IncomeSource",
    "MonthlyPayment",
    "RateState",
    "SettingsContext",
    "RecordStore",
]
