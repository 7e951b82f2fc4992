"""Domain models for monetary records and exchange-rate tables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import math
import re
from types import MappingProxyType
from typing import Union
import uuid

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
SUPPORTED_CURRENCIES = ("RUB", "USD", "EUR", "GBP", "CNY")
DEFAULT_DISPLAY_CURRENCY = "RUB"
_AMOUNT_JUNK = re.compile(r"[^0-9.\-]+")


def _new_id() -> str:
    return uuid.uuid4().hex


def _ensure_non_empty(value: str, field_name: str) -> str:
    """Validate required text fields."""
    if not value or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()


def normalize_currency(code: str) -> str:
    """Upper-case a currency code and check it looks like an ISO-4217 code."""
    if not code or not code.strip():
        raise ValueError("Currency is required")
    normalized = code.strip().upper()
    if not CURRENCY_PATTERN.match(normalized):
        raise ValueError(f"Invalid currency code: {code}")
    return normalized


def _ensure_finite(value: float | int | str, field_name: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a number") from exc
    if not math.isfinite(amount):
        raise ValueError(f"{field_name} must be a finite number")
    return amount


def _ensure_positive(value: float | int | str, field_name: str) -> float:
    amount = _ensure_finite(value, field_name)
    if amount <= 0:
        raise ValueError(f"{field_name} must be greater than zero")
    return amount


def parse_amount(text: str) -> float:
    """Parse a user-entered amount such as ``"1,250.50"`` into a float.

    Grouping characters and currency symbols are stripped before parsing.
    """
    cleaned = _AMOUNT_JUNK.sub("", text or "")
    if not cleaned:
        raise ValueError(f"Invalid amount: {text!r}")
    return _ensure_finite(cleaned, "Amount")


class MonetaryRecord:
    """Shared validation behavior for records that carry an amount."""

    id: str
    name: str
    amount: float
    currency: str

    def _validate_base_fields(self, allow_negative: bool) -> None:
        object.__setattr__(self, "id", _ensure_non_empty(self.id, "Id"))
        object.__setattr__(self, "name", _ensure_non_empty(self.name, "Name"))
        object.__setattr__(self, "currency", normalize_currency(self.currency))
        if allow_negative:
            amount = _ensure_finite(self.amount, "Amount")
        else:
            amount = _ensure_positive(self.amount, "Amount")
        object.__setattr__(self, "amount", amount)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class Account(MonetaryRecord):
    """Account balance; negative amounts represent debt."""
    name: str
    amount: float
    currency: str
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        self._validate_base_fields(allow_negative=True)


@dataclass(frozen=True)
class IncomeSource(MonetaryRecord):
    """Recurring income source."""
    name: str
    amount: float
    currency: str
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        self._validate_base_fields(allow_negative=False)


@dataclass(frozen=True)
class MonthlyPayment(MonetaryRecord):
    """Recurring monthly payment such as rent or a subscription."""
    name: str
    amount: float
    currency: str
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        self._validate_base_fields(allow_negative=False)


@dataclass(frozen=True)
class Expense(MonetaryRecord):
    """Single expense with an optional category."""
    name: str
    amount: float
    currency: str
    category: str = ""
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", (self.category or "").strip())
        self._validate_base_fields(allow_negative=False)

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["category"] = self.category
        return payload


AnyRecord = Union[Account, IncomeSource, MonthlyPayment, Expense]


@dataclass(frozen=True)
class ExchangeRateTable(Mapping):
    """Immutable snapshot of rates scoped to one base currency.

    ``table[X]`` is the value of one unit of ``base`` expressed in ``X``.
    Currencies the source did not list are simply absent.

    Attributes:
        base: Currency the table was fetched for
        rates: Read-only mapping of currency code to conversion factor
    """
    base: str
    rates: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", normalize_currency(self.base))
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def __getitem__(self, currency: str) -> float:
        return self.rates[currency]

    def __iter__(self) -> Iterator[str]:
        return iter(self.rates)

    def __len__(self) -> int:
        return len(self.rates)

    __hash__ = None  # type: ignore[assignment]
