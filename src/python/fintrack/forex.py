"""Exchange rate fetching from a public API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import math
from typing import Any, Mapping

import requests

from fintrack.exceptions import RateFetchError
from fintrack.models import ExchangeRateTable, normalize_currency

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://open.er-api.com/v6/latest"
DEFAULT_TIMEOUT_SECONDS = 5


@dataclass(frozen=True)
class ForexConfig:
    """Configuration for forex rate fetching."""

    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "ForexConfig":
        payload = payload or {}
        return cls(
            api_url=str(payload.get("api_url", DEFAULT_API_URL)).rstrip("/"),
            timeout_seconds=float(payload.get("timeout", DEFAULT_TIMEOUT_SECONDS)),
        )


class RateProvider:
    """Source of exchange-rate tables keyed by base currency."""

    async def fetch_rates(self, base_currency: str) -> ExchangeRateTable:
        raise NotImplementedError


class ExchangeRateProvider(RateProvider):
    """Fetch rate tables from an HTTP API returning ``{"rates": {...}}``.

    Every call goes to the network; holding on to the result is up to the
    caller.
    """

    def __init__(self, config: ForexConfig | None = None) -> None:
        self.config = config or ForexConfig()

    async def fetch_rates(self, base_currency: str) -> ExchangeRateTable:
        """Return the rate table for ``base_currency``.

        Raises:
            ValueError: If the currency code is malformed.
            RateFetchError: If the request fails or the payload has no usable rates.
        """
        base = normalize_currency(base_currency)
        logger.debug(f"Fetching exchange rates for base {base}")
        try:
            payload = await asyncio.to_thread(self._fetch_from_api, base)
        except (requests.RequestException, ValueError) as exc:
            logger.error(f"Exchange rate request for {base} failed: {exc}")
            raise RateFetchError(
                f"Failed to fetch exchange rates for {base}: {exc}", base
            ) from exc
        table = self._parse_payload(payload, base)
        logger.debug(f"Fetched {len(table)} exchange rates for base {base}")
        return table

    def _fetch_from_api(self, currency: str) -> Any:
        url = f"{self.config.api_url}/{currency}"
        response = requests.get(url, timeout=self.config.timeout_seconds)
        response.raise_for_status()
        return response.json()

    def _parse_payload(self, payload: Any, base: str) -> ExchangeRateTable:
        if not isinstance(payload, dict):
            raise RateFetchError(f"Malformed rate response for {base}", base)
        if payload.get("result") == "error":
            reason = payload.get("error-type", "unknown error")
            logger.error(f"Rate source rejected base {base}: {reason}")
            raise RateFetchError(f"Rate source error for {base}: {reason}", base)
        rates = payload.get("rates")
        if not isinstance(rates, dict):
            raise RateFetchError(f"Rate response for {base} has no rates object", base)
        usable = clean_rates(rates)
        if not usable:
            raise RateFetchError(f"No exchange rates returned for {base}", base)
        usable.setdefault(base, 1.0)
        return ExchangeRateTable(base=base, rates=usable)


class StaticRateProvider(RateProvider):
    """Serve rates from fixed tables, one per base currency."""

    def __init__(self, tables: Mapping[str, Mapping[str, float]]) -> None:
        self._tables = {code.upper(): dict(rates) for code, rates in tables.items()}

    async def fetch_rates(self, base_currency: str) -> ExchangeRateTable:
        base = normalize_currency(base_currency)
        rates = clean_rates(self._tables.get(base) or {})
        if not rates:
            raise RateFetchError(f"No exchange rates configured for {base}", base)
        return ExchangeRateTable(base=base, rates=rates)


def clean_rates(rates: Mapping[str, Any]) -> dict[str, float]:
    """Keep only entries with positive finite numeric rates."""
    cleaned: dict[str, float] = {}
    for code, value in rates.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.debug(f"Dropping non-numeric rate for {code}: {value!r}")
            continue
        if not math.isfinite(value) or value <= 0:
            logger.debug(f"Dropping unusable rate for {code}: {value!r}")
            continue
        cleaned[str(code).upper()] = float(value)
    return cleaned
