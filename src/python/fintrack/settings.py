"""Display currency and exchange-rate loading state."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Callable

from fintrack.exceptions import RateFetchError
from fintrack.forex import RateProvider
from fintrack.models import DEFAULT_DISPLAY_CURRENCY, ExchangeRateTable, normalize_currency

logger = logging.getLogger(__name__)

Listener = Callable[["SettingsContext"], None]


class RateState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SettingsContext:
    """Hold the display currency and the rate table loaded for it.

    The context is the single writer of both values. Listeners registered
    with :meth:`subscribe` are called after every state change. Each rate
    request is tagged with the currency it was made for; a response that
    arrives after a newer request has started is dropped.
    """

    def __init__(
        self,
        provider: RateProvider,
        display_currency: str = DEFAULT_DISPLAY_CURRENCY,
    ) -> None:
        self._provider = provider
        self._display_currency = normalize_currency(display_currency)
        self._state = RateState.IDLE
        self._table: ExchangeRateTable | None = None
        self._error: RateFetchError | None = None
        self._request_id = 0
        self._listeners: list[Listener] = []

    @property
    def display_currency(self) -> str:
        return self._display_currency

    @property
    def state(self) -> RateState:
        return self._state

    @property
    def exchange_rates(self) -> ExchangeRateTable | None:
        """Rate table for the display currency, or None unless READY."""
        if self._state is RateState.READY:
            return self._table
        return None

    @property
    def error(self) -> RateFetchError | None:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._state is RateState.LOADING

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _transition(
        self,
        state: RateState,
        table: ExchangeRateTable | None = None,
        error: RateFetchError | None = None,
    ) -> None:
        self._state = state
        self._table = table
        self._error = error
        self._notify()

    async def set_display_currency(self, currency: str) -> None:
        """Switch the display currency and load rates based on it."""
        code = normalize_currency(currency)
        if code != self._display_currency:
            logger.debug(f"Display currency changed {self._display_currency} -> {code}")
        self._display_currency = code
        await self.refresh()

    async def refresh(self) -> None:
        """Load rates for the current display currency.

        Fetch failures leave the context in FAILED with :attr:`error` set;
        they are not raised.
        """
        self._request_id += 1
        request_id = self._request_id
        requested = self._display_currency
        self._transition(RateState.LOADING)
        try:
            table = await self._provider.fetch_rates(requested)
        except RateFetchError as exc:
            if self._is_current(request_id, requested):
                logger.error(f"Exchange rates for {requested} unavailable: {exc}")
                self._transition(RateState.FAILED, error=exc)
            else:
                logger.debug(f"Ignoring stale rate failure for {requested}")
            return
        if not self._is_current(request_id, requested):
            logger.debug(f"Discarding stale rate table for {requested}")
            return
        if table.base != requested:
            error = RateFetchError(
                f"Rate table based on {table.base}, expected {requested}", requested
            )
            logger.error(str(error))
            self._transition(RateState.FAILED, error=error)
            return
        self._transition(RateState.READY, table=table)

    def _is_current(self, request_id: int, currency: str) -> bool:
        return request_id == self._request_id and currency == self._display_currency
