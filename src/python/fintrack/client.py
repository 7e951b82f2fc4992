"""Client orchestration layer for fintrack."""

from __future__ import annotations

import logging
import os

from fintrack.config import FintrackConfig
from fintrack.conversion import Summary, summarize
from fintrack.forex import ExchangeRateProvider, RateProvider
from fintrack.models import AnyRecord, normalize_currency
from fintrack.settings import RateState, SettingsContext
from fintrack.storage import RecordStore

# Configure logging
logger = logging.getLogger("fintrack")
log_level = os.environ.get('LOGGING_LEVEL', 'INFO').upper()
logger.setLevel(getattr(logging, log_level, logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    logger.addHandler(handler)


class FinanceClient:
    """Coordinate the record store, display settings and totals."""

    def __init__(
        self,
        config: FintrackConfig,
        store: RecordStore | None = None,
        provider: RateProvider | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Resolved application config
            store: Optional record store; defaults to the config data path
            provider: Optional rate provider; defaults to the HTTP provider
        """
        self.config = config
        self.store = store or RecordStore(config.data_path)
        self.settings = SettingsContext(
            provider or ExchangeRateProvider(config.forex),
            display_currency=config.display_currency,
        )

    @property
    def display_currency(self) -> str:
        return self.settings.display_currency

    def add_record(self, kind: str, record: AnyRecord) -> AnyRecord:
        logger.debug(f"Adding {kind} record {record.id}")
        return self.store.add(kind, record)

    def update_record(self, kind: str, record: AnyRecord) -> AnyRecord:
        logger.debug(f"Updating {kind} record {record.id}")
        return self.store.update(kind, record)

    def delete_record(self, kind: str, record_id: str) -> None:
        logger.debug(f"Deleting {kind} record {record_id}")
        self.store.delete(kind, record_id)

    def get_record(self, kind: str, record_id: str) -> AnyRecord:
        return self.store.get(kind, record_id)

    def list_records(self, kind: str) -> tuple[AnyRecord, ...]:
        return self.store.list_records(kind)

    async def load_rates(self) -> RateState:
        """Fetch rates for the display currency and return the resulting state."""
        await self.settings.refresh()
        return self.settings.state

    async def set_display_currency(self, currency: str) -> RateState:
        """Persist a new display currency and reload rates for it."""
        self.config = self.config.with_display_currency(currency)
        await self.settings.set_display_currency(self.config.display_currency)
        return self.settings.state

    def summary(self, currency: str | None = None) -> Summary:
        """Totals for every record list.

        Uses the display currency unless ``currency`` is given. The loaded
        rate table only applies when its base matches the target currency.
        """
        target = normalize_currency(currency) if currency else self.display_currency
        table = self.settings.exchange_rates
        if table is not None and table.base != target:
            table = None
        return summarize(self.store.snapshot(), target, table)
