"""Custom exception types for fintrack."""

from __future__ import annotations

from typing import Any


class DuplicateError(Exception):
    """Raised when a record id is already present in the store."""

    def __init__(self, message: str, details: dict[str, Any]) -> None:
        super().__init__(message)
        self.details = details


class NotFoundError(Exception):
    """Raised when a requested record does not exist."""


class RateFetchError(Exception):
    """Raised when exchange rates cannot be obtained for a base currency."""

    def __init__(self, message: str, base_currency: str) -> None:
        super().__init__(message)
        self.base_currency = base_currency
