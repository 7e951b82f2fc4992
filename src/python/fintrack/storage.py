"""JSON file storage for record lists."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fintrack.conversion import RecordSnapshot
from fintrack.exceptions import DuplicateError, NotFoundError
from fintrack.models import Account, AnyRecord, Expense, IncomeSource, MonthlyPayment

RECORD_TYPES: dict[str, type] = {
    "accounts": Account,
    "income": IncomeSource,
    "payments": MonthlyPayment,
    "expenses": Expense,
}
STORE_VERSION = 1


class RecordStore:
    """Owner of the persisted record lists.

    Records are kept in memory and the whole file is rewritten on each
    change. Readers only ever receive tuples, never the internal lists.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._records: dict[str, list[AnyRecord]] = {kind: [] for kind in RECORD_TYPES}
        self._load()

    def _check_kind(self, kind: str) -> list[AnyRecord]:
        if kind not in RECORD_TYPES:
            raise ValueError(
                f"Unknown record kind {kind!r}. Allowed: {', '.join(RECORD_TYPES)}"
            )
        return self._records[kind]

    def _load(self) -> None:
        if not self.path.exists():
            return
        with self.path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError(f"Record file {self.path} is not a JSON object")
        for kind, record_type in RECORD_TYPES.items():
            rows = payload.get(kind) or []
            self._records[kind] = [record_type(**row) for row in rows]

    def _save(self) -> None:
        payload: dict[str, Any] = {"version": STORE_VERSION}
        for kind, records in self._records.items():
            payload[kind] = [record.to_dict() for record in records]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)

    def _index_of(self, records: list[AnyRecord], kind: str, record_id: str) -> int:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        raise NotFoundError(f"No {kind} record with id {record_id!r}")

    def add(self, kind: str, record: AnyRecord) -> AnyRecord:
        records = self._check_kind(kind)
        if not isinstance(record, RECORD_TYPES[kind]):
            raise TypeError(f"{kind} expects {RECORD_TYPES[kind].__name__} records")
        if any(existing.id == record.id for existing in records):
            raise DuplicateError(
                f"Duplicate {kind} record", {"kind": kind, "id": record.id}
            )
        records.append(record)
        self._save()
        return record

    def update(self, kind: str, record: AnyRecord) -> AnyRecord:
        records = self._check_kind(kind)
        if not isinstance(record, RECORD_TYPES[kind]):
            raise TypeError(f"{kind} expects {RECORD_TYPES[kind].__name__} records")
        records[self._index_of(records, kind, record.id)] = record
        self._save()
        return record

    def delete(self, kind: str, record_id: str) -> None:
        records = self._check_kind(kind)
        del records[self._index_of(records, kind, record_id)]
        self._save()

    def get(self, kind: str, record_id: str) -> AnyRecord:
        records = self._check_kind(kind)
        return records[self._index_of(records, kind, record_id)]

    def list_records(self, kind: str) -> tuple[AnyRecord, ...]:
        return tuple(self._check_kind(kind))

    def snapshot(self) -> RecordSnapshot:
        return RecordSnapshot(
            accounts=tuple(self._records["accounts"]),
            income=tuple(self._records["income"]),
            payments=tuple(self._records["payments"]),
            expenses=tuple(self._records["expenses"]),
        )
