"""Shared plumbing for the JSON-file-backed repositories.

Each repository keeps one JSON array of records in its own file and
rewrites the whole file on save.  Serialization of the shared value
types (Money, timestamps, entity metadata) lives here too.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from commerce.domain.model.entity import EntityMetadata
from commerce.domain.model.value_objects import Money


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def upsert(self, record: dict, key: str) -> None:
        """Replace the record with the same ``key`` value, or append it."""
        records = self.load()
        for i, raw in enumerate(records):
            if raw[key] == record[key]:
                records[i] = record
                break
        else:
            records.append(record)
        self.persist(records)

    def next_id(self) -> int:
        records = self.load()
        if not records:
            return 1
        return max(r["id"] for r in records) + 1

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


# --- Value serialization ------------------------------------------------------


def money_to_raw(money: Money) -> dict:
    return {"amount": str(money.amount), "currency": money.currency}


def money_from_raw(raw: dict) -> Money:
    return Money(Decimal(raw["amount"]), raw["currency"])


def time_to_raw(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def time_from_raw(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw is not None else None


def meta_to_raw(meta: EntityMetadata) -> dict:
    return {
        "id": meta.id,
        "created_at": meta.created_at.isoformat(),
        "updated_at": meta.updated_at.isoformat(),
        "version": meta.version,
    }


def meta_from_raw(raw: dict) -> EntityMetadata:
    return EntityMetadata(
        id=raw["id"],
        created_at=datetime.fromisoformat(raw["created_at"]),
        updated_at=datetime.fromisoformat(raw["updated_at"]),
        version=raw.get("version", 0),
    )
