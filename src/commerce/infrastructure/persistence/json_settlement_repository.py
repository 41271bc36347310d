"""JSON-file-backed implementation of SettlementRepository."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from commerce.domain.model.settlement import Settlement, SettlementStatus
from commerce.domain.repository.settlement_repository import SettlementRepository
from commerce.infrastructure.persistence.json_file import (
    JsonFile,
    meta_from_raw,
    meta_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonSettlementRepository(SettlementRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, settlement_id: int) -> Settlement | None:
        for raw in self._file.load():
            if raw["id"] == settlement_id:
                return self._to_domain(raw)
        return None

    def get_by_merchant_and_date(
        self, merchant_id: int, settlement_date: date
    ) -> Settlement | None:
        wanted = settlement_date.isoformat()
        for raw in self._file.load():
            if raw["merchant_id"] == merchant_id and raw["settlement_date"] == wanted:
                return self._to_domain(raw)
        return None

    def save(self, settlement: Settlement) -> None:
        if settlement.meta.id is None:
            settlement.meta.id = self._file.next_id()
        self._file.upsert(self._to_raw(settlement), key="id")

    @staticmethod
    def _to_raw(settlement: Settlement) -> dict:
        return {
            **meta_to_raw(settlement.meta),
            "merchant_id": settlement.merchant_id,
            "settlement_date": settlement.settlement_date.isoformat(),
            "expected_income": money_to_raw(settlement.expected_income),
            "actual_balance": money_to_raw(settlement.actual_balance),
            "difference": money_to_raw(settlement.difference),
            "status": settlement.status.value,
            "remarks": settlement.remarks,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Settlement:
        return Settlement.rehydrate(
            meta=meta_from_raw(raw),
            merchant_id=raw["merchant_id"],
            settlement_date=date.fromisoformat(raw["settlement_date"]),
            expected_income=money_from_raw(raw["expected_income"]),
            actual_balance=money_from_raw(raw["actual_balance"]),
            difference=money_from_raw(raw["difference"]),
            status=SettlementStatus(raw["status"]),
            remarks=raw.get("remarks", ""),
        )
