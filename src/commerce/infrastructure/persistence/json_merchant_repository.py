"""JSON-file-backed implementation of MerchantRepository."""

from __future__ import annotations

from pathlib import Path

from commerce.domain.model.account import MerchantAccount
from commerce.domain.model.entity import ActivationStatus
from commerce.domain.model.merchant import Merchant
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.infrastructure.persistence.json_file import (
    JsonFile,
    meta_from_raw,
    meta_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonMerchantRepository(MerchantRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, merchant_id: int) -> Merchant | None:
        for raw in self._file.load():
            if raw["id"] == merchant_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Merchant]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, merchant: Merchant) -> None:
        if merchant.meta.id is None:
            merchant.meta.id = self._file.next_id()
        self._file.upsert(self._to_raw(merchant), key="id")

    @staticmethod
    def _to_raw(merchant: Merchant) -> dict:
        return {
            **meta_to_raw(merchant.meta),
            "merchant_name": merchant.merchant_name,
            "business_license": merchant.business_license,
            "contact_email": merchant.contact_email,
            "contact_phone": merchant.contact_phone,
            "balance": money_to_raw(merchant.balance),
            "total_income": money_to_raw(merchant.total_income),
            "status": merchant.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Merchant:
        return Merchant.rehydrate(
            meta=meta_from_raw(raw),
            merchant_name=raw["merchant_name"],
            business_license=raw.get("business_license", ""),
            contact_email=raw.get("contact_email", ""),
            contact_phone=raw.get("contact_phone", ""),
            account=MerchantAccount(
                balance=money_from_raw(raw["balance"]),
                total_income=money_from_raw(raw["total_income"]),
            ),
            status=ActivationStatus(raw["status"]),
        )
