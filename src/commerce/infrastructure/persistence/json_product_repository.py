"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from commerce.domain.model.entity import ActivationStatus
from commerce.domain.model.inventory import Inventory
from commerce.domain.model.product import Product
from commerce.domain.repository.product_repository import ProductRepository
from commerce.infrastructure.persistence.json_file import (
    JsonFile,
    meta_from_raw,
    meta_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_sku(self, sku: str) -> Product | None:
        for raw in self._file.load():
            if raw["sku"] == sku:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        if product.meta.id is None:
            product.meta.id = self._file.next_id()
        self._file.upsert(self._to_raw(product), key="sku")

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            **meta_to_raw(product.meta),
            "sku": product.sku,
            "name": product.name,
            "description": product.description,
            "price": money_to_raw(product.price),
            "merchant_id": product.merchant_id,
            "available_stock": product.available_stock,
            "status": product.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product.rehydrate(
            meta=meta_from_raw(raw),
            sku=raw["sku"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=money_from_raw(raw["price"]),
            merchant_id=raw["merchant_id"],
            inventory=Inventory(raw["available_stock"]),
            status=ActivationStatus(raw["status"]),
        )
