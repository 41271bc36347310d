"""Settlement aggregate — one reconciliation of a merchant's balance.

A settlement compares the income a merchant *should* have (worked out from
sales records) with the balance it actually holds, and classifies the gap.
The classification happens once, when the settlement is built; afterwards
the only change allowed is marking it as processed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from commerce.domain.model.entity import EntityMetadata
from commerce.domain.model.value_objects import Money


class SettlementStatus(Enum):
    MATCHED = "MATCHED"  # actual balance equals expected income
    SURPLUS = "SURPLUS"  # actual balance exceeds expected income
    DEFICIT = "DEFICIT"  # actual balance falls short of expected income
    PROCESSED = "PROCESSED"  # discrepancy resolved; terminal


@dataclass
class Settlement:
    """Result of reconciling one merchant's balance for one day.

    Built by ``reconcile()`` (or ``rehydrate()`` from storage);
    ``mark_as_processed()`` is its only mutator.
    """

    merchant_id: int
    settlement_date: date
    expected_income: Money
    actual_balance: Money
    difference: Money
    status: SettlementStatus
    remarks: str = ""
    meta: EntityMetadata = field(default_factory=EntityMetadata)

    @staticmethod
    def reconcile(
        merchant_id: int,
        settlement_date: date,
        expected_income: Money,
        actual_balance: Money,
        remarks: str = "",
    ) -> Settlement:
        """Build a settlement, deriving the difference and status.

        Money cannot be negative, so the difference is taken as larger minus
        smaller.  Mixing currencies raises CurrencyMismatchError.
        """
        if actual_balance.is_greater_than(expected_income):
            difference = actual_balance - expected_income
            status = SettlementStatus.SURPLUS
        else:
            difference = expected_income - actual_balance
            status = (
                SettlementStatus.MATCHED
                if difference.is_zero()
                else SettlementStatus.DEFICIT
            )
        return Settlement(
            merchant_id=merchant_id,
            settlement_date=settlement_date,
            expected_income=expected_income,
            actual_balance=actual_balance,
            difference=difference,
            status=status,
            remarks=remarks,
        )

    @staticmethod
    def rehydrate(
        meta: EntityMetadata,
        merchant_id: int,
        settlement_date: date,
        expected_income: Money,
        actual_balance: Money,
        difference: Money,
        status: SettlementStatus,
        remarks: str,
    ) -> Settlement:
        return Settlement(
            merchant_id=merchant_id,
            settlement_date=settlement_date,
            expected_income=expected_income,
            actual_balance=actual_balance,
            difference=difference,
            status=status,
            remarks=remarks,
            meta=meta,
        )

    @property
    def id(self) -> int | None:
        return self.meta.id

    def mark_as_processed(self, remarks: str | None = None) -> None:
        """Record a manual or automated resolution.

        The financial comparison is not re-derived; ``expected_income``,
        ``actual_balance`` and ``difference`` keep their original values.
        """
        self.status = SettlementStatus.PROCESSED
        self.remarks = remarks or ""
        self.meta.touch()

    def is_matched(self) -> bool:
        return self.status is SettlementStatus.MATCHED

    def has_surplus(self) -> bool:
        return self.status is SettlementStatus.SURPLUS

    def has_deficit(self) -> bool:
        return self.status is SettlementStatus.DEFICIT

    def is_processed(self) -> bool:
        return self.status is SettlementStatus.PROCESSED
