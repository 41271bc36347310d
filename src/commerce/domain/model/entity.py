"""Identity and bookkeeping fields shared by every aggregate.

Aggregates embed an ``EntityMetadata`` rather than inheriting from a base
class.  Mutators call ``touch()`` explicitly after a successful change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from commerce.domain.exceptions import ResourceInactiveError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EntityMetadata:
    """``id`` stays None until a repository assigns one on first save."""

    id: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 0

    def touch(self) -> None:
        self.updated_at = utc_now()
        self.version += 1


class ActivationStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


def require_active(status: ActivationStatus, description: str) -> None:
    """Raise ResourceInactiveError unless ``status`` is ACTIVE."""
    if status is not ActivationStatus.ACTIVE:
        raise ResourceInactiveError(f"{description} is not active")
