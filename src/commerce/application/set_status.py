"""Application service: activate or deactivate a user, merchant or product.

A deactivated aggregate rejects every mutating operation with
ResourceInactiveError until it is activated again.
"""

from __future__ import annotations

import logging

from commerce.domain.exceptions import EntityNotFoundError, ValidationError
from commerce.domain.repository.merchant_repository import MerchantRepository
from commerce.domain.repository.product_repository import ProductRepository
from commerce.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

RESOURCE_KINDS = ("user", "merchant", "product")


class SetResourceStatusHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        merchant_repo: MerchantRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._user_repo = user_repo
        self._merchant_repo = merchant_repo
        self._product_repo = product_repo

    def handle(self, kind: str, key: str, active: bool) -> str:
        """Toggle the status and return the resulting status value.

        ``key`` is the numeric ID for users and merchants, the SKU for products.
        """
        if kind == "user":
            resource = self._user_repo.get_by_id(_parse_id(key))
            save = self._user_repo.save
        elif kind == "merchant":
            resource = self._merchant_repo.get_by_id(_parse_id(key))
            save = self._merchant_repo.save
        elif kind == "product":
            resource = self._product_repo.get_by_sku(key)
            save = self._product_repo.save
        else:
            raise ValidationError(
                f"Unknown resource kind '{kind}'; expected one of {', '.join(RESOURCE_KINDS)}"
            )

        if resource is None:
            raise EntityNotFoundError(f"{kind.capitalize()} '{key}' not found")

        if active:
            resource.activate()
        else:
            resource.deactivate()
        save(resource)  # type: ignore[arg-type]

        logger.info("%s '%s' is now %s", kind.capitalize(), key, resource.status.value)
        return resource.status.value


def _parse_id(key: str) -> int:
    try:
        return int(key)
    except ValueError:
        raise ValidationError(f"Invalid ID: '{key}'") from None
