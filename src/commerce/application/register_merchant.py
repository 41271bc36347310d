"""Application service: Register Merchant use case."""

from __future__ import annotations

import logging

from commerce.domain.model.merchant import Merchant
from commerce.domain.repository.merchant_repository import MerchantRepository

logger = logging.getLogger(__name__)


class RegisterMerchantHandler:

    def __init__(self, merchant_repo: MerchantRepository) -> None:
        self._merchant_repo = merchant_repo

    def handle(
        self,
        merchant_name: str,
        business_license: str,
        contact_email: str,
        contact_phone: str,
        currency: str,
    ) -> Merchant:
        merchant = Merchant.register(
            merchant_name,
            business_license=business_license,
            contact_email=contact_email,
            contact_phone=contact_phone,
            currency=currency,
        )
        self._merchant_repo.save(merchant)
        logger.info("Registered merchant #%s '%s'", merchant.id, merchant.merchant_name)
        return merchant
