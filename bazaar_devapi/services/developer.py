"""Protected Cafe Bazaar operations: purchase and subscription validation."""

from __future__ import annotations

import logging
from typing import Type
from urllib.parse import quote

from bazaar_devapi.clients.developer_api import DeveloperApiClient
from bazaar_devapi.schemas.requests import (
    BazaarRequest,
    CancelSubscriptionRequest,
    ValidatePurchaseRequest,
    ValidateSubscriptionRequest,
)
from bazaar_devapi.schemas.results import (
    CancelSubscriptionResult,
    ValidatePurchaseResult,
    ValidateSubscriptionResult,
)
from bazaar_devapi.services.token_renewal import TokenRenewalGuard
from bazaar_devapi.storage.base import TokenStore

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="")


class DeveloperService:
    """Validate purchases and manage subscriptions on behalf of the host app."""

    def __init__(
        self,
        client: DeveloperApiClient,
        store: TokenStore,
        guard: TokenRenewalGuard,
    ) -> None:
        self._client = client
        self._store = store
        self._guard = guard

    async def is_authorization_required(self) -> bool:
        return not await self._store.get_access_token()

    async def validate_purchase(
        self, request: ValidatePurchaseRequest
    ) -> ValidatePurchaseResult:
        path = (
            f"devapi/v2/api/validate/{_segment(request.package_name)}"
            f"/inapp/{_segment(request.product_id)}"
            f"/purchases/{_segment(request.purchase_token)}/"
        )
        return await self._call(request, path, ValidatePurchaseResult)

    async def validate_subscription(
        self, request: ValidateSubscriptionRequest
    ) -> ValidateSubscriptionResult:
        path = (
            f"devapi/v2/api/applications/{_segment(request.package_name)}"
            f"/subscriptions/{_segment(request.subscription_id)}"
            f"/purchases/{_segment(request.purchase_token)}/"
        )
        return await self._call(request, path, ValidateSubscriptionResult)

    async def cancel_subscription(
        self, request: CancelSubscriptionRequest
    ) -> CancelSubscriptionResult:
        path = (
            f"devapi/v2/api/applications/{_segment(request.package_name)}"
            f"/subscriptions/{_segment(request.subscription_id)}"
            f"/purchases/{_segment(request.purchase_token)}/cancel/"
        )
        result = await self._call(request, path, CancelSubscriptionResult)
        logger.info(
            "Cancelled subscription %s for package %s",
            request.subscription_id,
            request.package_name,
        )
        return result

    async def _call(self, request: BazaarRequest, path: str, result_type: Type):
        request.ensure_valid()
        await self._guard.ensure_access_token_validity()

        access_token = await self._store.get_access_token()
        result = await self._client.get(
            path, result_type, params={"access_token": access_token}
        )
        return result.ensure_succeeded()


__all__ = ["DeveloperService"]
