"""
Gate run by every protected operation before it touches the vendor API.

Renewal is single-flight per guard: concurrent callers that observe an
expired access token queue on the guard's lock, and only the first of them
performs the refresh grant. The rest re-check expiry after acquiring the lock
and reuse the renewed token. The dependency layer builds one guard per store.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from bazaar_devapi.clients.developer_api import TOKEN_PATH, DeveloperApiClient
from bazaar_devapi.core.config import BazaarSettings
from bazaar_devapi.core.errors import UnauthorizedError
from bazaar_devapi.schemas.requests import RenewTokenRequest
from bazaar_devapi.schemas.results import RenewTokenResult
from bazaar_devapi.storage.base import TokenStore

logger = logging.getLogger(__name__)


class TokenRenewalGuard:
    """Ensure a usable access token exists, renewing it when expired."""

    def __init__(
        self,
        settings: BazaarSettings,
        client: DeveloperApiClient,
        store: TokenStore,
    ) -> None:
        self._settings = settings
        self._client = client
        self._store = store
        self._renewal_lock = asyncio.Lock()

    async def ensure_access_token_validity(self) -> None:
        """
        Raise ``UnauthorizedError`` when the store holds no refresh token, renew
        an expired access token, and otherwise return without any network call.
        """
        if not await self._store.get_refresh_token():
            raise UnauthorizedError(
                "Authorization flow not yet completed; authorize against Cafe Bazaar first."
            )

        if not await self._store.is_access_token_expired():
            return

        async with self._renewal_lock:
            if not await self._store.is_access_token_expired():
                return
            await self._renew_access_token(await self._renewal_refresh_token())

    async def _renewal_refresh_token(self) -> str:
        # The configured token only stands in when the store's copy vanished
        # between the authorization check and the lock.
        stored = await self._store.get_refresh_token()
        return stored or self._settings.refresh_token or ""

    async def _renew_access_token(self, refresh_token: str) -> None:
        request = RenewTokenRequest(
            client_id=self._settings.client_id,
            client_secret=self._settings.client_secret,
            refresh_token=refresh_token,
        )
        request.ensure_valid()

        logger.info("Renewing expired Cafe Bazaar access token")
        result = await self._client.post_form(TOKEN_PATH, request, RenewTokenResult)
        result.ensure_succeeded()

        await self._store.renew(result.access_token, timedelta(seconds=result.expires_in))
        logger.info("Cafe Bazaar access token renewed; valid for %ss", result.expires_in)


__all__ = ["TokenRenewalGuard"]
