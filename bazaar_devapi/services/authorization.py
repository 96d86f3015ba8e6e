"""
Cafe Bazaar authorization-code flow.

Builds the consent URL and completes the vendor callback by exchanging the
returned code for a credential triple.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional
from urllib.parse import urljoin, urlparse

from bazaar_devapi.clients.developer_api import AUTHORIZE_PATH, TOKEN_PATH, DeveloperApiClient
from bazaar_devapi.core.config import BazaarSettings
from bazaar_devapi.core.errors import ValidationError
from bazaar_devapi.schemas.requests import ObtainTokenRequest
from bazaar_devapi.schemas.results import ObtainTokenResult
from bazaar_devapi.storage.base import TokenStore

logger = logging.getLogger(__name__)


def resolve_redirect_uri(
    redirect_path: str,
    *,
    scheme: Optional[str] = None,
    host: Optional[str] = None,
) -> str:
    """
    Return the absolute redirect URI registered with the vendor.

    Absolute paths are returned verbatim; relative ones are joined against the
    scheme and host of the inbound request being served.
    """
    parsed = urlparse(redirect_path)
    if parsed.scheme and parsed.netloc:
        return redirect_path
    if not scheme or not host:
        raise ValidationError(
            "A relative redirect path needs the inbound request's scheme and host.",
            fields=("scheme", "host"),
        )
    return urljoin(f"{scheme}://{host}/", redirect_path)


class AuthorizationFlowCoordinator:
    """Drive the consent redirect and the authorization code exchange."""

    def __init__(
        self,
        settings: BazaarSettings,
        client: DeveloperApiClient,
        store: TokenStore,
    ) -> None:
        self._settings = settings
        self._client = client
        self._store = store

    def redirect_uri(self, *, scheme: Optional[str] = None, host: Optional[str] = None) -> str:
        return resolve_redirect_uri(self._settings.redirect_path, scheme=scheme, host=host)

    def get_authorization_uri(
        self, *, scheme: Optional[str] = None, host: Optional[str] = None
    ) -> str:
        """Construct the Cafe Bazaar consent URL requesting offline access."""
        redirect_uri = self.redirect_uri(scheme=scheme, host=host)
        return (
            f"{self._settings.base_uri}{AUTHORIZE_PATH}"
            f"?response_type=code&access_type=offline"
            f"&redirect_uri={redirect_uri}&client_id={self._settings.client_id}"
        )

    async def handle_authorization_callback(
        self,
        code: str,
        *,
        scheme: Optional[str] = None,
        host: Optional[str] = None,
    ) -> None:
        """Exchange ``code`` for tokens and store them; the store is untouched on failure."""
        if not code or not code.strip():
            raise ValidationError("Authorization code must not be empty.", fields=("code",))

        request = ObtainTokenRequest(
            code=code,
            client_id=self._settings.client_id,
            client_secret=self._settings.client_secret,
            redirect_uri=self.redirect_uri(scheme=scheme, host=host),
        )
        request.ensure_valid()

        result = await self._client.post_form(TOKEN_PATH, request, ObtainTokenResult)
        result.ensure_succeeded()

        await self._store.save(
            result.access_token,
            timedelta(seconds=result.expires_in),
            result.refresh_token,
        )
        logger.info(
            "Cafe Bazaar authorization completed; access token valid for %ss",
            result.expires_in,
        )


__all__ = ["AuthorizationFlowCoordinator", "resolve_redirect_uri"]
