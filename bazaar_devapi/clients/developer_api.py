"""
HTTP client for the Cafe Bazaar developer API.

Performs exactly one round trip per call and deserializes the JSON payload into
a typed result. Classifying the payload as success or failure is left to the
result's ``ensure_succeeded``; this module only raises ``TransportError``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import urljoin

import httpx

from bazaar_devapi.core.config import BazaarSettings
from bazaar_devapi.core.errors import TransportError
from bazaar_devapi.schemas.requests import ObtainTokenRequest, RenewTokenRequest
from bazaar_devapi.schemas.results import BazaarResult

logger = logging.getLogger(__name__)

TResult = TypeVar("TResult", bound=BazaarResult)

FormRequest = Union[ObtainTokenRequest, RenewTokenRequest]

AUTHORIZE_PATH = "devapi/v2/auth/authorize/"
TOKEN_PATH = "devapi/v2/auth/token/"


class DeveloperApiClient:
    """Issue GET and form POST calls against the configured vendor base URI."""

    def __init__(
        self,
        settings: BazaarSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def build_url(self, path: str) -> str:
        return urljoin(self._settings.base_uri, path.lstrip("/"))

    async def get(
        self,
        path: str,
        result_type: Type[TResult],
        *,
        params: Optional[Mapping[str, str]] = None,
    ) -> TResult:
        return await self._send("GET", path, result_type, params=params)

    async def post_form(
        self,
        path: str,
        request: FormRequest,
        result_type: Type[TResult],
    ) -> TResult:
        return await self._send("POST", path, result_type, data=request.to_form())

    async def _send(
        self,
        method: str,
        path: str,
        result_type: Type[TResult],
        *,
        params: Optional[Mapping[str, str]] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> TResult:
        url = self.build_url(path)
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, params=params, data=data)
        except httpx.TimeoutException as exc:
            logger.warning("Cafe Bazaar %s %s timed out", method, path)
            raise TransportError(f"Request to {path} timed out.") from exc
        except httpx.HTTPError as exc:
            logger.warning("Cafe Bazaar %s %s failed: %s", method, path, type(exc).__name__)
            raise TransportError(f"Request to {path} failed: {exc}") from exc

        payload = self._decode(response, path)
        try:
            result = result_type.model_validate(payload)
        except ValueError as exc:
            raise TransportError(
                f"Unexpected payload shape returned from {path}.",
                status_code=response.status_code,
            ) from exc
        result._status_code = response.status_code
        if not response.is_success and result.succeeded:
            raise TransportError(
                f"Status {response.status_code} from {path} without a vendor error payload.",
                status_code=response.status_code,
            )
        logger.debug(
            "Cafe Bazaar %s %s returned %s", method, path, response.status_code
        )
        return result

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> dict[str, Any]:
        if not response.content.strip():
            if response.is_success:
                return {}
            raise TransportError(
                f"Empty response with status {response.status_code} from {path}.",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Non-JSON response with status {response.status_code} from {path}.",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise TransportError(
                f"Unexpected payload type returned from {path}.",
                status_code=response.status_code,
            )
        return payload


__all__ = ["AUTHORIZE_PATH", "DeveloperApiClient", "TOKEN_PATH"]
