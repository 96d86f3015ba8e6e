from __future__ import annotations

from datetime import timedelta
from urllib.parse import parse_qs

import httpx
import pytest

from bazaar_devapi.core.errors import TransportError, ValidationError, VendorError
from bazaar_devapi.services import AuthorizationFlowCoordinator, resolve_redirect_uri

TOKEN_URL_PATH = "/devapi/v2/auth/token/"


@pytest.fixture
def coordinator(bazaar_settings, api_client, store) -> AuthorizationFlowCoordinator:
    return AuthorizationFlowCoordinator(bazaar_settings, api_client, store)


def test_relative_redirect_path_resolves_against_inbound_request() -> None:
    assert (
        resolve_redirect_uri("/oauth/cb", scheme="https", host="shop.example:8443")
        == "https://shop.example:8443/oauth/cb"
    )
    assert resolve_redirect_uri("oauth/cb", scheme="http", host="localhost") == "http://localhost/oauth/cb"


def test_absolute_redirect_path_is_used_verbatim() -> None:
    absolute = "https://callbacks.example/bazaar/cb?tenant=1"

    assert resolve_redirect_uri(absolute, scheme="http", host="ignored") == absolute
    assert resolve_redirect_uri(absolute) == absolute


def test_relative_redirect_path_without_request_context_is_rejected() -> None:
    with pytest.raises(ValidationError):
        resolve_redirect_uri("/oauth/cb")


def test_authorization_uri_requests_offline_code_flow(coordinator) -> None:
    uri = coordinator.get_authorization_uri(scheme="https", host="shop.example")

    assert uri == (
        "https://vendor.example/devapi/v2/auth/authorize/"
        "?response_type=code&access_type=offline"
        "&redirect_uri=https://shop.example/oauth/cb&client_id=c1"
    )


@pytest.mark.anyio
async def test_callback_exchanges_code_and_saves_triple(coordinator, store, vendor, clock) -> None:
    vendor.respond(
        TOKEN_URL_PATH,
        {"access_token": "AT1", "refresh_token": "RT1", "expires_in": 3600, "success": True},
    )

    await coordinator.handle_authorization_callback("ABC", scheme="https", host="shop.example")

    form = parse_qs(vendor.requests[0].content.decode())
    assert form == {
        "grant_type": ["authorization_code"],
        "code": ["ABC"],
        "client_id": ["c1"],
        "client_secret": ["s1"],
        "redirect_uri": ["https://shop.example/oauth/cb"],
    }
    snapshot = store.snapshot()
    assert (snapshot.access_token, snapshot.refresh_token) == ("AT1", "RT1")
    assert (snapshot.expires_at - clock()).total_seconds() == 3600


@pytest.mark.anyio
@pytest.mark.parametrize("code", ["", "   "])
async def test_empty_code_is_rejected_before_network(coordinator, vendor, code) -> None:
    with pytest.raises(ValidationError):
        await coordinator.handle_authorization_callback(code, scheme="https", host="shop.example")

    assert vendor.requests == []


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("reply", "error_type"),
    [
        (httpx.Response(400, json={"error": "invalid_grant", "error_description": "Code expired"}), VendorError),
        (httpx.Response(502, text="upstream down"), TransportError),
    ],
)
async def test_failed_exchange_leaves_store_untouched(
    coordinator, store, vendor, reply, error_type
) -> None:
    await store.save("OLD", timedelta(hours=1), "OLD-RT")
    vendor.respond(TOKEN_URL_PATH, reply)

    with pytest.raises(error_type):
        await coordinator.handle_authorization_callback("ABC", scheme="https", host="shop.example")

    assert await store.get_access_token() == "OLD"
    assert await store.get_refresh_token() == "OLD-RT"
