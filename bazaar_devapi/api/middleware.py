"""
ASGI middleware completing the Cafe Bazaar authorization callback.

A GET on the configured redirect path carrying a ``code`` query parameter is
consumed here, ahead of routing; every other request passes through untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from bazaar_devapi.api.errors import status_for
from bazaar_devapi.core.errors import DeveloperApiError
from bazaar_devapi.dependencies import get_app_settings, get_authorization_coordinator

logger = logging.getLogger(__name__)

CALLBACK_ACKNOWLEDGEMENT = "Cafe Bazaar authorization callback executed."


def _resolve(host_app: Any, dependency: Callable[[], Any]) -> Any:
    """Honor ``app.dependency_overrides`` the way FastAPI routes would."""
    overrides = getattr(host_app, "dependency_overrides", None) or {}
    return overrides.get(dependency, dependency)()


def path_matches(path: str, prefix: str) -> bool:
    """Segment-wise, case-insensitive prefix match."""
    path = path.lower()
    prefix = prefix.lower().rstrip("/")
    if not prefix:
        return path in ("", "/")
    return path == prefix or path.startswith(prefix + "/")


class AuthorizationCallbackMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "GET":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        code = request.query_params.get("code")
        host_app = scope.get("app")
        settings = _resolve(host_app, get_app_settings)
        if not code or not path_matches(request.url.path, settings.bazaar.redirect_route_path):
            await self.app(scope, receive, send)
            return

        coordinator = _resolve(host_app, get_authorization_coordinator)
        try:
            await coordinator.handle_authorization_callback(
                code,
                scheme=request.url.scheme,
                host=request.url.netloc,
            )
        except DeveloperApiError as exc:
            logger.warning(
                "Cafe Bazaar authorization callback failed (%s): %s",
                exc.kind.value,
                exc.message,
            )
            response = PlainTextResponse(
                f"Cafe Bazaar authorization callback failed: {exc.message}",
                status_code=status_for(exc),
            )
        else:
            response = PlainTextResponse(CALLBACK_ACKNOWLEDGEMENT)

        await response(scope, receive, send)


__all__ = [
    "AuthorizationCallbackMiddleware",
    "CALLBACK_ACKNOWLEDGEMENT",
    "path_matches",
]
