"""
FastAPI application entrypoint for the Cafe Bazaar developer API bridge.
"""

from __future__ import annotations

from fastapi import FastAPI

from bazaar_devapi.api.errors import register_error_handlers
from bazaar_devapi.api.middleware import AuthorizationCallbackMiddleware
from bazaar_devapi.api.routes import router as api_router
from bazaar_devapi.core.config import get_settings
from bazaar_devapi.core.logging import configure_logging


def install_developer_api(app: FastAPI, *, prefix: str = "/api/bazaar") -> FastAPI:
    """
    Wire the callback middleware, routes and error handlers into a host app.

    The middleware intercepts the vendor redirect ahead of routing, so it must
    be installed before the application starts serving.
    """
    app.add_middleware(AuthorizationCallbackMiddleware)
    app.include_router(api_router, prefix=prefix)
    register_error_handlers(app)
    return app


def create_app() -> FastAPI:
    """Factory for the standalone FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Cafe Bazaar Developer API Bridge",
        version="0.1.0",
        description="Authorization callback handling and purchase validation for Cafe Bazaar.",
    )
    return install_developer_api(app)


app = create_app()

__all__ = ["app", "create_app", "install_developer_api"]
