"""Map developer API errors onto HTTP responses."""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bazaar_devapi.core.errors import DeveloperApiError, ErrorKind, VendorError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.VENDOR: HTTPStatus.BAD_GATEWAY,
    ErrorKind.TRANSPORT: HTTPStatus.GATEWAY_TIMEOUT,
}


def status_for(exc: DeveloperApiError) -> HTTPStatus:
    return STATUS_BY_KIND.get(exc.kind, HTTPStatus.INTERNAL_SERVER_ERROR)


async def developer_api_error_handler(request: Request, exc: DeveloperApiError) -> JSONResponse:
    status = status_for(exc)
    logger.warning(
        "%s %s failed with %s error: %s",
        request.method,
        request.url.path,
        exc.kind.value,
        exc.message,
    )
    return JSONResponse(
        status_code=status,
        content={
            "detail": exc.message,
            "kind": exc.kind.value,
            "code": exc.code if isinstance(exc, VendorError) else None,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DeveloperApiError, developer_api_error_handler)


__all__ = ["STATUS_BY_KIND", "register_error_handlers", "status_for"]
