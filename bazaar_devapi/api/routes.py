"""
FastAPI routes exposing the Cafe Bazaar developer operations.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from bazaar_devapi.dependencies import get_authorization_coordinator, get_developer_service
from bazaar_devapi.schemas import (
    BazaarResult,
    CancelSubscriptionRequest,
    ValidatePurchaseRequest,
    ValidateSubscriptionRequest,
)

router = APIRouter()


def _serialize(result: BazaarResult) -> dict:
    return result.model_dump(by_alias=True, exclude_none=True)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/authorize", status_code=HTTPStatus.OK)
async def start_authorization_flow(
    request: Request,
    coordinator: Annotated[Any, Depends(get_authorization_coordinator)],
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the Cafe Bazaar consent screen.",
    ),
):
    """Return the consent URL, or redirect a browser straight to it."""
    authorization_url = coordinator.get_authorization_uri(
        scheme=request.url.scheme,
        host=request.url.netloc,
    )

    wants_html = "text/html" in request.headers.get("accept", "").lower()
    if redirect or wants_html:
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return {"authorization_url": authorization_url}


@router.get("/status", status_code=HTTPStatus.OK)
async def authorization_status(
    service: Annotated[Any, Depends(get_developer_service)],
) -> dict:
    return {"authorization_required": await service.is_authorization_required()}


@router.post("/purchases/validate", status_code=HTTPStatus.OK)
async def validate_purchase(
    payload: ValidatePurchaseRequest,
    service: Annotated[Any, Depends(get_developer_service)],
) -> dict:
    result = await service.validate_purchase(payload)
    return _serialize(result)


@router.post("/subscriptions/validate", status_code=HTTPStatus.OK)
async def validate_subscription(
    payload: ValidateSubscriptionRequest,
    service: Annotated[Any, Depends(get_developer_service)],
) -> dict:
    result = await service.validate_subscription(payload)
    return _serialize(result)


@router.post("/subscriptions/cancel", status_code=HTTPStatus.OK)
async def cancel_subscription(
    payload: CancelSubscriptionRequest,
    service: Annotated[Any, Depends(get_developer_service)],
) -> dict:
    result = await service.cancel_subscription(payload)
    return _serialize(result)


__all__ = ["router"]
