"""
Outgoing request shapes for the Cafe Bazaar developer API.

Every request validates its own required fields before it is dispatched, so a
malformed request never costs a network round trip.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Literal

from pydantic import BaseModel, Field

from bazaar_devapi.core.errors import ValidationError


class BazaarRequest(BaseModel):
    """Base class providing field-presence validation."""

    required_fields: ClassVar[tuple[str, ...]] = ()

    def ensure_valid(self) -> None:
        """Raise ``ValidationError`` naming every required field left empty."""
        missing = tuple(
            name
            for name in self.required_fields
            if not str(getattr(self, name) or "").strip()
        )
        if missing:
            raise ValidationError(
                f"{type(self).__name__} is missing required fields: {', '.join(missing)}.",
                fields=missing,
            )


class ObtainTokenRequest(BazaarRequest):
    """Form body exchanging an authorization code for a credential triple."""

    required_fields: ClassVar[tuple[str, ...]] = (
        "code",
        "client_id",
        "client_secret",
        "redirect_uri",
    )

    grant_type: Literal["authorization_code"] = "authorization_code"
    code: str = ""
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""

    def to_form(self) -> Dict[str, Any]:
        return self.model_dump()


class RenewTokenRequest(BazaarRequest):
    """Form body trading a refresh token for a fresh access token."""

    required_fields: ClassVar[tuple[str, ...]] = (
        "client_id",
        "client_secret",
        "refresh_token",
    )

    grant_type: Literal["refresh_token"] = "refresh_token"
    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""

    def to_form(self) -> Dict[str, Any]:
        return self.model_dump()


class ValidatePurchaseRequest(BazaarRequest):
    """Identifies an in-app product purchase to validate."""

    required_fields: ClassVar[tuple[str, ...]] = (
        "package_name",
        "product_id",
        "purchase_token",
    )

    package_name: str = Field("", description="Application package name, e.g. com.example.app.")
    product_id: str = Field("", description="SKU of the in-app product.")
    purchase_token: str = Field("", description="Token returned to the client on purchase.")


class ValidateSubscriptionRequest(BazaarRequest):
    """Identifies a subscription purchase to validate."""

    required_fields: ClassVar[tuple[str, ...]] = (
        "package_name",
        "subscription_id",
        "purchase_token",
    )

    package_name: str = Field("", description="Application package name.")
    subscription_id: str = Field("", description="SKU of the subscription.")
    purchase_token: str = Field("", description="Token returned to the client on purchase.")


class CancelSubscriptionRequest(ValidateSubscriptionRequest):
    """Identifies a subscription purchase to cancel."""


__all__ = [
    "BazaarRequest",
    "CancelSubscriptionRequest",
    "ObtainTokenRequest",
    "RenewTokenRequest",
    "ValidatePurchaseRequest",
    "ValidateSubscriptionRequest",
]
