"""
Typed results returned by the Cafe Bazaar developer API.

The vendor reports failures inside the payload (``error`` /
``error_description``, or an explicit ``success: false``), independently of
the HTTP status. ``ensure_succeeded`` turns such payloads into ``VendorError``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from bazaar_devapi.core.errors import VendorError


def _from_millis(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class BazaarResult(BaseModel):
    """Base class for every vendor payload."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    success: Optional[bool] = None
    error: Optional[str] = None
    error_description: Optional[str] = None
    message: Optional[str] = None

    _status_code: Optional[int] = PrivateAttr(default=None)

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the response this result was read from."""
        return self._status_code

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.success is not False

    def ensure_succeeded(self):
        """Raise ``VendorError`` when the payload signals failure, else return self."""
        if not self.succeeded:
            message = (
                self.error_description
                or self.message
                or self.error
                or "Vendor reported an unsuccessful result."
            )
            raise VendorError(message, code=self.error, status_code=self._status_code)
        return self


class ObtainTokenResult(BazaarResult):
    """Credential triple returned by the authorization code exchange."""

    access_token: str = ""
    refresh_token: str = ""
    expires_in: int = 0
    token_type: Optional[str] = None
    scope: Optional[str] = None

    def ensure_succeeded(self):
        super().ensure_succeeded()
        if not self.access_token or not self.refresh_token or self.expires_in <= 0:
            raise VendorError(
                "Incomplete token payload returned from Cafe Bazaar.",
                status_code=self._status_code,
            )
        return self


class RenewTokenResult(BazaarResult):
    """Access token and lifetime returned by a refresh grant."""

    access_token: str = ""
    expires_in: int = 0
    token_type: Optional[str] = None
    scope: Optional[str] = None

    def ensure_succeeded(self):
        super().ensure_succeeded()
        if not self.access_token or self.expires_in <= 0:
            raise VendorError(
                "Incomplete refresh payload returned from Cafe Bazaar.",
                status_code=self._status_code,
            )
        return self


class ValidatePurchaseResult(BazaarResult):
    """State of a single in-app purchase."""

    kind: Optional[str] = None
    consumption_state: Optional[int] = Field(None, alias="consumptionState")
    purchase_state: Optional[int] = Field(None, alias="purchaseState")
    developer_payload: Optional[str] = Field(None, alias="developerPayload")
    purchase_time: Optional[int] = Field(None, alias="purchaseTime")

    @property
    def purchased_at(self) -> Optional[datetime]:
        return _from_millis(self.purchase_time)


class ValidateSubscriptionResult(BazaarResult):
    """State of a subscription purchase."""

    kind: Optional[str] = None
    initiation_timestamp_msec: Optional[int] = Field(None, alias="initiationTimestampMsec")
    valid_until_timestamp_msec: Optional[int] = Field(None, alias="validUntilTimestampMsec")
    auto_renewing: Optional[bool] = Field(None, alias="autoRenewing")

    @property
    def initiated_at(self) -> Optional[datetime]:
        return _from_millis(self.initiation_timestamp_msec)

    @property
    def valid_until(self) -> Optional[datetime]:
        return _from_millis(self.valid_until_timestamp_msec)


class CancelSubscriptionResult(BazaarResult):
    """Acknowledgement of a subscription cancellation; usually an empty payload."""


__all__ = [
    "BazaarResult",
    "CancelSubscriptionResult",
    "ObtainTokenResult",
    "RenewTokenResult",
    "ValidatePurchaseResult",
    "ValidateSubscriptionResult",
]
