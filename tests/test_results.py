from __future__ import annotations

import pytest

from bazaar_devapi.core.errors import ErrorKind, VendorError
from bazaar_devapi.schemas import (
    CancelSubscriptionResult,
    ObtainTokenResult,
    RenewTokenResult,
    ValidatePurchaseResult,
    ValidateSubscriptionResult,
)


def test_error_payload_raises_vendor_error_with_vendor_message() -> None:
    result = ValidatePurchaseResult.model_validate(
        {"error": "not_found", "error_description": "The requested purchase is not found!"}
    )

    with pytest.raises(VendorError) as excinfo:
        result.ensure_succeeded()

    assert excinfo.value.kind is ErrorKind.VENDOR
    assert excinfo.value.message == "The requested purchase is not found!"
    assert excinfo.value.code == "not_found"


def test_explicit_success_false_is_a_failure() -> None:
    result = CancelSubscriptionResult.model_validate(
        {"success": False, "message": "subscription already cancelled"}
    )

    with pytest.raises(VendorError, match="subscription already cancelled"):
        result.ensure_succeeded()


def test_successful_result_is_returned_unchanged() -> None:
    result = ValidatePurchaseResult.model_validate(
        {
            "consumptionState": 1,
            "purchaseState": 0,
            "kind": "androidpublisher#inappPurchase",
            "developerPayload": "payload",
            "purchaseTime": 1_700_000_000_000,
        }
    )

    assert result.ensure_succeeded() is result
    assert result.purchase_state == 0
    assert result.consumption_state == 1
    assert result.purchased_at is not None
    assert result.purchased_at.year == 2023


def test_subscription_timestamps_are_exposed_as_datetimes() -> None:
    result = ValidateSubscriptionResult.model_validate(
        {
            "kind": "androidpublisher#subscriptionPurchase",
            "initiationTimestampMsec": 1_700_000_000_000,
            "validUntilTimestampMsec": 1_702_592_000_000,
            "autoRenewing": True,
        }
    )

    assert result.ensure_succeeded() is result
    assert result.auto_renewing is True
    assert result.valid_until > result.initiated_at


def test_token_result_without_tokens_is_incomplete() -> None:
    with pytest.raises(VendorError, match="Incomplete token payload"):
        ObtainTokenResult.model_validate({"access_token": "AT1", "expires_in": 3600}).ensure_succeeded()

    with pytest.raises(VendorError, match="Incomplete refresh payload"):
        RenewTokenResult.model_validate({"access_token": "AT2"}).ensure_succeeded()


def test_token_result_success_flag_true_is_accepted() -> None:
    result = ObtainTokenResult.model_validate(
        {"access_token": "AT1", "refresh_token": "RT1", "expires_in": 3600, "success": True}
    )

    assert result.ensure_succeeded() is result
