from __future__ import annotations

import pytest

from bazaar_devapi.core.errors import ValidationError
from bazaar_devapi.schemas import (
    CancelSubscriptionRequest,
    ObtainTokenRequest,
    RenewTokenRequest,
    ValidatePurchaseRequest,
    ValidateSubscriptionRequest,
)

VALID_REQUESTS = {
    ObtainTokenRequest: dict(
        code="ABC", client_id="c1", client_secret="s1", redirect_uri="https://h/cb"
    ),
    RenewTokenRequest: dict(client_id="c1", client_secret="s1", refresh_token="RT1"),
    ValidatePurchaseRequest: dict(
        package_name="com.example.app", product_id="coins_100", purchase_token="tok"
    ),
    ValidateSubscriptionRequest: dict(
        package_name="com.example.app", subscription_id="gold", purchase_token="tok"
    ),
    CancelSubscriptionRequest: dict(
        package_name="com.example.app", subscription_id="gold", purchase_token="tok"
    ),
}

CASES = [
    (request_type, field, blank)
    for request_type, values in VALID_REQUESTS.items()
    for field in values
    for blank in ("", "   ")
]


@pytest.mark.parametrize("request_type", list(VALID_REQUESTS))
def test_complete_requests_pass_validation(request_type) -> None:
    request_type(**VALID_REQUESTS[request_type]).ensure_valid()


@pytest.mark.parametrize(("request_type", "field", "blank"), CASES)
def test_blank_required_field_is_rejected(request_type, field, blank) -> None:
    values = {**VALID_REQUESTS[request_type], field: blank}

    with pytest.raises(ValidationError) as excinfo:
        request_type(**values).ensure_valid()

    assert excinfo.value.fields == (field,)


def test_all_missing_fields_are_reported() -> None:
    with pytest.raises(ValidationError) as excinfo:
        ValidatePurchaseRequest().ensure_valid()

    assert excinfo.value.fields == ("package_name", "product_id", "purchase_token")


def test_token_bodies_carry_distinct_grant_types() -> None:
    obtain = ObtainTokenRequest(**VALID_REQUESTS[ObtainTokenRequest]).to_form()
    renew = RenewTokenRequest(**VALID_REQUESTS[RenewTokenRequest]).to_form()

    assert obtain["grant_type"] == "authorization_code"
    assert renew["grant_type"] == "refresh_token"
    assert "refresh_token" not in obtain
    assert "code" not in renew
