from __future__ import annotations

import pytest

from captcha_a2_client.errors import ClientError, UnexpectedResponseError
from captcha_a2_client.models import CaptchaChallenge, ServiceResponse


def test_service_response_keeps_values_verbatim() -> None:
    resp = ServiceResponse.from_payload({"code": 0, "data": {"x": 1}, "error": "", "message": "ok"}, status_code=201)

    assert resp.code == 0
    assert resp.data == {"x": 1}
    assert resp.ok
    assert resp.to_payload() == {"code": 0, "data": {"x": 1}, "error": "", "message": "ok"}


def test_service_response_fills_missing_fields() -> None:
    resp = ServiceResponse.from_payload({"data": True})

    assert resp.code is None
    assert (resp.error, resp.message) == ("", "")
    assert resp.data is True


def test_service_response_rejects_non_object_body() -> None:
    with pytest.raises(UnexpectedResponseError):
        ServiceResponse.from_payload([1, 2, 3])


def test_unexpected_response_is_a_value_error_not_a_client_error() -> None:
    exc = UnexpectedResponseError("bad shape")

    assert isinstance(exc, ValueError)
    assert not isinstance(exc, ClientError)


def test_service_response_keeps_null_fields() -> None:
    payload = {"code": "400", "error": None, "message": None, "data": None}

    resp = ServiceResponse.from_payload(payload, status_code=400)

    assert resp.error is None
    assert resp.message is None
    assert resp.to_payload() == payload


def test_challenge_keeps_unknown_fields() -> None:
    payload = {"captcha_key": "ck", "thumbX": 12, "thumbY": 34, "expires_at": 1700000000}

    challenge = CaptchaChallenge.from_payload(payload)

    assert challenge.to_payload() == payload
    assert challenge.raw["expires_at"] == 1700000000


def test_challenge_tolerates_missing_fields() -> None:
    challenge = CaptchaChallenge.from_payload({"captcha_key": "ck", "image": "", "thumb": ""})

    assert challenge.captcha_key == "ck"
    assert challenge.id is None
    assert challenge.master_height is None
    assert "id" not in challenge.to_payload()


def test_challenge_built_by_hand_serializes_wire_names() -> None:
    challenge = CaptchaChallenge(captcha_key="ck", thumb_x=1, thumb_y=2)

    assert challenge.to_payload() == {"captcha_key": "ck", "thumbX": 1, "thumbY": 2}


def test_challenge_rejects_non_object() -> None:
    with pytest.raises(UnexpectedResponseError):
        CaptchaChallenge.from_payload(["ck"])


def test_client_error_message_falls_back_to_error_then_status() -> None:
    assert str(ClientError(ServiceResponse(error="RATE_LIMITED", status_code=429))) == "RATE_LIMITED"
    assert str(ClientError(ServiceResponse(status_code=502))) == "HTTP 502"
