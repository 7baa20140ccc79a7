from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypedDict

from .errors import UnexpectedResponseError


@dataclass(frozen=True)
class ServiceResponse:
    """Uniform ``{code, data, error, message}`` envelope returned by every endpoint.

    Present fields are kept verbatim, ``null`` included. Absent fields default
    to ``None`` for ``code`` and ``data`` and to ``""`` for ``error`` and
    ``message``.
    """

    code: Any = None
    data: Any = None
    error: str | None = ""
    message: str | None = ""
    status_code: int = 200

    @classmethod
    def from_payload(cls, payload: Any, *, status_code: int = 200) -> ServiceResponse:
        if not isinstance(payload, dict):
            raise UnexpectedResponseError(
                f"expected a JSON object envelope, got {type(payload).__name__}"
            )
        return cls(
            code=payload.get("code"),
            data=payload.get("data"),
            error=payload.get("error", ""),
            message=payload.get("message", ""),
            status_code=status_code,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_payload(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "data": self.data,
            "error": self.error,
            "message": self.message,
        }


_CHALLENGE_FIELDS = {
    "captcha_key": "captcha_key",
    "image": "image",
    "thumb": "thumb",
    "thumb_x": "thumbX",
    "thumb_y": "thumbY",
    "thumb_width": "thumbWidth",
    "thumb_height": "thumbHeight",
    "master_width": "master_width",
    "master_height": "master_height",
    "id": "id",
}


@dataclass(frozen=True)
class CaptchaChallenge:
    """Slider challenge from ``/captcha/generate``.

    The known fields are exposed as attributes; ``raw`` holds the ``data``
    object exactly as the service sent it, extra fields included.
    """

    captcha_key: str | None = None
    image: str | None = None
    thumb: str | None = None
    thumb_x: int | None = None
    thumb_y: int | None = None
    thumb_width: int | None = None
    thumb_height: int | None = None
    master_width: int | None = None
    master_height: int | None = None
    id: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: Any) -> CaptchaChallenge:
        if not isinstance(payload, dict):
            raise UnexpectedResponseError(
                f"captcha challenge must be an object, got {type(payload).__name__}"
            )
        known = {attr: payload.get(wire) for attr, wire in _CHALLENGE_FIELDS.items()}
        return cls(**known, raw=dict(payload))

    def to_payload(self) -> dict[str, Any]:
        data = {
            wire: getattr(self, attr)
            for attr, wire in _CHALLENGE_FIELDS.items()
            if getattr(self, attr) is not None
        }
        data.update(self.raw)
        return data


class VerifyResult(TypedDict):
    code: Any
    message: str


class SmsSendResult(TypedDict):
    msg_id: Any


class ClearIpResult(TypedDict):
    message: str
    ip: str


class ClearPhoneResult(TypedDict):
    message: str
    phone: str
