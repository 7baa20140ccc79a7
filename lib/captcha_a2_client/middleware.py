"""Framework-agnostic captcha guards.

A web framework plugs in by wrapping its request object in something that
satisfies :class:`InboundRequest`. The guards only read headers and the
JSON body; they never touch the shared client IP and pass the caller IP
per call instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, MutableMapping, Protocol

from .client import CaptchaA2Client
from .errors import ClientError
from .ip import resolve_client_ip

log = logging.getLogger(__name__)

VERIFICATION_STATE_KEY = "captcha_verification"


class InboundRequest(Protocol):
    state: MutableMapping[str, Any]

    def header(self, name: str) -> str | None: ...

    async def read_json(self) -> Any: ...

    def reject(self, status_code: int, payload: dict[str, Any]) -> Any: ...


@dataclass
class GuardOutcome:
    passed: bool
    status_code: int = 200
    payload: dict[str, Any] | None = None
    verification: Any = None


def _failure(status_code: int, error: str, message: str) -> GuardOutcome:
    return GuardOutcome(
        passed=False,
        status_code=status_code,
        payload={"code": str(status_code), "data": None, "error": error, "message": message},
    )


async def _read_captcha_fields(request: InboundRequest) -> tuple[str, str] | None:
    try:
        body = await request.read_json()
    except ValueError as e:
        log.debug("unreadable captcha request body: %s", e)
        return None
    if not isinstance(body, dict):
        return None
    captcha_key = body.get("captchaKey")
    value = body.get("value")
    if not isinstance(captcha_key, str) or not captcha_key or not isinstance(value, str) or not value:
        return None
    return captcha_key, value


async def check_captcha_guard(client: CaptchaA2Client, request: InboundRequest) -> GuardOutcome:
    """Run ``check_captcha`` for the request; the challenge stays usable."""
    fields = await _read_captcha_fields(request)
    if fields is None:
        return _failure(400, "CAPTCHA_REQUIRED", "captchaKey and value are required")
    client_ip = resolve_client_ip(request.header)
    try:
        passed = await client.check_captcha(*fields, client_ip=client_ip)
    except ClientError as e:
        return GuardOutcome(passed=False, status_code=e.status_code, payload=e.response.to_payload())
    if not passed:
        log.info("captcha check rejected for %s", client_ip)
        return _failure(403, "CAPTCHA_INVALID", "captcha verification failed")
    return GuardOutcome(passed=True, verification=True)


async def verify_captcha_guard(client: CaptchaA2Client, request: InboundRequest) -> GuardOutcome:
    """Run ``verify_captcha`` for the request, consuming the challenge."""
    fields = await _read_captcha_fields(request)
    if fields is None:
        return _failure(400, "CAPTCHA_REQUIRED", "captchaKey and value are required")
    client_ip = resolve_client_ip(request.header)
    try:
        result = await client.verify_captcha(*fields, client_ip=client_ip)
    except ClientError as e:
        log.info("captcha verify rejected for %s: %s", client_ip, e.error or e.message)
        return GuardOutcome(passed=False, status_code=e.status_code, payload=e.response.to_payload())
    return GuardOutcome(passed=True, verification=result)


Handler = Callable[[InboundRequest], Awaitable[Any]]


def captcha_middleware(
        client: CaptchaA2Client,
        *,
        consume: bool = False,
) -> Callable[[InboundRequest, Handler], Awaitable[Any]]:
    """Build a ``(request, call_next) -> response`` middleware.

    With ``consume=True`` the captcha is verified and the result is stored in
    ``request.state["captcha_verification"]`` for downstream handlers.
    """
    guard = verify_captcha_guard if consume else check_captcha_guard

    async def middleware(request: InboundRequest, call_next: Handler) -> Any:
        outcome = await guard(client, request)
        if not outcome.passed:
            return request.reject(outcome.status_code, outcome.payload or {})
        if consume:
            request.state[VERIFICATION_STATE_KEY] = outcome.verification
        return await call_next(request)

    return middleware
