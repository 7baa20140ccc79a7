from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from .config_types import ClientConfig
from .errors import UnexpectedResponseError
from .models import (
    CaptchaChallenge,
    ClearIpResult,
    ClearPhoneResult,
    ServiceResponse,
    SmsSendResult,
    VerifyResult,
)
from .transport import Transport

# Characters encodeURIComponent leaves alone, besides alphanumerics and "-_.~".
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


class CaptchaA2Client:
    """Async client for the CAPTCHA-A2 slider captcha and SMS verification service.

    Every method is one HTTP round trip. Non-2xx answers raise
    :class:`~captcha_a2_client.errors.ClientError` carrying the service envelope;
    network failures and unparseable bodies propagate unwrapped.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, transport=transport)

    @classmethod
    def from_settings(
            cls,
            *,
            base_url: str,
            api_key: str,
            app_name: str,
            timeout_s: float | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ) -> CaptchaA2Client:
        cfg = ClientConfig(base_url=base_url, api_key=api_key, app_name=app_name, timeout_s=timeout_s)
        return cls(cfg, transport=transport)

    async def __aenter__(self) -> CaptchaA2Client:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._t.aclose()

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def client_ip(self) -> str:
        return self._cfg.client_ip

    def set_client_ip(self, client_ip: str) -> None:
        """Set the ``X-Client-IP`` sent on every subsequent call of this instance."""
        self._cfg.client_ip = client_ip

    async def request(
            self,
            endpoint: str,
            method: str = "GET",
            body: Any | None = None,
            *,
            client_ip: str | None = None,
    ) -> ServiceResponse:
        """Send one request and return the parsed envelope.

        ``endpoint`` is appended to the base URL as is, so it needs a leading
        slash when the base URL has no trailing one. ``client_ip`` overrides the
        instance IP for this call only.
        """
        return await self._t.request(method, endpoint, json_body=body, client_ip=client_ip)

    # --- slider captcha ---
    async def generate_captcha(self, *, client_ip: str | None = None) -> CaptchaChallenge:
        resp = await self.request("/api/v1/captcha/generate", client_ip=client_ip)
        return CaptchaChallenge.from_payload(resp.data)

    async def check_captcha(self, captcha_key: str, value: str, *, client_ip: str | None = None) -> bool:
        """Check a slider position without consuming the challenge."""
        resp = await self.request(
            "/api/v1/captcha/check",
            "POST",
            {"captchaKey": captcha_key, "value": value},
            client_ip=client_ip,
        )
        if resp.data is None:
            return False
        if not isinstance(resp.data, bool):
            raise UnexpectedResponseError(f"captcha check returned {type(resp.data).__name__}, expected bool")
        return resp.data

    async def verify_captcha(self, captcha_key: str, value: str, *, client_ip: str | None = None) -> VerifyResult:
        """Verify a slider position; the challenge is consumed server-side."""
        resp = await self.request(
            "/api/v1/captcha/verify",
            "POST",
            {"captchaKey": captcha_key, "value": value},
            client_ip=client_ip,
        )
        return resp.data

    # --- sms ---
    async def send_sms_with_captcha(
            self,
            captcha_key: str,
            value: str,
            phone: str,
            code: int,
            *,
            client_ip: str | None = None,
    ) -> SmsSendResult:
        body = {"captchaKey": captcha_key, "value": value, "phone": phone, "code": code}
        resp = await self.request("/api/v1/sms/send-with-captcha", "POST", body, client_ip=client_ip)
        return resp.data

    async def verify_sms(self, phone: str, code: int, *, client_ip: str | None = None) -> VerifyResult:
        resp = await self.request("/api/v1/sms/verify", "POST", {"phone": phone, "code": code}, client_ip=client_ip)
        return resp.data

    async def clear_ip_rate_limit(self, *, client_ip: str | None = None) -> ClearIpResult:
        resp = await self.request("/api/v1/sms/clearip", client_ip=client_ip)
        return resp.data

    async def clear_phone_rate_limit(self, phone: str, *, client_ip: str | None = None) -> ClearPhoneResult:
        """Clear rate limits and pending codes for ``phone``."""
        resp = await self.request(f"/api/v1/sms/clear?phone={encode_uri_component(phone)}", client_ip=client_ip)
        return resp.data
