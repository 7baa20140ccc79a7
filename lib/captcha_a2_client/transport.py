from __future__ import annotations

import logging
from importlib import metadata
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import ClientError
from .models import ServiceResponse

log = logging.getLogger(__name__)

DISTRIBUTION = "captcha-a2-client"


def client_version() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def default_user_agent() -> str:
    return f"{DISTRIBUTION}/{client_version()}"


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        # No base_url here: endpoints are appended to cfg.base_url verbatim.
        self._client = httpx.AsyncClient(
            timeout=cfg.timeout_s,
            transport=transport,
            follow_redirects=True,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_url(self, endpoint: str) -> str:
        return f"{self._cfg.base_url}{endpoint}"

    def build_headers(self, *, client_ip: str | None = None) -> dict[str, str]:
        return {
            "Api-Key": self._cfg.api_key,
            "X-Client-IP": client_ip if client_ip is not None else self._cfg.client_ip,
            "X-App": self._cfg.app_name,
            "Content-Type": "application/json",
            "User-Agent": self._cfg.user_agent or default_user_agent(),
        }

    async def request(
            self,
            method: str,
            endpoint: str,
            *,
            json_body: Any | None = None,
            client_ip: str | None = None,
    ) -> ServiceResponse:
        url = self.build_url(endpoint)
        headers = self.build_headers(client_ip=client_ip)
        try:
            r = await self._client.request(method, url, headers=headers, json=json_body)
        except httpx.TransportError as e:
            log.warning("%s %s failed: %s", method, endpoint, e)
            raise

        # Envelope is parsed regardless of status; a broken body propagates as is.
        try:
            payload = r.json()
        except ValueError as e:
            log.warning("%s %s returned a non-JSON body (status %s): %s", method, endpoint, r.status_code, e)
            raise

        envelope = ServiceResponse.from_payload(payload, status_code=r.status_code)
        if not r.is_success:
            log.debug("%s %s failed with %s: %s", method, endpoint, r.status_code, envelope.error)
            raise ClientError(envelope)
        return envelope
