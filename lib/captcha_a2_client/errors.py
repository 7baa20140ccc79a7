from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import ServiceResponse


class CaptchaA2Error(Exception):
    """Base client error."""


class ClientError(CaptchaA2Error):
    """Non-2xx answer from the service, carrying its envelope verbatim."""

    def __init__(self, response: ServiceResponse, message: str | None = None):
        self.response = response
        text = message or response.message or response.error or f"HTTP {response.status_code}"
        super().__init__(text)

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def code(self) -> Any:
        return self.response.code

    @property
    def error(self) -> str | None:
        return self.response.error

    @property
    def message(self) -> str | None:
        return self.response.message

    @property
    def data(self) -> Any:
        return self.response.data


class UnexpectedResponseError(CaptchaA2Error, ValueError):
    """The body parsed but its shape is not what the endpoint documents."""
