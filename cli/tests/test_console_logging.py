from __future__ import annotations

import logging

import pytest

from captcha_a2_cli import console
from captcha_a2_cli.logging_ import LIBRARY_LOGGER, setup_logging
from captcha_a2_client import ClientError, ServiceResponse


@pytest.fixture
def restore_levels():
    names = (LIBRARY_LOGGER, "httpx", "httpcore")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def test_verbose_enables_library_diagnostics(restore_levels) -> None:
    setup_logging(True)

    assert logging.getLogger(LIBRARY_LOGGER).level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.INFO
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_quiet_keeps_library_at_warning(restore_levels) -> None:
    setup_logging(False)

    assert logging.getLogger(LIBRARY_LOGGER).level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_describe_client_error_lists_envelope_fields() -> None:
    e = ClientError(ServiceResponse(code="400", error="BAD_VALUE", message="invalid", status_code=400))

    assert console.describe_client_error(e) == "HTTP 400 code=400 error=BAD_VALUE invalid"


def test_describe_client_error_skips_empty_fields() -> None:
    e = ClientError(ServiceResponse(code=None, error=None, message=None, status_code=503))

    assert console.describe_client_error(e) == "HTTP 503"


def test_service_error_prints_data_payload(capsys) -> None:
    e = ClientError(ServiceResponse(code="429", error="RATE_LIMITED", data={"retry_after": 30}, status_code=429))

    console.service_error(e)
    out = capsys.readouterr().out

    assert "error=RATE_LIMITED" in out
    assert '"retry_after": 30' in out
