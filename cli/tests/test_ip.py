from __future__ import annotations

from captcha_a2_client.ip import resolve_client_ip


def _lookup(headers: dict[str, str]):
    lowered = {k.lower(): v for k, v in headers.items()}
    return lambda name: lowered.get(name.lower())


def test_forwarded_for_uses_first_entry() -> None:
    headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
    assert resolve_client_ip(_lookup(headers)) == "203.0.113.7"


def test_cloudflare_header_wins_over_forwarded_for() -> None:
    headers = {"X-Forwarded-For": "10.0.0.1", "CF-Connecting-IP": "198.51.100.2"}
    assert resolve_client_ip(_lookup(headers)) == "198.51.100.2"


def test_blank_headers_are_skipped() -> None:
    headers = {"X-Forwarded-For": " , 10.0.0.1", "X-Real-IP": "192.0.2.5"}
    assert resolve_client_ip(_lookup(headers)) == "192.0.2.5"


def test_falls_back_to_sentinel() -> None:
    assert resolve_client_ip(_lookup({})) == "none"
    assert resolve_client_ip(_lookup({}), default="") == ""
