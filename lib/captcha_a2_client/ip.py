from __future__ import annotations

from typing import Callable

from .config_types import DEFAULT_CLIENT_IP

# Checked in order; the first non-empty value wins.
CLIENT_IP_HEADERS = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
    "X-Client-IP",
)


def resolve_client_ip(header: Callable[[str], str | None], *, default: str = DEFAULT_CLIENT_IP) -> str:
    """Pick the caller IP from proxy headers using a ``header(name)`` lookup.

    For list-valued headers such as ``X-Forwarded-For`` only the first
    (client-most) entry is used.
    """
    for name in CLIENT_IP_HEADERS:
        raw = header(name)
        if not raw:
            continue
        value = raw.split(",")[0].strip()
        if value:
            return value
    return default
