from __future__ import annotations
from dataclasses import dataclass

DEFAULT_CLIENT_IP = "none"


@dataclass
class ClientConfig:
    base_url: str
    api_key: str
    app_name: str
    # Per instance, not per call. Concurrent writers: last one wins.
    client_ip: str = DEFAULT_CLIENT_IP
    timeout_s: float | None = None
    user_agent: str | None = None
