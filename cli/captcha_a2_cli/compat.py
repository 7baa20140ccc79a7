from __future__ import annotations

from captcha_a2_client.transport import client_version


def user_agent() -> str:
    # CLI and library ship in one distribution, so they share a version.
    return f"captcha-a2-cli/{client_version()}"
