from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import httpx
import typer

from captcha_a2_client import CaptchaA2Client, ClientError, UnexpectedResponseError
from captcha_a2_client.config_types import ClientConfig

from . import console
from .compat import user_agent
from .config import AppConfig, missing_settings

T = TypeVar("T")


def make_client(cfg: AppConfig, *, client_ip: str | None = None) -> CaptchaA2Client:
    missing = missing_settings(cfg)
    if missing:
        console.err(f"Missing settings: {', '.join(missing)}. Run `captcha-a2 settings init` first.")
        raise typer.Exit(code=2)
    return CaptchaA2Client(
        ClientConfig(
            base_url=cfg.base_url,
            api_key=cfg.api_key,
            app_name=cfg.app_name,
            client_ip=client_ip or cfg.client_ip,
            timeout_s=cfg.timeout_s,
            user_agent=user_agent(),
        )
    )


def run_call(
        cfg: AppConfig,
        call: Callable[[CaptchaA2Client], Awaitable[T]],
        *,
        client_ip: str | None = None,
) -> T:
    """Run one client coroutine to completion and map failures to exit codes."""
    client = make_client(cfg, client_ip=client_ip)

    async def _run() -> T:
        async with client:
            return await call(client)

    try:
        return asyncio.run(_run())
    except ClientError as e:
        console.service_error(e)
        raise typer.Exit(code=1)
    except UnexpectedResponseError as e:
        console.err(f"Unexpected response: {e}")
        raise typer.Exit(code=2)
    except (httpx.HTTPError, ValueError) as e:
        console.err(f"transport failure: {e}")
        raise typer.Exit(code=2)

