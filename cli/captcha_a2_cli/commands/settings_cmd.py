from __future__ import annotations

import os

import typer

from captcha_a2_client.config_types import DEFAULT_CLIENT_IP

from .. import console
from ..config import (
    SETTING_KEYS,
    config_path,
    default_config,
    load_config,
    normalize_base_url,
    parse_timeout,
    save_config,
)

app = typer.Typer(help="Manage local settings (~/.config/captcha-a2/config.toml).")


def _mask(secret: str) -> str:
    if not secret:
        return "(empty)"
    if len(secret) <= 4:
        return "****"
    return f"{secret[:2]}…{secret[-2:]}"


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        base_url: str = typer.Option(
            ...,
            "--base-url",
            prompt="Service base URL",
            help="Service base URL like https://captcha.example.com",
        ),
        api_key: str = typer.Option(..., "--api-key", prompt="API key", hide_input=True, help="Api-Key header value."),
        app_name: str = typer.Option(..., "--app-name", prompt="Application name", help="X-App header value."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.base_url = normalize_base_url(base_url, warn=True)
    cfg.api_key = api_key.strip()
    cfg.app_name = app_name.strip()
    if not cfg.base_url:
        console.err("Base URL cannot be empty.")
        raise typer.Exit(code=2)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    timeout = cfg.timeout_s if cfg.timeout_s is not None else "(none)"
    console.plain(
        f"base_url={cfg.base_url or '(empty)'} app_name={cfg.app_name or '(empty)'} "
        f"api_key={_mask(cfg.api_key)} client_ip={cfg.client_ip} timeout_s={timeout}",
    )


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help=f"Setting key ({', '.join(SETTING_KEYS)})."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k not in SETTING_KEYS:
        console.err(f"Unknown setting: {key}")
        raise typer.Exit(code=2)
    value = getattr(cfg, k)
    console.plain("" if value is None else str(value))


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set service base URL."),
        api_key: str | None = typer.Option(None, "--api-key", help="Set API key."),
        app_name: str | None = typer.Option(None, "--app-name", help="Set application name."),
        client_ip: str | None = typer.Option(None, "--client-ip", help="Set default X-Client-IP."),
        timeout_s: str | None = typer.Option(None, "--timeout", help="Request timeout in seconds; empty for none."),
):
    cfg = load_config(with_env=False)
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    if api_key is not None:
        cfg.api_key = api_key.strip()
    if app_name is not None:
        cfg.app_name = app_name.strip()
    if client_ip is not None:
        cfg.client_ip = client_ip.strip() or DEFAULT_CLIENT_IP
    if timeout_s is not None:
        cfg.timeout_s = parse_timeout(timeout_s)
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
