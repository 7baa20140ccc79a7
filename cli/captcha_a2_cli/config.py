from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from captcha_a2_client.config_types import DEFAULT_CLIENT_IP

from . import console

APP_NAME = "captcha-a2"
CONFIG_FILENAME = "config.toml"

ENV_BASE_URL = "CAPTCHA_A2_BASE_URL"
ENV_API_KEY = "CAPTCHA_A2_API_KEY"
ENV_APP_NAME = "CAPTCHA_A2_APP_NAME"
ENV_CLIENT_IP = "CAPTCHA_A2_CLIENT_IP"

SETTING_KEYS = ("base_url", "api_key", "app_name", "client_ip", "timeout_s")

_WARNED_BASE_URL_SCHEME = False


@dataclass
class AppConfig:
    base_url: str = ""
    api_key: str = ""
    app_name: str = ""
    client_ip: str = DEFAULT_CLIENT_IP
    timeout_s: float | None = None


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def parse_timeout(raw: Any) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "base_url": cfg.base_url,
        "api_key": cfg.api_key,
        "app_name": cfg.app_name,
        "client_ip": cfg.client_ip,
    }
    # TOML has no null.
    if cfg.timeout_s is not None:
        data["timeout_s"] = cfg.timeout_s
    return data


def from_toml(data: dict[str, Any]) -> AppConfig:
    return AppConfig(
        base_url=normalize_base_url(str(data.get("base_url") or ""), warn=True),
        api_key=str(data.get("api_key") or ""),
        app_name=str(data.get("app_name") or ""),
        client_ip=str(data.get("client_ip") or DEFAULT_CLIENT_IP),
        timeout_s=parse_timeout(data.get("timeout_s")),
    )


def apply_env(cfg: AppConfig) -> AppConfig:
    base_url = os.getenv(ENV_BASE_URL, "").strip()
    if base_url:
        cfg.base_url = normalize_base_url(base_url)
    api_key = os.getenv(ENV_API_KEY, "").strip()
    if api_key:
        cfg.api_key = api_key
    app_name = os.getenv(ENV_APP_NAME, "").strip()
    if app_name:
        cfg.app_name = app_name
    client_ip = os.getenv(ENV_CLIENT_IP, "").strip()
    if client_ip:
        cfg.client_ip = client_ip
    return cfg


def load_config(*, with_env: bool = True) -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            cfg = from_toml(tomllib.load(f))
    except FileNotFoundError:
        cfg = default_config()
    return apply_env(cfg) if with_env else cfg


def missing_settings(cfg: AppConfig) -> list[str]:
    return [key for key in ("base_url", "api_key", "app_name") if not getattr(cfg, key)]


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
