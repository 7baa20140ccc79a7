from __future__ import annotations

import pytest

from captcha_a2_cli import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the settings store at tmp_path and drop CAPTCHA_A2_* env vars."""

    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    for name in (config.ENV_BASE_URL, config.ENV_API_KEY, config.ENV_APP_NAME, config.ENV_CLIENT_IP):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
