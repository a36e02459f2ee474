from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from typing import Any

import httpx
from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "mandi"
CONFIG_FILENAME = "config.toml"
API_PATH = "/api"
BASE_URL_DEFAULT = f"http://localhost:3001{API_PATH}"
TOKEN_KEY_DEFAULT = "authToken"
TIMEOUT_DEFAULT = 15.0
USER_AGENT = "mandi-client/0.1.0"
ENV_API_URL = "MANDI_API_URL"
ENV_API_TIMEOUT = "MANDI_API_TIMEOUT"

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0"}


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = BASE_URL_DEFAULT
    timeout_s: float = TIMEOUT_DEFAULT
    token_key: str = TOKEN_KEY_DEFAULT
    user_agent: str = USER_AGENT


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def normalize_base_url(raw: str | None, *, api_path: str | None = API_PATH) -> str:
    """Complete a host or URL into an API base URL.

    A missing scheme is ``http`` for local hosts and ``https`` otherwise. A
    URL without a path gets ``api_path``. Trailing slashes are dropped.
    """
    value = (raw or "").strip().rstrip("/")
    if not value:
        return ""
    if "://" not in value:
        host = value.split("/", 1)[0].split(":", 1)[0].lower()
        scheme = "http" if host in _LOCAL_HOSTS else "https"
        value = f"{scheme}://{value}"

    url = httpx.URL(value)
    if api_path and url.path in ("", "/"):
        url = url.copy_with(path=api_path)
    return str(url).rstrip("/")


def _parse_timeout(raw: Any) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("ignoring invalid timeout %r", raw)
        return None
    if value <= 0:
        logger.warning("ignoring non-positive timeout %r", raw)
        return None
    return value


def from_toml(data: dict[str, Any]) -> ClientConfig:
    api_raw = data.get("api") or {}
    if not isinstance(api_raw, dict):
        api_raw = {}
    base_url = normalize_base_url(str(api_raw.get("base_url") or ""))
    timeout_s = _parse_timeout(api_raw.get("timeout_s"))
    token_key = str(api_raw.get("token_key") or "").strip()
    return ClientConfig(
        base_url=base_url or BASE_URL_DEFAULT,
        timeout_s=timeout_s or TIMEOUT_DEFAULT,
        token_key=token_key or TOKEN_KEY_DEFAULT,
    )


def load_client_config() -> ClientConfig:
    """Config file first, then MANDI_API_URL / MANDI_API_TIMEOUT on top."""
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        cfg = from_toml(data)
    except FileNotFoundError:
        cfg = ClientConfig()

    env_url = normalize_base_url(os.getenv(ENV_API_URL, ""))
    env_timeout = _parse_timeout(os.getenv(ENV_API_TIMEOUT, "").strip())
    return ClientConfig(
        base_url=env_url or cfg.base_url,
        timeout_s=env_timeout or cfg.timeout_s,
        token_key=cfg.token_key,
        user_agent=cfg.user_agent,
    )
