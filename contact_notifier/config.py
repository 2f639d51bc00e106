"""Environment-variable configuration.

Settings are read once and handed around as frozen values. Channel settings
(`Config`) are required for dispatch; server settings (`ServerSettings`) always
resolve, falling back to defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigurationError

DEFAULT_REQUEST_TIMEOUT_SECONDS = 5.0
DEFAULT_PORT = 8080
DEFAULT_CORS_ORIGINS = ("https://www.oloko64.dev",)

REQUIRED_ENV_VARS = (
    "SENDGRID_API_KEY",
    "SEND_FROM_EMAIL",
    "SEND_TO_EMAIL",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
)


@dataclass(frozen=True)
class Config:
    sendgrid_api_key: str
    send_from_email: str
    send_to_email: str
    telegram_bot_token: str
    telegram_chat_id: str
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    sendgrid_api_base_url: str = "https://api.sendgrid.com"
    telegram_api_base_url: str = "https://api.telegram.org"


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS


def load_config_from_env(environ: Mapping[str, str] | None = None) -> Config:
    """Build channel settings, reporting every missing variable at once."""
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not _clean(env.get(name))]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )

    return Config(
        sendgrid_api_key=_clean(env.get("SENDGRID_API_KEY")),
        send_from_email=_clean(env.get("SEND_FROM_EMAIL")),
        send_to_email=_clean(env.get("SEND_TO_EMAIL")),
        telegram_bot_token=_clean(env.get("TELEGRAM_BOT_TOKEN")),
        telegram_chat_id=_clean(env.get("TELEGRAM_CHAT_ID")),
        request_timeout_seconds=_timeout_seconds(env),
        sendgrid_api_base_url=(
            _clean(env.get("SENDGRID_API_BASE_URL")) or "https://api.sendgrid.com"
        ).rstrip("/"),
        telegram_api_base_url=(
            _clean(env.get("TELEGRAM_API_BASE_URL")) or "https://api.telegram.org"
        ).rstrip("/"),
    )


def load_server_settings_from_env(environ: Mapping[str, str] | None = None) -> ServerSettings:
    env = os.environ if environ is None else environ

    origins_raw = _clean(env.get("CORS_ALLOWED_ORIGINS"))
    origins = tuple(item.strip() for item in origins_raw.split(",") if item.strip())

    return ServerSettings(
        host=_clean(env.get("HOST")) or "0.0.0.0",
        port=_port(env),
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
    )


def load_env_file(path: Path) -> None:
    """Fill unset variables in `os.environ` from a `.env` file, if one exists."""
    if not path.is_file():
        return

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        entry = _parse_env_line(raw_line)
        if entry is not None:
            os.environ.setdefault(*entry)


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#"):
        return None

    name, separator, value = line.partition("=")
    name, value = name.strip(), value.strip()
    if not separator or not name:
        return None
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return name, value


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


def _timeout_seconds(env: Mapping[str, str]) -> float:
    raw = _clean(env.get("REQUEST_TIMEOUT_SECONDS"))
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid REQUEST_TIMEOUT_SECONDS: {raw!r}") from exc
    if timeout <= 0:
        raise ConfigurationError("REQUEST_TIMEOUT_SECONDS must be > 0")
    return timeout


def _port(env: Mapping[str, str]) -> int:
    raw = _clean(env.get("PORT"))
    if not raw:
        print(f"[CONFIG WARNING] PORT not set, using default port {DEFAULT_PORT}")
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        port = -1
    if not 0 < port < 65536:
        print(f"[CONFIG WARNING] PORT={raw!r} is not a valid port, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port
