#!/usr/bin/env python3
"""Run the contact form HTTP server with uvicorn.

Channel settings (SendGrid/Telegram) are read from the environment, with an
optional `.env` file at the repository root filling in unset variables.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Allow running this file directly from repository root.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import uvicorn  # noqa: E402

from contact_notifier import __version__  # noqa: E402
from contact_notifier.adapters.http_app import create_app  # noqa: E402
from contact_notifier.config import (  # noqa: E402
    load_config_from_env,
    load_env_file,
    load_server_settings_from_env,
)
from contact_notifier.errors import ConfigurationError  # noqa: E402


def main() -> int:
    args = parse_args()
    load_env_file(args.env_file)
    settings = load_server_settings_from_env()

    try:
        config = load_config_from_env()
    except ConfigurationError as exc:
        print(f"[CONFIG ERROR] {exc}")
        return 1

    app = create_app(config, server_settings=settings)
    print(
        f"[SERVER START] version={__version__} host={settings.host} port={settings.port} "
        f"cors_origins={','.join(settings.cors_origins)}"
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the contact form HTTP server.")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=REPO_ROOT / ".env",
        help="Optional .env file with KEY=value lines. Default: repository .env.",
    )
    return parser.parse_args()


if __name__ == "__main__":
    sys.exit(main())
