#!/usr/bin/env python3
"""Run the dispatch flow locally without SendGrid or Telegram.

Both channels print to the console. `--fail-email` / `--fail-telegram` make a
channel raise so the partial and total failure paths can be inspected.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Allow running this file directly from repository root.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from contact_notifier.adapters.fake_senders import (  # noqa: E402
    send_email_via_console,
    send_telegram_via_console,
)
from contact_notifier.adapters.payload import parse_contact_payload  # noqa: E402
from contact_notifier.application.dispatch import dispatch_contact_message  # noqa: E402
from contact_notifier.config import Config  # noqa: E402
from contact_notifier.errors import ApiError, ChannelFailure  # noqa: E402


def main() -> int:
    args = parse_args()
    payload = load_payload(args.payload_file)

    def send_email(**kwargs: Any) -> str:
        if args.fail_email:
            raise ChannelFailure("email provider unavailable")
        return send_email_via_console(**kwargs)

    def send_telegram(**kwargs: Any) -> str:
        if args.fail_telegram:
            raise ChannelFailure("telegram provider unavailable")
        return send_telegram_via_console(**kwargs)

    try:
        message = parse_contact_payload(payload)
        result = dispatch_contact_message(
            message,
            demo_config(),
            send_email=send_email,
            send_telegram=send_telegram,
        )
    except ApiError as exc:
        print("")
        print("[ERROR]")
        print(f"status={exc.status_code}")
        print(json.dumps(exc.to_response_body()))
        return 1

    print("")
    print("[SUMMARY]")
    print("status=200")
    print(json.dumps(result.to_response_body()))
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Execute the email/Telegram dispatch with console senders."
    )
    parser.add_argument(
        "--payload-file",
        type=Path,
        default=None,
        help="Optional JSON file with contact, subject and body.",
    )
    parser.add_argument("--fail-email", action="store_true", help="Force the email channel to fail.")
    parser.add_argument(
        "--fail-telegram", action="store_true", help="Force the Telegram channel to fail."
    )
    return parser.parse_args()


def load_payload(payload_file: Path | None) -> Any:
    if payload_file is None:
        return sample_payload()
    with payload_file.open("r", encoding="utf-8") as file_handle:
        return json.load(file_handle)


def sample_payload() -> dict[str, Any]:
    return {"contact": "Jane", "subject": "Hi", "body": "Hello"}


def demo_config() -> Config:
    return Config(
        sendgrid_api_key="demo-key",
        send_from_email="no-reply@example.com",
        send_to_email="inbox@example.com",
        telegram_bot_token="demo-token",
        telegram_chat_id="12345",
    )


if __name__ == "__main__":
    sys.exit(main())
