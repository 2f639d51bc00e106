"""Fake sender adapters for local smoke tests.

Mental model refresher:
- This is outbound adapter code with the same keyword signatures as the real
  senders, so the coordinator cannot tell them apart.
- Nothing leaves the process; the message is printed instead.
"""

from __future__ import annotations

from ..domain.message import compose_telegram_text


def send_email_via_console(
    *,
    from_email: str,
    to_email: str,
    subject: str,
    body: str,
    **_settings: object,
) -> str:
    print("[EMAIL]")
    print(f"from={from_email}")
    print(f"to={to_email}")
    print(f"subject={subject}")
    print(f"body={body}")
    return "Email printed to console"


def send_telegram_via_console(
    *,
    chat_id: str,
    subject: str,
    message: str,
    **_settings: object,
) -> str:
    print("[TELEGRAM]")
    print(f"chat_id={chat_id}")
    print(f"text={compose_telegram_text(subject, message)}")
    return "Telegram notification printed to console"
