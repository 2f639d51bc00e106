"""Contact message model and outbound content composition.

Mental model refresher:
- Domain modules hold the message rules.
- They decide what content each channel receives.
- They do not know about HTTP, JSON, or provider APIs.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactMessage:
    contact: str
    subject: str
    body: str


def compose_email_body(message: ContactMessage) -> str:
    """Body shared by both channels."""
    return f"Contact: {message.contact}\n\nMessage: {message.body}"


def compose_telegram_text(subject: str, message: str) -> str:
    return f"Subject: {subject}\n\n{message}"
