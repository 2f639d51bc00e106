"""Adapter layer: HTTP surface, payload mapping, and sender implementations."""

from .fake_senders import send_email_via_console, send_telegram_via_console
from .http_app import create_app
from .payload import parse_contact_payload
from .real_senders import send_email_via_sendgrid, send_telegram_notification

__all__ = [
    "create_app",
    "parse_contact_payload",
    "send_email_via_console",
    "send_email_via_sendgrid",
    "send_telegram_notification",
    "send_telegram_via_console",
]
