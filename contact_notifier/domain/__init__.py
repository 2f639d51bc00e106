"""Domain layer: message model and validation rules."""

from .message import ContactMessage, compose_email_body, compose_telegram_text
from .validation import grapheme_count, validate_contact_message

__all__ = [
    "ContactMessage",
    "compose_email_body",
    "compose_telegram_text",
    "grapheme_count",
    "validate_contact_message",
]
