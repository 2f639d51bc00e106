"""Structural validation for inbound contact messages.

Lengths are counted in extended grapheme clusters so that emoji sequences and
combining marks count as one user-perceived character each.
"""

from __future__ import annotations

import regex

from ..errors import BadRequest
from .message import ContactMessage

MAX_CONTACT_LENGTH = 50
MAX_SUBJECT_LENGTH = 50
MAX_BODY_LENGTH = 2000

_GRAPHEME = regex.compile(r"\X")


def grapheme_count(text: str) -> int:
    return len(_GRAPHEME.findall(text))


def validate_contact_message(message: ContactMessage) -> None:
    """Raise `BadRequest` for the first failing check.

    Order matters: all emptiness checks run before any length check, so an
    empty contact wins over an over-long subject.
    """
    error = _first_error(message)
    if error is not None:
        raise BadRequest(error, error)


def _first_error(message: ContactMessage) -> str | None:
    if not message.contact:
        return "Contact cannot be empty"
    if not message.subject:
        return "Subject cannot be empty"
    if not message.body:
        return "Body cannot be empty"
    if grapheme_count(message.contact) > MAX_CONTACT_LENGTH:
        return f"Contact cannot be longer than {MAX_CONTACT_LENGTH} characters"
    if grapheme_count(message.subject) > MAX_SUBJECT_LENGTH:
        return f"Subject cannot be longer than {MAX_SUBJECT_LENGTH} characters"
    if grapheme_count(message.body) > MAX_BODY_LENGTH:
        return f"Body cannot be longer than {MAX_BODY_LENGTH} characters"
    return None
