"""Payload adapter functions.

Mental model refresher:
- This is an adapter/edge module.
- It translates the JSON request body into the internal `ContactMessage`.
- It checks shape only (object with string fields); content rules such as
  emptiness and length belong to the validator.
"""

from __future__ import annotations

from typing import Any

from ..domain.message import ContactMessage
from ..errors import BadRequest

INVALID_BODY_MESSAGE = "Invalid request body"


def parse_contact_payload(payload: Any) -> ContactMessage:
    """Normalize a decoded JSON body into a `ContactMessage`.

    Values are kept exactly as sent so the validator sees what the caller sent.
    """
    if not isinstance(payload, dict):
        raise BadRequest(INVALID_BODY_MESSAGE, "Request body must be a JSON object")

    return ContactMessage(
        contact=_as_required_str(payload, "contact"),
        subject=_as_required_str(payload, "subject"),
        body=_as_required_str(payload, "body"),
    )


def _as_required_str(payload: dict[str, Any], field_name: str) -> str:
    value = payload.get(field_name)
    if not isinstance(value, str):
        raise BadRequest(INVALID_BODY_MESSAGE, f"Missing or invalid field: {field_name}")
    return value
