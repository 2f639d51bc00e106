"""Real provider adapters for email and Telegram delivery.

Mental model refresher:
- This module is an outbound adapter.
- Each sender makes one HTTP request with a bounded timeout and either returns
  confirmation text or raises `ChannelFailure`.
- Settings are passed in explicitly; nothing here reads the environment.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any, NamedTuple

from ..domain.message import compose_telegram_text
from ..errors import ChannelFailure

TELEGRAM_SENT_TEXT = "Telegram notification sent successfully"

_DETAILS_LIMIT = 300


class ProviderResponse(NamedTuple):
    status: int
    reason: str
    headers: Any
    body: str


def send_email_via_sendgrid(
    *,
    from_email: str,
    to_email: str,
    subject: str,
    body: str,
    api_key: str,
    timeout_seconds: float,
    base_url: str = "https://api.sendgrid.com",
) -> str:
    """Send a plain-text email through the SendGrid v3 mail send API.

    Returns SendGrid's own confirmation: the status line, the `X-Message-Id`
    header when present, and the response body when it is not empty.
    """
    endpoint = f"{base_url.rstrip('/')}/v3/mail/send"
    payload = {
        "personalizations": [{"to": [{"email": to_email}]}],
        "from": {"email": from_email},
        "subject": subject,
        "content": [{"type": "text/plain", "value": body}],
    }

    request = _json_request(endpoint, payload)
    request.add_header("Authorization", f"Bearer {api_key}")

    response = _post(
        request,
        timeout_seconds,
        provider="SendGrid email send",
        status_error="SendGrid email send failed HTTP {status}",
    )
    return _sendgrid_confirmation(response)


def send_telegram_notification(
    *,
    bot_token: str,
    chat_id: str,
    subject: str,
    message: str,
    timeout_seconds: float,
    base_url: str = "https://api.telegram.org",
) -> str:
    """Send a message through the Telegram Bot API `sendMessage` method."""
    endpoint = f"{base_url.rstrip('/')}/bot{bot_token}/sendMessage"
    payload = {"chat_id": chat_id, "text": compose_telegram_text(subject, message)}

    _post(
        _json_request(endpoint, payload),
        timeout_seconds,
        provider="Telegram notification",
        status_error="Error sending Telegram notification, request status {status}",
    )
    return TELEGRAM_SENT_TEXT


def _sendgrid_confirmation(response: ProviderResponse) -> str:
    status_line = f"HTTP {response.status} {response.reason}".rstrip()
    parts = [f"SendGrid accepted the email ({status_line})"]
    message_id = response.headers.get("X-Message-Id") if response.headers is not None else None
    if message_id:
        parts.append(f"message id {message_id}")
    if response.body.strip():
        parts.append(response.body.strip()[:_DETAILS_LIMIT])
    return "; ".join(parts)


def _json_request(endpoint: str, payload: dict[str, Any]) -> urllib.request.Request:
    data = json.dumps(payload).encode("utf-8")
    request = urllib.request.Request(endpoint, data=data, method="POST")
    request.add_header("Content-Type", "application/json")
    return request


def _post(
    request: urllib.request.Request,
    timeout_seconds: float,
    *,
    provider: str,
    status_error: str,
) -> ProviderResponse:
    try:
        with urllib.request.urlopen(request, timeout=timeout_seconds) as response:
            result = ProviderResponse(
                status=int(response.getcode()),
                reason=str(response.reason or ""),
                headers=response.headers,
                body=response.read().decode("utf-8", errors="replace"),
            )
    except urllib.error.HTTPError as exc:
        details = exc.read().decode("utf-8", errors="replace")
        raise ChannelFailure(
            status_error.format(status=exc.code), details=details[:_DETAILS_LIMIT]
        ) from exc
    except urllib.error.URLError as exc:
        raise ChannelFailure(f"{provider} failed", details=str(exc.reason)) from exc
    except http.client.HTTPException as exc:
        raise ChannelFailure(
            f"{provider} returned a malformed response", details=repr(exc)
        ) from exc
    except OSError as exc:
        # Read timeouts surface as TimeoutError rather than URLError.
        raise ChannelFailure(f"{provider} failed", details=str(exc) or "timed out") from exc

    if result.status < 200 or result.status >= 300:
        raise ChannelFailure(
            status_error.format(status=result.status), details=result.body[:_DETAILS_LIMIT]
        )
    return result
