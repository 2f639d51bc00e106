"""Application orchestration for dual-channel dispatch.

Mental model refresher:
- Application layer coordinates use-case flow across domain and adapters.
- In this project it:
  1) validates the contact message
  2) sends email and Telegram notifications concurrently
  3) aggregates both outcomes into one result or one error
- A single failed channel still yields a result; only a total failure is an
  error for the caller.
"""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from ..adapters.real_senders import send_email_via_sendgrid, send_telegram_notification
from ..config import Config
from ..domain.message import ContactMessage, compose_email_body
from ..domain.validation import validate_contact_message
from ..errors import ChannelFailure, InternalServerError
from ..types import ResponseBody, SendEmailFn, SendTelegramFn

EMAIL_FAILED_TEXT = "Error while sending email"
TELEGRAM_FAILED_TEXT = "Error while sending Telegram notification"
BOTH_FAILED_MESSAGE = "Both email and Telegram notification failed"


@dataclass(frozen=True)
class ChannelOutcome:
    channel: str
    succeeded: bool
    text: str
    error: str | None = None


@dataclass(frozen=True)
class DispatchResult:
    email_message: str
    telegram_message: str

    def to_response_body(self) -> ResponseBody:
        return {"emailMessage": self.email_message, "telegramMessage": self.telegram_message}


def dispatch_contact_message(
    message: ContactMessage,
    config: Config,
    *,
    send_email: SendEmailFn = send_email_via_sendgrid,
    send_telegram: SendTelegramFn = send_telegram_notification,
) -> DispatchResult:
    """Validate, fan out to both channels, and aggregate the outcomes.

    Raises `BadRequest` before any network activity when validation fails and
    `InternalServerError` when both channels fail.
    """
    validate_contact_message(message)

    composed_body = compose_email_body(message)

    # Not a context manager: leaving the block would join a thread that is
    # still stuck on a slow provider, past the call's own deadline.
    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="dispatch")
    try:
        email_future = executor.submit(
            send_email,
            from_email=config.send_from_email,
            to_email=config.send_to_email,
            subject=message.subject,
            body=composed_body,
            api_key=config.sendgrid_api_key,
            timeout_seconds=config.request_timeout_seconds,
            base_url=config.sendgrid_api_base_url,
        )
        telegram_future = executor.submit(
            send_telegram,
            bot_token=config.telegram_bot_token,
            chat_id=config.telegram_chat_id,
            subject=message.subject,
            message=composed_body,
            timeout_seconds=config.request_timeout_seconds,
            base_url=config.telegram_api_base_url,
        )
        deadline = time.monotonic() + config.request_timeout_seconds

        email_outcome = _collect("email", email_future, EMAIL_FAILED_TEXT, deadline)
        telegram_outcome = _collect("telegram", telegram_future, TELEGRAM_FAILED_TEXT, deadline)
    finally:
        executor.shutdown(wait=False)

    return aggregate_outcomes(email_outcome, telegram_outcome)


def aggregate_outcomes(email: ChannelOutcome, telegram: ChannelOutcome) -> DispatchResult:
    print(
        f"[DISPATCH] email_succeeded={email.succeeded} "
        f"telegram_succeeded={telegram.succeeded}"
    )
    if not email.succeeded and not telegram.succeeded:
        raise InternalServerError(
            BOTH_FAILED_MESSAGE,
            "; ".join([EMAIL_FAILED_TEXT, TELEGRAM_FAILED_TEXT]),
        )
    return DispatchResult(email_message=email.text, telegram_message=telegram.text)


def _collect(
    channel: str, future: Future[str], placeholder: str, deadline: float
) -> ChannelOutcome:
    try:
        text = future.result(timeout=max(0.0, deadline - time.monotonic()))
    except TimeoutError:
        error = ChannelFailure(f"{channel} channel did not finish before its deadline")
        return _failed(channel, placeholder, error)
    except Exception as exc:
        return _failed(channel, placeholder, exc)
    return ChannelOutcome(channel=channel, succeeded=True, text=str(text))


def _failed(channel: str, placeholder: str, exc: Exception) -> ChannelOutcome:
    print(f"[CHANNEL ERROR] channel={channel} error={exc}")
    return ChannelOutcome(channel=channel, succeeded=False, text=placeholder, error=str(exc))
