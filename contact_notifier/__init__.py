"""Contact form relay that notifies by email and Telegram."""

__version__ = "0.1.0"

from .adapters.fake_senders import send_email_via_console, send_telegram_via_console  # noqa: E402
from .adapters.http_app import create_app  # noqa: E402
from .adapters.payload import parse_contact_payload  # noqa: E402
from .adapters.real_senders import (  # noqa: E402
    send_email_via_sendgrid,
    send_telegram_notification,
)
from .application.dispatch import (  # noqa: E402
    ChannelOutcome,
    DispatchResult,
    aggregate_outcomes,
    dispatch_contact_message,
)
from .config import Config, ServerSettings, load_config_from_env  # noqa: E402
from .domain.message import ContactMessage  # noqa: E402
from .domain.validation import validate_contact_message  # noqa: E402
from .errors import (  # noqa: E402
    ApiError,
    BadRequest,
    ChannelFailure,
    ConfigurationError,
    InternalServerError,
)

__all__ = [
    "ApiError",
    "BadRequest",
    "ChannelFailure",
    "ChannelOutcome",
    "Config",
    "ConfigurationError",
    "ContactMessage",
    "DispatchResult",
    "InternalServerError",
    "ServerSettings",
    "aggregate_outcomes",
    "create_app",
    "dispatch_contact_message",
    "load_config_from_env",
    "parse_contact_payload",
    "send_email_via_console",
    "send_email_via_sendgrid",
    "send_telegram_notification",
    "send_telegram_via_console",
    "validate_contact_message",
]
