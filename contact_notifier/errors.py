"""Error types shared across layers.

Mental model refresher:
- `ApiError` is the only error family that reaches the HTTP boundary.
- `ChannelFailure` is raised by channel clients and consumed by the dispatch
  coordinator; it is never serialized.
- `ConfigurationError` is raised while loading settings from the environment.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    INTERNAL_SERVER_ERROR = "internal_server_error"


STATUS_CODE_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}


class ApiError(Exception):
    """Caller-visible failure with a `{message, error}` response body."""

    kind: ErrorKind = ErrorKind.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = message if error is None else error

    @property
    def status_code(self) -> int:
        return STATUS_CODE_BY_KIND[self.kind]

    def to_response_body(self) -> dict[str, str]:
        return {"message": self.message, "error": self.error}


class BadRequest(ApiError):
    kind = ErrorKind.BAD_REQUEST


class InternalServerError(ApiError):
    kind = ErrorKind.INTERNAL_SERVER_ERROR


class ChannelFailure(RuntimeError):
    """One channel's transport or provider failure."""

    def __init__(self, description: str, *, details: str | None = None) -> None:
        super().__init__(description if not details else f"{description}: {details}")
        self.description = description
        self.details = details


class ConfigurationError(RuntimeError):
    pass
