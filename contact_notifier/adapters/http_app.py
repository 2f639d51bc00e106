"""HTTP adapter: FastAPI application for the contact form endpoint.

Mental model refresher:
- This is the controller-like entrypoint for contact submissions.
- Flow:
  request JSON -> payload adapter -> application dispatch -> JSON response
- This module owns transport concerns (routing, status codes, CORS, lazy
  configuration loading), not validation or aggregation rules.
"""

from __future__ import annotations

import time
from typing import Any, Callable

from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .. import __version__
from ..application.dispatch import dispatch_contact_message
from ..config import Config, ServerSettings, load_config_from_env, load_server_settings_from_env
from ..domain.validation import validate_contact_message
from ..errors import ApiError, BadRequest, ConfigurationError, InternalServerError
from ..types import SendEmailFn, SendTelegramFn
from .payload import INVALID_BODY_MESSAGE, parse_contact_payload
from .real_senders import send_email_via_sendgrid, send_telegram_notification

ConfigLoader = Callable[[], Config]


def create_app(
    config: Config | None = None,
    *,
    server_settings: ServerSettings | None = None,
    config_loader: ConfigLoader = load_config_from_env,
    send_email: SendEmailFn = send_email_via_sendgrid,
    send_telegram: SendTelegramFn = send_telegram_notification,
) -> FastAPI:
    """Build the application.

    When `config` is omitted it is loaded with `config_loader` on the first
    valid submission and reused afterwards; a loading failure is answered
    with 500 and no channel is called.
    """
    settings = server_settings or load_server_settings_from_env()
    resolved: dict[str, Config] = {}
    if config is not None:
        resolved["config"] = config

    def current_config() -> Config:
        if "config" not in resolved:
            try:
                resolved["config"] = config_loader()
            except ConfigurationError as exc:
                print(f"[CONFIG ERROR] {exc}")
                raise InternalServerError("Missing required configuration", str(exc)) from exc
        return resolved["config"]

    app = FastAPI(title="Contact notifier", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(ApiError)
    async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = BadRequest(INVALID_BODY_MESSAGE, _describe_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_response_body())

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return "Email sender"

    router = APIRouter()

    @router.get("/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": __version__,
            "timestamp": int(time.time() * 1000),
        }

    # Sync handler: FastAPI runs it on its worker threadpool, and the dispatch
    # fan-out blocks only that worker.
    @router.post("/send-message")
    def send_message(payload: Any = Body(...)) -> dict[str, str]:
        message = parse_contact_payload(payload)
        validate_contact_message(message)
        result = dispatch_contact_message(
            message,
            current_config(),
            send_email=send_email,
            send_telegram=send_telegram,
        )
        return result.to_response_body()

    app.include_router(router)
    app.include_router(router, prefix="/v1")
    return app


def _describe_validation_errors(exc: RequestValidationError) -> str:
    messages = [str(item.get("msg", "")) for item in exc.errors() if item.get("msg")]
    return "; ".join(messages) or "Request body could not be parsed"
