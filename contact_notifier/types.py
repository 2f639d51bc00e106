"""Shared type aliases for the contact notifier package."""

from __future__ import annotations

from typing import Callable

ResponseBody = dict[str, str]

SendEmailFn = Callable[..., str]
SendTelegramFn = Callable[..., str]
