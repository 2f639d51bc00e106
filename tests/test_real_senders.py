from __future__ import annotations

import http.client
import io
import json
import socket
import unittest
import urllib.error
from unittest import mock

from contact_notifier.adapters.real_senders import (
    TELEGRAM_SENT_TEXT,
    send_email_via_sendgrid,
    send_telegram_notification,
)
from contact_notifier.errors import ChannelFailure


def stub_response(
    urlopen_mock: mock.Mock,
    *,
    status: int,
    reason: str = "",
    headers: dict[str, str] | None = None,
    body: bytes = b"",
) -> mock.Mock:
    response = urlopen_mock.return_value.__enter__.return_value
    response.getcode.return_value = status
    response.reason = reason
    response.headers = headers or {}
    response.read.return_value = body
    return response


def send_email(**overrides: object) -> str:
    kwargs: dict[str, object] = {
        "from_email": "no-reply@example.com",
        "to_email": "inbox@example.com",
        "subject": "Hi",
        "body": "Contact: Jane\n\nMessage: Hello",
        "api_key": "SG.key-123",
        "timeout_seconds": 5.0,
    }
    return send_email_via_sendgrid(**(kwargs | overrides))


def send_telegram(**overrides: object) -> str:
    kwargs: dict[str, object] = {
        "bot_token": "123:abc",
        "chat_id": "42",
        "subject": "Hi",
        "message": "Contact: Jane\n\nMessage: Hello",
        "timeout_seconds": 5.0,
    }
    return send_telegram_notification(**(kwargs | overrides))


class SendGridAdapterTests(unittest.TestCase):
    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_posts_json_message(self, urlopen_mock: mock.Mock) -> None:
        stub_response(
            urlopen_mock, status=202, reason="Accepted", headers={"X-Message-Id": "msg-abc123"}
        )

        text = send_email()

        self.assertEqual(
            text, "SendGrid accepted the email (HTTP 202 Accepted); message id msg-abc123"
        )
        request_obj = urlopen_mock.call_args.args[0]
        self.assertEqual(request_obj.full_url, "https://api.sendgrid.com/v3/mail/send")
        self.assertEqual(request_obj.get_method(), "POST")
        self.assertEqual(request_obj.get_header("Authorization"), "Bearer SG.key-123")
        self.assertEqual(urlopen_mock.call_args.kwargs["timeout"], 5.0)

        payload = json.loads((request_obj.data or b"").decode("utf-8"))
        self.assertEqual(payload["personalizations"][0]["to"][0]["email"], "inbox@example.com")
        self.assertEqual(payload["from"]["email"], "no-reply@example.com")
        self.assertEqual(payload["subject"], "Hi")
        self.assertEqual(payload["content"][0]["type"], "text/plain")
        self.assertEqual(payload["content"][0]["value"], "Contact: Jane\n\nMessage: Hello")

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_honors_base_url_override(self, urlopen_mock: mock.Mock) -> None:
        stub_response(urlopen_mock, status=202, reason="Accepted")

        send_email(base_url="http://localhost:9999/")

        request_obj = urlopen_mock.call_args.args[0]
        self.assertEqual(request_obj.full_url, "http://localhost:9999/v3/mail/send")

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_surfaces_http_error(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = urllib.error.HTTPError(
            url="https://api.sendgrid.com/v3/mail/send",
            code=401,
            msg="Unauthorized",
            hdrs=None,
            fp=io.BytesIO(b'{"errors":[{"message":"Permission denied"}]}'),
        )

        with self.assertRaises(ChannelFailure) as exc:
            send_email()

        self.assertIn("HTTP 401", str(exc.exception))
        self.assertIn("Permission denied", exc.exception.details or "")

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_surfaces_transport_error(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = urllib.error.URLError("connection refused")

        with self.assertRaises(ChannelFailure) as exc:
            send_email()

        self.assertIn("connection refused", str(exc.exception))

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_surfaces_timeout(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = socket.timeout("timed out")

        with self.assertRaises(ChannelFailure) as exc:
            send_email()

        self.assertIn("timed out", str(exc.exception))

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_confirmation_includes_provider_body(
        self, urlopen_mock: mock.Mock
    ) -> None:
        stub_response(urlopen_mock, status=200, reason="OK", body=b'  {"queued":true}\n')

        text = send_email()

        self.assertEqual(text, 'SendGrid accepted the email (HTTP 200 OK); {"queued":true}')

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_wraps_malformed_status_line(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = http.client.BadStatusLine("garbage")

        with self.assertRaises(ChannelFailure) as exc:
            send_email()

        self.assertIn("malformed response", str(exc.exception))

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_email_wraps_truncated_body(self, urlopen_mock: mock.Mock) -> None:
        response = stub_response(urlopen_mock, status=202, reason="Accepted")
        response.read.side_effect = http.client.IncompleteRead(b"ab", 10)

        with self.assertRaises(ChannelFailure) as exc:
            send_email()

        self.assertIn("IncompleteRead", exc.exception.details or "")


class TelegramAdapterTests(unittest.TestCase):
    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_telegram_posts_chat_message(self, urlopen_mock: mock.Mock) -> None:
        response = urlopen_mock.return_value.__enter__.return_value
        response.getcode.return_value = 200
        response.read.return_value = b'{"ok":true,"result":{"message_id":7}}'

        text = send_telegram()

        self.assertEqual(text, TELEGRAM_SENT_TEXT)
        request_obj = urlopen_mock.call_args.args[0]
        self.assertEqual(
            request_obj.full_url, "https://api.telegram.org/bot123:abc/sendMessage"
        )
        self.assertEqual(request_obj.get_header("Content-type"), "application/json")
        payload = json.loads((request_obj.data or b"").decode("utf-8"))
        self.assertEqual(
            payload,
            {"chat_id": "42", "text": "Subject: Hi\n\nContact: Jane\n\nMessage: Hello"},
        )

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_telegram_surfaces_status_and_body(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = urllib.error.HTTPError(
            url="https://api.telegram.org/bot123:abc/sendMessage",
            code=400,
            msg="Bad Request",
            hdrs=None,
            fp=io.BytesIO(b'{"ok":false,"description":"Bad Request: chat not found"}'),
        )

        with self.assertRaises(ChannelFailure) as exc:
            send_telegram()

        self.assertEqual(
            exc.exception.description,
            "Error sending Telegram notification, request status 400",
        )
        self.assertIn("chat not found", exc.exception.details or "")

    @mock.patch("contact_notifier.adapters.real_senders.urllib.request.urlopen")
    def test_send_telegram_surfaces_transport_error(self, urlopen_mock: mock.Mock) -> None:
        urlopen_mock.side_effect = urllib.error.URLError("Name or service not known")

        with self.assertRaises(ChannelFailure) as exc:
            send_telegram()

        self.assertIn("Name or service not known", str(exc.exception))


if __name__ == "__main__":
    unittest.main()
