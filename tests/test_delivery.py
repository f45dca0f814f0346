from __future__ import annotations

import io
import json
from email.message import Message as HeaderMessage
from urllib import error, request

import pytest

from slack_message.delivery import TransportResponse, UrllibTransport, webhook_host


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def test_post_json_sends_utf8_json_body(monkeypatch) -> None:
    captured = {}

    def fake_urlopen(req, timeout):
        captured["request"] = req
        captured["timeout"] = timeout
        return FakeResponse(b"ok")

    monkeypatch.setattr(request, "urlopen", fake_urlopen)
    transport = UrllibTransport(timeout_seconds=3)

    response = transport.post_json(
        "https://hooks.slack.com/services/test",
        {"channel": "#général", "text": "déployé"},
        {"Content-Type": "application/json"},
    )

    assert response == TransportResponse(status=200, body="ok")
    req = captured["request"]
    assert captured["timeout"] == 3
    assert req.get_method() == "POST"
    assert req.get_header("Content-type") == "application/json"
    assert json.loads(req.data.decode("utf-8")) == {"channel": "#général", "text": "déployé"}


def test_http_error_status_is_returned_with_body(monkeypatch) -> None:
    def fake_urlopen(req, timeout):
        raise error.HTTPError(req.full_url, 404, "Not Found", HeaderMessage(), io.BytesIO(b"no_service"))

    monkeypatch.setattr(request, "urlopen", fake_urlopen)

    response = UrllibTransport().post_json("https://hooks.slack.com/services/gone", {"text": "x"})
    assert response == TransportResponse(status=404, body="no_service")


def test_connection_errors_propagate(monkeypatch) -> None:
    def fake_urlopen(req, timeout):
        raise error.URLError("Name or service not known")

    monkeypatch.setattr(request, "urlopen", fake_urlopen)

    with pytest.raises(error.URLError):
        UrllibTransport().post_json("https://hooks.invalid/services/x", {"text": "x"})


def test_webhook_host_hides_the_secret_path() -> None:
    assert webhook_host("https://hooks.slack.com/services/T000/B000/XXXX") == "hooks.slack.com"
