from __future__ import annotations

from typing import Optional

import pytest
import requests

from spec_simplifier.adapters.anthropic_http import AnthropicMessagesTransport
from spec_simplifier.domain.errors import MalformedResponseError, TransportError


# -----------------------------
# Test doubles
# -----------------------------
class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = "", json_error: bool = False):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self._json_error = json_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def make_transport(session: FakeSession, api_key: Optional[str] = "sk-test") -> AnthropicMessagesTransport:
    return AnthropicMessagesTransport(
        api_key,
        api_url="https://example.invalid/v1/messages",
        model="test-model",
        max_tokens=1000,
        timeout_seconds=5,
        session=session,
    )


# -----------------------------
# Tests
# -----------------------------
def test_posts_messages_payload_and_returns_text():
    session = FakeSession(FakeResponse(payload={"content": [{"type": "text", "text": '{"newSpecContent": "X"}'}]}))

    text = make_transport(session).complete("simplify this")

    assert text == '{"newSpecContent": "X"}'
    (call,) = session.calls
    assert call["url"] == "https://example.invalid/v1/messages"
    assert call["json"] == {
        "model": "test-model",
        "max_tokens": 1000,
        "messages": [{"role": "user", "content": "simplify this"}],
    }
    assert call["headers"]["x-api-key"] == "sk-test"
    assert call["headers"]["anthropic-version"] == "2023-06-01"
    assert call["timeout"] == 5


def test_missing_api_key_is_sent_empty_and_left_to_the_service():
    session = FakeSession(FakeResponse(status_code=401, text='{"error": "invalid x-api-key"}'))

    with pytest.raises(TransportError) as exc:
        make_transport(session, api_key=None).complete("p")

    assert session.calls[0]["headers"]["x-api-key"] == ""
    assert "401" in str(exc.value)
    assert "invalid x-api-key" in str(exc.value)


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_network_failures_are_transport_errors(error):
    with pytest.raises(TransportError):
        make_transport(FakeSession(error=error)).complete("p")


def test_server_error_is_transport_error():
    with pytest.raises(TransportError):
        make_transport(FakeSession(FakeResponse(status_code=529, text="overloaded"))).complete("p")


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(json_error=True, text="<html>gateway</html>"),
        FakeResponse(payload={"content": []}),
        FakeResponse(payload={"id": "msg_1"}),
        FakeResponse(payload={"content": [{"type": "tool_use"}]}),
        FakeResponse(payload=["not", "a", "dict"]),
    ],
)
def test_unexpected_body_is_malformed(response):
    with pytest.raises(MalformedResponseError):
        make_transport(FakeSession(response)).complete("p")
