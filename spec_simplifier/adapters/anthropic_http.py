from __future__ import annotations

import logging
from typing import Optional

import requests

from spec_simplifier.domain.errors import MalformedResponseError, TransportError
from spec_simplifier.services.review_client import MessagesTransport

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MODEL = "claude-3-sonnet-20240229"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"


def _error_detail(resp: Optional[requests.Response]) -> str:
    if resp is None:
        return ""
    return (resp.text or "")[:500]


class AnthropicMessagesTransport(MessagesTransport):
    """
    Adapter around the Messages HTTP endpoint.
    POST {model, max_tokens, messages} and return content[0].text.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 4096,
        timeout_seconds: float = 120,
        anthropic_version: str = DEFAULT_ANTHROPIC_VERSION,
        session: Optional[requests.Session] = None,
    ):
        # A missing key is left for the service to reject (401 -> TransportError).
        self.api_key = api_key or ""
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.anthropic_version = anthropic_version
        self._session = session or requests.Session()

    def build_payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def headers(self) -> dict:
        return {
            "content-type": "application/json",
            "anthropic-version": self.anthropic_version,
            "x-api-key": self.api_key,
        }

    def complete(self, prompt: str) -> str:
        try:
            resp = self._session.post(
                self.api_url,
                json=self.build_payload(prompt),
                headers=self.headers(),
                timeout=self.timeout_seconds,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            detail = _error_detail(e.response)
            status = e.response.status_code if e.response is not None else "?"
            raise TransportError(f"Review service returned HTTP {status}: {detail or e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Error sending to review service: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError("Review service response body is not JSON", raw=_error_detail(resp)) from e

        content = data.get("content") if isinstance(data, dict) else None
        if not content or not isinstance(content, list):
            logger.error("Unexpected response format from review service: %r", data)
            raise MalformedResponseError("Review service response has no content blocks", raw=str(data))

        first = content[0]
        text = first.get("text") if isinstance(first, dict) else None
        if not isinstance(text, str):
            raise MalformedResponseError("Review service content block has no text", raw=str(data))

        return text
