from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional

from spec_simplifier.domain.errors import MalformedResponseError
from spec_simplifier.services.prompt_builder import build_review_prompt

_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(?P<body>.*)\n\s*```$", re.DOTALL)


@dataclass(frozen=True)
class ReviewResponse:
    spec_file_name: str = ""
    spec_file_path: str = ""
    analysis: str = ""
    new_spec_content: Optional[str] = None   # None: the service declined to rewrite

    @property
    def has_content(self) -> bool:
        return self.new_spec_content is not None


class ReviewClient:
    """Strategy interface."""
    def review(
        self,
        spec_content: str,
        related_content: Optional[str] = None,
        *,
        spec_name: str = "",
        spec_path: str = "",
    ) -> ReviewResponse:
        raise NotImplementedError


class MessagesTransport:
    """Sends one prompt, returns the generated text. Raises TransportError / MalformedResponseError."""
    def complete(self, prompt: str) -> str:
        raise NotImplementedError


def ensure_single_trailing_newline(text: str) -> str:
    return text.rstrip("\r\n") + "\n"


def _strip_fence(text: str) -> str:
    m = _FENCE.match(text)
    return m.group("body") if m else text


def parse_review_text(raw: str) -> ReviewResponse:
    """
    The generated text must be one JSON object.
    Unparseable text -> MalformedResponseError (retryable).
    A valid object without usable newSpecContent -> ReviewResponse with no content.
    """
    text = _strip_fence((raw or "").strip())
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}", raw=raw) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(data).__name__}", raw=raw
        )

    content = data.get("newSpecContent")
    if not isinstance(content, str) or not content.strip():
        content = None
    else:
        content = ensure_single_trailing_newline(content)

    return ReviewResponse(
        spec_file_name=str(data.get("specFileName") or ""),
        spec_file_path=str(data.get("specFilePath") or ""),
        analysis=str(data.get("analysis") or ""),
        new_spec_content=content,
    )


@dataclass
class AnthropicReviewClient(ReviewClient):
    transport: MessagesTransport

    def review(
        self,
        spec_content: str,
        related_content: Optional[str] = None,
        *,
        spec_name: str = "",
        spec_path: str = "",
    ) -> ReviewResponse:
        prompt = build_review_prompt(
            spec_content,
            related_content,
            spec_name=spec_name,
            spec_path=spec_path,
        )
        return parse_review_text(self.transport.complete(prompt))
