from __future__ import annotations

import pytest

from spec_simplifier.services.prompt_builder import NO_RELATED_CONTENT, build_review_prompt, sanitize


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", ""),
        (None, ""),
        ("plain ascii", "plain ascii"),
        ("café", "caf"),
        ("emoji \U0001F680 here", "emoji  here"),
        ("bell\x07 and nul\x00", "bell and nul"),
        ("line1\n\tline2\r\n", "line1\n\tline2\r\n"),   # layout whitespace survives
    ],
)
def test_sanitize(raw, expected):
    assert sanitize(raw) == expected


def test_prompt_contains_sanitized_spec_and_related_content():
    prompt = build_review_prompt(
        "it('works ✓', () => {})\n",
        "export const x = 1\u00a0;\n",
        spec_name="x.spec.ts",
        spec_path="src/x.spec.ts",
    )

    assert "it('works ', () => {})" in prompt
    assert "export const x = 1;" in prompt
    assert "✓" not in prompt
    assert "Spec file path: src/x.spec.ts" in prompt
    assert NO_RELATED_CONTENT not in prompt


def test_prompt_without_related_content_says_so():
    prompt = build_review_prompt("describe('a', () => {})")

    assert NO_RELATED_CONTENT in prompt
    assert "Related file content:" not in prompt


def test_prompt_asks_for_strict_json_with_new_spec_content():
    prompt = build_review_prompt("x")

    assert '"newSpecContent"' in prompt
    assert '"analysis"' in prompt
    assert "Return ONLY the JSON object" in prompt
    assert "Do not add any new tests" in prompt
    assert "Preserve existing comments" in prompt
