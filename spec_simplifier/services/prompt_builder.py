from __future__ import annotations

import re
from typing import Optional

# Printable ASCII plus the whitespace that carries code layout.
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\t\n\r]")

NO_RELATED_CONTENT = "No related file content available."

_INSTRUCTIONS = """\
Please review the following test file and simplify it by:

1. Removing unnecessary or unhelpful tests
2. Identifying parts within tests that are not useful
3. Cleaning and simplifying the remaining tests

Rules:
- Do not add any new tests or content.
- Preserve existing comments.
- Keep the import structure unless an import is no longer needed.
- Remove tests that only exercise trivial behaviour. Keep the ones that matter.

The goal is to streamline the test suite while keeping it effective.
"""

_RESPONSE_FORMAT = """\
Present your response as a single JSON object in this format:

{
  "specFileName": "<spec file name>",
  "specFilePath": "<spec file path>",
  "analysis": "<your analysis of the test file>",
  "newSpecContent": "<the simplified test file content>"
}

IMPORTANT:
1. Return ONLY the JSON object. No explanations or prose before or after it.
2. The JSON must be strictly valid and parseable: double-quoted property names,
   no trailing commas, every string properly escaped (newlines as \\n, quotes as \\").
3. The response must start with '{' and end with '}'.
4. If you decide the file should not change, return "newSpecContent": "".
"""


def sanitize(text: Optional[str]) -> str:
    """Strip characters outside printable ASCII, keeping tab/newline/CR."""
    return _NON_PRINTABLE.sub("", text or "")


def build_review_prompt(
    spec_content: str,
    related_content: Optional[str] = None,
    *,
    spec_name: str = "",
    spec_path: str = "",
) -> str:
    parts = [_INSTRUCTIONS]

    if spec_name or spec_path:
        parts.append(f"Spec file name: {spec_name}\nSpec file path: {spec_path}\n")

    parts.append("Test file content:\n" + sanitize(spec_content) + "\n")

    if related_content is not None:
        parts.append("Related file content:\n" + sanitize(related_content) + "\n")
    else:
        parts.append(NO_RELATED_CONTENT + "\n")

    parts.append(_RESPONSE_FORMAT)
    return "\n".join(parts)
