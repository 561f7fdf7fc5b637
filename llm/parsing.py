"""Helpers for reading model replies."""

import re

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def extract_json_text(text: str) -> str:
    """Strip surrounding whitespace and a markdown code fence, if any.

    Models often wrap JSON replies in ```json ... ``` even when asked not to.
    """
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped
