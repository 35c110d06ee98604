"""Helpers for pulling JSON out of free-form model replies."""

import json
import re
from typing import Any

from careerpath.core.logging import get_logger

logger = get_logger(__name__)

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_CODE_FENCE = re.compile(r"```(?:json|javascript|js|text)?\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)


def _loads(text: str) -> Any | None:
    """json.loads after removing trailing commas; None when it still fails."""
    try:
        return json.loads(_TRAILING_COMMA.sub(r"\1", text.strip()))
    except ValueError:
        return None


def _first_balanced(text: str) -> str | None:
    """Return the first balanced ``{...}`` or ``[...]`` span, ignoring brackets in strings."""
    start = next((i for i, ch in enumerate(text) if ch in "{["), None)
    if start is None:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            in_string = not in_string
        elif not in_string and ch in "{[":
            depth += 1
        elif not in_string and ch in "}]":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def parse_llm_json_response(content: str | None, expected: type | None = None) -> Any:
    """Parse JSON from a model reply.

    Tries, in order: the whole reply, the first fenced code block, and the
    first balanced JSON span inside surrounding prose.

    Args:
        content: Raw model reply
        expected: ``list`` or ``dict`` to require a particular top-level type

    Raises:
        ValueError: Empty reply, no parseable JSON, or wrong top-level type
    """
    if not content:
        raise ValueError("Empty LLM response")

    candidates = [content]
    fenced = _CODE_FENCE.search(content)
    if fenced:
        candidates.append(fenced.group(1))
    span = _first_balanced(content)
    if span:
        candidates.append(span)

    for candidate in candidates:
        parsed = _loads(candidate)
        if parsed is None:
            continue
        if expected is not None and not isinstance(parsed, expected):
            raise ValueError(f"Expected JSON {expected.__name__}, got {type(parsed).__name__}")
        return parsed

    logger.error("Failed to parse LLM JSON response", content_preview=content[:200])
    raise ValueError("Failed to parse LLM JSON response: no valid JSON found")
