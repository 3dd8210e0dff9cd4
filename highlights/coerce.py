"""
Turn free-form model output into a short list of clean strings.

The model is asked for a bare JSON array but regularly wraps it in prose or
code fences, numbers the entries, or ignores the format entirely. Strategies,
first match wins:

  1. the whole text parses as a JSON array
  2. the first "[" ... last "]" span parses as a JSON array
  3. split on line breaks / bullets and keep up to FALLBACK_LIMIT fragments

Only string elements of a parsed array are kept. Callers truncate the result
to the number of items they actually display.
"""

from __future__ import annotations

import json
import re
from typing import Any

FALLBACK_LIMIT = 10

_ARRAY_SPAN = re.compile(r"\[.*\]", re.DOTALL)
_FRAGMENT_SPLIT = re.compile(r"\r?\n|•|-\s+")
_LEADING_MARKER = re.compile(r"^\d+\.|^[-•]\s*")


def normalize_item(text: str) -> str:
    """Strip one leading enumeration marker ("1.", "-", "•") and surrounding whitespace."""
    return _LEADING_MARKER.sub("", text.strip(), count=1).strip()


def _strings_from_array(raw: str) -> list[str] | None:
    try:
        parsed: Any = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(parsed, list):
        return None
    return [normalize_item(v) for v in parsed if isinstance(v, str)]


def coerce_to_string_list(text: str) -> list[str]:
    items = _strings_from_array(text)
    if items is not None:
        return items

    match = _ARRAY_SPAN.search(text)
    if match:
        items = _strings_from_array(match.group(0))
        if items is not None:
            return items

    fragments = (normalize_item(part) for part in _FRAGMENT_SPLIT.split(text))
    return [f for f in fragments if f][:FALLBACK_LIMIT]
