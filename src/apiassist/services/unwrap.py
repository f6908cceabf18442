"""Recursive resolution of JSON documents embedded in strings.

Agent responses sometimes carry a field as a proper JSON value and sometimes
as the same value serialized into a string, possibly several levels deep.
``deep_unwrap`` hides that difference from callers.
"""

import json
from typing import Any

_BRACKETS = {"{": "}", "[": "]"}


def _looks_like_json(text: str) -> bool:
    if len(text) < 2:
        return False
    closing = _BRACKETS.get(text[0])
    return closing is not None and text[-1] == closing


def deep_unwrap(value: Any) -> Any:
    """Return ``value`` with every JSON-shaped string parsed, recursively.

    A string qualifies when, after trimming whitespace, it starts with ``{``
    or ``[`` and ends with the matching bracket. Parsed results are unwrapped
    again until nothing JSON-shaped remains. Strings that fail to parse, or
    nest deeper than the decoder can follow, are returned unchanged.
    Lists keep their order and dicts keep their keys.
    """
    if isinstance(value, str):
        trimmed = value.strip()
        if not _looks_like_json(trimmed):
            return value
        try:
            return deep_unwrap(json.loads(trimmed))
        except (ValueError, RecursionError):
            return value
    if isinstance(value, list):
        return [deep_unwrap(item) for item in value]
    if isinstance(value, dict):
        return {key: deep_unwrap(item) for key, item in value.items()}
    return value
