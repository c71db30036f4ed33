"""
Value coercion for text inputs (query strings, CLI arguments).
"""

from __future__ import annotations

import json
import re
from typing import Any

_INT = re.compile(r"-?(0|[1-9]\d*)")
_FLOAT = re.compile(r"-?(0|[1-9]\d*)(\.\d+)?([eE][+-]?\d+)?")

_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None}


def coerce_scalar(raw: str) -> Any:
    """
    Interpret a query-string value as a JSON scalar.

    "true"/"false" -> bool, "null" -> None, integer and decimal literals ->
    int/float. Everything else stays a string, so "007" and "1.2.3" are
    not numbers.
    """
    text = raw.strip()
    if text in _LITERALS:
        return _LITERALS[text]
    if _INT.fullmatch(text):
        return int(text)
    if _FLOAT.fullmatch(text):
        return float(text)
    return raw


def parse_value(raw: str) -> Any:
    """Parse raw text as JSON, falling back to coerce_scalar()."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return coerce_scalar(raw)
