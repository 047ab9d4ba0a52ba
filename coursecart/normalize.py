"""
Normalization helpers for raw row values.

Rows come from spreadsheets, so every value may be a string, a number or
missing. None of these helpers raise on malformed input.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional


_CODE_RE = re.compile(r"([A-Z]{4})[- ]?([0-9]{4})", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^0-9A-Za-z]")
_LEADING_FLOAT_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def as_text(raw: Any) -> str:
    # spreadsheet readers hand back 1200.0 for a cell showing 1200
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def normalize_code(raw: Any) -> str:
    """
    Canonicalize a course identifier to 'DEPT-NNNN'.

    'ACCT 1010', 'acct1010' and 'ACCT-1010' all give 'ACCT-1010'. Without a
    4-letter department, 8 cleaned characters split 4+4 and 7 split [0:4]-[3:7],
    so 'CIS 1200' gives 'CIS1-1200'.
    Returns '' for missing input, which callers treat as "skip this row".
    """
    if not raw:
        return ""
    text = as_text(raw)

    match = _CODE_RE.search(text)
    if match:
        return f"{match.group(1).upper()}-{match.group(2)}"

    cleaned = _NON_ALNUM_RE.sub("", text).upper()
    if len(cleaned) == 8:
        return f"{cleaned[:4]}-{cleaned[4:]}"
    if len(cleaned) == 7:
        # the number part starts at index 3, so one character shows up on both sides
        return f"{cleaned[:4]}-{cleaned[3:]}"
    return cleaned


def resolve_last_name(full_name: Any, last_name: Any = None) -> str:
    """
    Display name of an instructor: explicit last name if given, otherwise
    derived from 'Last, First' or 'First Last'.
    """
    if last_name:
        return last_name if isinstance(last_name, str) else as_text(last_name)
    if not isinstance(full_name, str) or not full_name.strip():
        return ""

    trimmed = full_name.strip()
    if "," in trimmed:
        return trimmed.split(",", 1)[0].strip()
    return trimmed.split(" ")[-1]


def parse_number(raw: Any) -> Optional[float]:
    """
    Lenient float parsing: numbers pass through, strings are read up to the
    first character that is not part of a number ('4.5 / 5' -> 4.5).
    Returns None when nothing numeric can be read.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_FLOAT_RE.match(str(raw))
        if not match:
            return None
        value = float(match.group(0))
    if math.isnan(value):
        return None
    return value


def parse_rating(raw: Any) -> Optional[float]:
    """
    Rating fields: a falsy cell (None, '', 0) means "no rating", not zero.
    """
    if not raw:
        return None
    return parse_number(raw)


def parse_price(raw: Any) -> float:
    """
    Price fields: anything that is not a usable number counts as 0.
    """
    value = parse_number(raw)
    if not value or math.isinf(value):
        return 0.0
    return value
