"""Filtering of generated text down to well-formed suggestion blocks."""

from __future__ import annotations

import re
from typing import List

PROBLEM_MARKER = "🔴 **Problem:**"
SOLUTION_MARKER = "✅ **Solution:**"

NO_VALID_SUGGESTIONS = "No valid suggestions available."

_BLANK_LINE_RE = re.compile(r"\n[ \t\r]*\n")


def split_units(raw: str) -> List[str]:
    """Split ``raw`` on blank lines and drop empty candidates."""

    units = (unit.strip() for unit in _BLANK_LINE_RE.split(raw))
    return [unit for unit in units if unit]


def is_valid_unit(unit: str) -> bool:
    return PROBLEM_MARKER in unit and SOLUTION_MARKER in unit


def validate_suggestions(raw: str | None) -> str:
    """Keep only blocks carrying both a problem and a solution marker.

    Blocks keep their original order and are joined by a blank line. When no
    block qualifies :data:`NO_VALID_SUGGESTIONS` is returned.
    """

    if not raw:
        return NO_VALID_SUGGESTIONS
    valid = [unit for unit in split_units(raw) if is_valid_unit(unit)]
    return "\n\n".join(valid) or NO_VALID_SUGGESTIONS


__all__ = [
    "NO_VALID_SUGGESTIONS",
    "PROBLEM_MARKER",
    "SOLUTION_MARKER",
    "is_valid_unit",
    "split_units",
    "validate_suggestions",
]
