"""Rendering of violation records into the text block sent to providers."""

from __future__ import annotations

from typing import Iterable, List

from .models import ViolationRecord

MAX_VIOLATIONS = 5
NODE_SEPARATOR = " | "


def format_violation(violation: ViolationRecord) -> str:
    """Render one violation as the three-line problem/impact/elements block."""

    affected = NODE_SEPARATOR.join(violation.affected_nodes)
    return (
        f"🔴 **Problem:** {violation.description}\n"
        f"ℹ️ **Impact:** {violation.impact.value}\n"
        f"📌 **Affected Elements:** {affected}"
    )


def format_violations(violations: Iterable[ViolationRecord], limit: int = MAX_VIOLATIONS) -> str:
    """Render the first ``limit`` violations (capped at five) in their original order.

    An empty input gives an empty string.
    """

    limit = max(0, min(limit, MAX_VIOLATIONS))
    blocks: List[str] = []
    for violation in violations:
        if len(blocks) >= limit:
            break
        blocks.append(format_violation(violation))
    return "\n\n".join(blocks)


__all__ = ["MAX_VIOLATIONS", "NODE_SEPARATOR", "format_violation", "format_violations"]
