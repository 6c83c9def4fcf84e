"""Tests for :mod:`a11yinsights.formatter`."""

from __future__ import annotations

from a11yinsights.formatter import MAX_VIOLATIONS, format_violation, format_violations
from a11yinsights.models import ViolationRecord
from a11yinsights.prompts import build_prompt


def test_format_violations_empty_input_returns_empty_string() -> None:
    """Given no violations When formatting Then an empty string is returned."""

    assert format_violations([]) == ""


def test_format_violation_renders_three_line_block() -> None:
    """Given one violation with several nodes When rendering Then nodes are joined with a pipe."""

    violation = ViolationRecord(
        description="Buttons must have discernible text",
        impact="serious",
        affected_nodes=("<button></button>", "<button class=\"icon\"></button>"),
    )

    block = format_violation(violation)

    assert block == (
        "🔴 **Problem:** Buttons must have discernible text\n"
        "ℹ️ **Impact:** serious\n"
        "📌 **Affected Elements:** <button></button> | <button class=\"icon\"></button>"
    )


def test_format_violations_caps_at_five_in_original_order(many_violations) -> None:
    """Given seven violations When formatting Then only the first five appear, unsorted."""

    block = format_violations(many_violations)
    prompt = build_prompt(block)

    assert block.count("🔴 **Problem:**") == MAX_VIOLATIONS
    positions = [block.index(f"Violation {index}\n") for index in range(1, 6)]
    assert positions == sorted(positions)
    assert "Violation 6" not in prompt
    assert "Violation 7" not in prompt


def test_format_violations_separates_records_with_blank_line(make_violation) -> None:
    """Given two violations When formatting Then the blocks are separated by one blank line."""

    block = format_violations([make_violation(description="A"), make_violation(description="B")])

    first, second = block.split("\n\n")
    assert first.startswith("🔴 **Problem:** A")
    assert second.startswith("🔴 **Problem:** B")


def test_format_violations_limit_cannot_exceed_cap(many_violations) -> None:
    """Given a larger limit When formatting Then the five violation cap still applies."""

    block = format_violations(many_violations, limit=50)

    assert block.count("🔴 **Problem:**") == MAX_VIOLATIONS


def test_format_violation_without_nodes(make_violation) -> None:
    """Given a violation without nodes When rendering Then the elements line is empty."""

    block = format_violation(make_violation(nodes=()))

    assert block.endswith("📌 **Affected Elements:** ")
