"""Tests for :mod:`a11yinsights.prompts`."""

from __future__ import annotations

from a11yinsights.prompts import EXAMPLE_RESPONSE, build_prompt
from a11yinsights.validation import PROBLEM_MARKER, SOLUTION_MARKER, validate_suggestions


def test_build_prompt_embeds_block_between_instructions_and_example() -> None:
    """Given a formatted block When building the prompt Then it sits before the example response."""

    block = "🔴 **Problem:** Missing main landmark\nℹ️ **Impact:** moderate\n📌 **Affected Elements:** <div>"

    prompt = build_prompt(block)

    assert prompt.startswith("Below are some accessibility issues found on a website.")
    assert block in prompt
    assert prompt.index(block) < prompt.index(EXAMPLE_RESPONSE)
    assert prompt.endswith(EXAMPLE_RESPONSE)


def test_build_prompt_is_deterministic() -> None:
    """Given the same block When building twice Then the prompts are identical."""

    assert build_prompt("block") == build_prompt("block")


def test_example_response_uses_validator_markers() -> None:
    """Given the worked example When validated Then both example suggestions qualify."""

    assert PROBLEM_MARKER in EXAMPLE_RESPONSE
    assert SOLUTION_MARKER in EXAMPLE_RESPONSE
    kept = validate_suggestions(EXAMPLE_RESPONSE)
    assert kept.count(SOLUTION_MARKER) == 2


def test_prompt_ends_on_a_complete_example_pair() -> None:
    """Given any block When building the prompt Then its last unit is a full problem/solution pair."""

    last_unit = build_prompt("block").split("\n\n")[-1]

    assert last_unit.startswith(PROBLEM_MARKER)
    assert SOLUTION_MARKER in last_unit
    assert not last_unit.rstrip().endswith(PROBLEM_MARKER)
