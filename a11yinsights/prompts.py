"""Prompt construction for remediation suggestions.

The worked example ends on a complete problem/solution pair. A trailing
open problem line would make the model start its answer with a bare solution,
and once the echoed prompt is removed that first unit carries no problem
marker and is dropped by :func:`a11yinsights.validation.validate_suggestions`.
"""

from __future__ import annotations

from .validation import PROBLEM_MARKER, SOLUTION_MARKER

PREAMBLE = (
    "Below are some accessibility issues found on a website. Your task is to provide only "
    "practical and objective suggestions to fix each issue. Do not include long explanations, "
    "just direct and applicable solutions."
)

INPUT_FORMAT = (
    "Each issue follows the format:\n"
    f"{PROBLEM_MARKER} [problem description]\n"
    "ℹ️ **Impact:** [impact level]\n"
    "📌 **Affected Elements:** [affected element code]"
)

INSTRUCTION = "Now, provide direct correction suggestions for each of the issues listed below:"

EXAMPLE_RESPONSE = (
    "### Expected response structure:\n"
    f"{PROBLEM_MARKER} The `role` attribute must have an appropriate value for the element\n"
    f"{SOLUTION_MARKER} Ensure the `role` attribute is correct for the element and replace it "
    "with an appropriate semantic value, such as `combobox` for interactive input fields.\n"
    "\n"
    f"{PROBLEM_MARKER} The document must have a main landmark\n"
    f"{SOLUTION_MARKER} Add a `<main>` element to the document to define the main content of "
    "the page."
)


def build_prompt(formatted_violations: str) -> str:
    """Wrap the formatted violations in the instruction template."""

    return "\n\n".join(
        [
            PREAMBLE,
            INPUT_FORMAT,
            INSTRUCTION,
            formatted_violations,
            EXAMPLE_RESPONSE,
        ]
    )


__all__ = ["EXAMPLE_RESPONSE", "build_prompt"]
