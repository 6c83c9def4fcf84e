"""Shared pytest fixtures for the a11y-insights test-suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from a11yinsights.config import InsightsConfig
from a11yinsights.models import Impact, ViolationRecord


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_violation() -> Callable[..., ViolationRecord]:
    """Return a factory building violation records with sensible defaults."""

    def _make(
        description: str = "Images must have alternate text",
        impact: Impact | str = Impact.CRITICAL,
        nodes: tuple[str, ...] = ("<img src=\"logo.png\">",),
    ) -> ViolationRecord:
        return ViolationRecord(description=description, impact=impact, affected_nodes=nodes)

    return _make


@pytest.fixture
def many_violations(make_violation: Callable[..., ViolationRecord]) -> List[ViolationRecord]:
    """Return seven violations numbered in collector order, least severe first."""

    impacts = ["minor", "moderate", "serious", "critical", "minor", "critical", "serious"]
    return [
        make_violation(description=f"Violation {index}", impact=impact, nodes=(f"<div id=\"v{index}\">",))
        for index, impact in enumerate(impacts, start=1)
    ]


@pytest.fixture
def insights_config() -> InsightsConfig:
    """Return a configuration with a HuggingFace key and fast retries."""

    return InsightsConfig(
        target_url="https://example.com/",
        provider="huggingface",
        huggingface_api_key="hf-test",
        openai_api_key="sk-test",
        anthropic_api_key="claude-test",
        pipeline_timeout=5.0,
        default_backoff=0.0,
        settle_ms=0,
    )
