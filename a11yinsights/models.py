"""Data models shared by the collector, formatter and pipeline."""

from __future__ import annotations

import enum
from typing import Any, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validation import NO_VALID_SUGGESTIONS


class Impact(str, enum.Enum):
    """Severity assigned by axe-core to a rule failure."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"


class ViolationRecord(BaseModel):
    """A single accessibility rule failure found on a page."""

    model_config = ConfigDict(frozen=True)

    description: str
    impact: Impact
    affected_nodes: Tuple[str, ...] = Field(default_factory=tuple)
    rule_id: str | None = None
    help_url: str | None = None

    @field_validator("impact", mode="before")
    @classmethod
    def _normalise_impact(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_axe(cls, payload: Mapping[str, Any]) -> "ViolationRecord":
        """Build a record from one entry of ``axe.run().violations``."""

        nodes = payload.get("nodes") or []
        snippets = tuple(
            str(node.get("html") or "") for node in nodes if isinstance(node, Mapping)
        )
        return cls(
            description=str(payload.get("description") or payload.get("help") or ""),
            # axe leaves impact null for some rules; treat it as the lowest level
            impact=payload.get("impact") or Impact.MINOR,
            affected_nodes=snippets,
            rule_id=payload.get("id"),
            help_url=payload.get("helpUrl"),
        )


class InsightReport(BaseModel):
    """Outcome of one audit run."""

    url: str
    provider: str
    violation_count: int
    considered: int
    raw_text: str
    suggestions: str
    duration_ms: float | None = None

    @property
    def passed(self) -> bool:
        """Return whether at least one well-formed suggestion came back."""

        return self.suggestions != NO_VALID_SUGGESTIONS


__all__ = ["Impact", "InsightReport", "ViolationRecord"]
