"""Configuration helpers for accessibility insight runs."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

_LOGGER = logging.getLogger(__name__)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "configs" / "insights.json"

DEFAULT_TARGET_URL = "https://www.google.com/"
DEFAULT_PROVIDER = "huggingface"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


# Environment variable -> (field name, parser)
_ENV_OVERRIDES: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "A11Y_TARGET_URL": ("target_url", str),
    "A11Y_PROVIDER": ("provider", str),
    "A11Y_MODEL": ("model", str),
    "A11Y_PIPELINE_TIMEOUT": ("pipeline_timeout", float),
    "A11Y_REQUEST_TIMEOUT": ("request_timeout", float),
    "A11Y_MAX_ATTEMPTS": ("max_attempts", int),
    "A11Y_DEFAULT_BACKOFF": ("default_backoff", float),
    "A11Y_MAX_BACKOFF": ("max_backoff", float),
    "A11Y_SETTLE_MS": ("settle_ms", int),
    "A11Y_HEADLESS": ("headless", _parse_bool),
    "A11Y_AXE_SCRIPT": ("axe_script_path", str),
    "HUGGINGFACE_API_KEY": ("huggingface_api_key", str),
    "OPENAI_API_KEY": ("openai_api_key", str),
    "ANTHROPIC_API_KEY": ("anthropic_api_key", str),
    # CLAUDE_API_KEY is the older name; it wins over ANTHROPIC_API_KEY.
    "CLAUDE_API_KEY": ("anthropic_api_key", str),
}


@dataclass(slots=True)
class InsightsConfig:
    """Process wide settings read once at startup and passed explicitly."""

    target_url: str = DEFAULT_TARGET_URL
    provider: str = DEFAULT_PROVIDER
    model: str | None = None
    pipeline_timeout: float = 120.0
    request_timeout: float = 60.0
    max_attempts: int = 5
    default_backoff: float = 10.0
    max_backoff: float = 20.0
    settle_ms: int = 3000
    headless: bool = True
    axe_script_path: str | None = None
    huggingface_api_key: str | None = None
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> "InsightsConfig":
        """Load configuration from an optional JSON file and environment overrides."""

        config_path = path or _DEFAULT_CONFIG_PATH
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        if config_path.exists():
            try:
                loaded = json.loads(config_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                _LOGGER.warning("Unable to decode insights config at %s: %s", config_path, exc)
            else:
                if isinstance(loaded, dict):
                    data.update(loaded)
                else:
                    _LOGGER.warning("Ignoring insights config at %s: expected a JSON object", config_path)

        for variable, (name, parser) in _ENV_OVERRIDES.items():
            raw = env.get(variable)
            if raw is None or not raw.strip():
                continue
            try:
                data[name] = parser(raw.strip())
            except ValueError:
                _LOGGER.warning("Ignoring invalid value for %s: %r", variable, raw)

        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            _LOGGER.warning("Ignoring unknown insights config keys: %s", ", ".join(unknown))

        return cls(**{key: value for key, value in data.items() if key in known})

    def api_key_for(self, provider: str) -> str | None:
        """Return the API key configured for ``provider`` (already normalised)."""

        return {
            "huggingface": self.huggingface_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
        }.get(provider)


def load_insights_config(path: Path | None = None) -> InsightsConfig:
    """Helper to load the run configuration."""

    return InsightsConfig.load(path)


__all__ = ["DEFAULT_PROVIDER", "DEFAULT_TARGET_URL", "InsightsConfig", "load_insights_config"]
