"""Exception hierarchy shared across the audit pipeline."""

from __future__ import annotations


class InsightsError(RuntimeError):
    """Base class for every error raised by :mod:`a11yinsights`."""


class ConfigurationError(InsightsError):
    """Raised when the run configuration cannot serve the requested provider."""


class CollectorError(InsightsError):
    """Raised when the browser could not load, inject or scan the target page."""


class PipelineTimeoutError(InsightsError):
    """Raised when a whole audit run exceeds its time budget."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Audit of {url} exceeded {timeout:g}s")
        self.url = url
        self.timeout = timeout


class ProviderError(InsightsError):
    """Raised inside insight clients when a provider call fails.

    Clients convert it into a sentinel string; it never leaves
    :meth:`InsightClient.submit`.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ModelLoadingError(ProviderError):
    """Provider reported that the model is still warming up."""

    def __init__(self, estimated_time: float | None, *, status_code: int | None = None) -> None:
        super().__init__("Model is loading", status_code=status_code)
        self.estimated_time = estimated_time


__all__ = [
    "CollectorError",
    "ConfigurationError",
    "InsightsError",
    "ModelLoadingError",
    "PipelineTimeoutError",
    "ProviderError",
]
