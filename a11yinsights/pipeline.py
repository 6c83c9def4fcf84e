"""Audit orchestration: collect, format, prompt, generate, validate."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .collector import AxeViolationCollector, ViolationCollector
from .config import InsightsConfig
from .errors import PipelineTimeoutError
from .formatter import MAX_VIOLATIONS, format_violations
from .llm import NO_SUGGESTIONS, InsightClient, create_insight_client
from .logging_config import configure_logging
from .models import InsightReport
from .prompts import build_prompt
from .tracing import log_event, trace
from .validation import validate_suggestions


class InsightPipeline:
    """Run one accessibility audit and turn its violations into suggestions."""

    def __init__(
        self,
        config: InsightsConfig,
        *,
        collector: ViolationCollector | None = None,
        client: InsightClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger("pipeline")
        self.collector = collector or AxeViolationCollector.from_config(config)
        self.client = client or create_insight_client(config)

    @property
    def provider(self) -> str:
        return self.client.provider or self.config.provider

    async def run(self, url: str | None = None) -> InsightReport:
        """Audit ``url`` (defaults to the configured target) within the run timeout.

        Raises :class:`~a11yinsights.errors.CollectorError` when the page cannot
        be scanned and :class:`~a11yinsights.errors.PipelineTimeoutError` when
        the run exceeds ``config.pipeline_timeout``.
        """

        target = url or self.config.target_url
        try:
            return await asyncio.wait_for(self._execute(target), timeout=self.config.pipeline_timeout)
        except asyncio.TimeoutError as exc:
            log_event(
                self.logger,
                logging.ERROR,
                "pipeline.timeout",
                url=target,
                timeout_s=self.config.pipeline_timeout,
            )
            raise PipelineTimeoutError(target, self.config.pipeline_timeout) from exc

    async def _execute(self, url: str) -> InsightReport:
        with trace("pipeline.run", logger=self.logger, url=url, provider=self.provider) as span:
            with trace("pipeline.collect", logger=self.logger, url=url):
                violations = await self.collector.collect(url)

            considered = min(len(violations), MAX_VIOLATIONS)
            formatted = format_violations(violations)
            if formatted:
                prompt = build_prompt(formatted)
                span.note(violations=len(violations), considered=considered, prompt_chars=len(prompt))
                raw_text = await self.client.submit(prompt)
            else:
                # Nothing to remediate; the provider is not consulted.
                log_event(self.logger, logging.INFO, "pipeline.no_violations", url=url)
                raw_text = NO_SUGGESTIONS

            suggestions = validate_suggestions(raw_text)
            report = InsightReport(
                url=url,
                provider=self.provider,
                violation_count=len(violations),
                considered=considered,
                raw_text=raw_text,
                suggestions=suggestions,
                duration_ms=span.elapsed_ms,
            )
            log_event(
                self.logger,
                logging.INFO if report.passed else logging.WARNING,
                "pipeline.result",
                url=url,
                provider=self.provider,
                violations=report.violation_count,
                considered=considered,
                passed=report.passed,
            )
            return report


def run_pipeline(
    config: InsightsConfig,
    url: str | None = None,
    *,
    log_level: int | str = logging.INFO,
    collector: Optional[ViolationCollector] = None,
    client: Optional[InsightClient] = None,
) -> InsightReport:
    """Configure logging and run a single audit synchronously."""

    level = getattr(logging, str(log_level).upper(), logging.INFO) if isinstance(log_level, str) else log_level
    configure_logging(level=level)
    pipeline = InsightPipeline(config, collector=collector, client=client)
    return asyncio.run(pipeline.run(url))


__all__ = ["InsightPipeline", "run_pipeline"]
