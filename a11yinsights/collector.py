"""Browser based collection of axe-core violations."""

from __future__ import annotations

import abc
import logging
from typing import Any, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright
from pydantic import ValidationError

from .config import InsightsConfig
from .errors import CollectorError
from .models import ViolationRecord
from .tracing import log_event

AXE_CDN_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

_AXE_READY = "() => typeof window.axe !== 'undefined'"
_AXE_RUN = """
async () => {
    const results = await window.axe.run();
    return results.violations;
}
"""


class ViolationCollector(abc.ABC):
    """Produce the accessibility violations of a page."""

    @abc.abstractmethod
    async def collect(self, url: str) -> List[ViolationRecord]:
        """Return the violations found on ``url`` in the order the engine reported them."""

        raise NotImplementedError


class AxeViolationCollector(ViolationCollector):
    """Load a page in Chromium, inject axe-core and run a full scan."""

    def __init__(
        self,
        *,
        headless: bool = True,
        settle_ms: int = 3000,
        navigation_timeout_ms: float = 60_000,
        axe_script_path: str | None = None,
        axe_url: str = AXE_CDN_URL,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._headless = headless
        self._settle_ms = settle_ms
        self._navigation_timeout_ms = navigation_timeout_ms
        self._axe_script_path = axe_script_path
        self._axe_url = axe_url
        self._logger = logger or logging.getLogger("collector")

    @classmethod
    def from_config(cls, config: InsightsConfig) -> "AxeViolationCollector":
        return cls(
            headless=config.headless,
            settle_ms=config.settle_ms,
            navigation_timeout_ms=config.request_timeout * 1000,
            axe_script_path=config.axe_script_path,
        )

    async def collect(self, url: str) -> List[ViolationRecord]:
        log_event(self._logger, logging.INFO, "collector.start", url=url, headless=self._headless)
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(headless=self._headless)
                try:
                    page = await browser.new_page()
                    payload = await self._scan(page, url)
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            log_event(
                self._logger,
                logging.ERROR,
                "collector.error",
                url=url,
                error=str(exc),
                exception=exc.__class__.__name__,
            )
            raise CollectorError(f"Accessibility scan of {url} failed: {exc}") from exc

        violations = self._to_records(url, payload)
        log_event(self._logger, logging.INFO, "collector.finish", url=url, violations=len(violations))
        return violations

    async def _scan(self, page: Page, url: str) -> Any:
        await page.goto(url, wait_until="load", timeout=self._navigation_timeout_ms)
        if self._settle_ms > 0:
            await page.wait_for_timeout(self._settle_ms)
        if self._axe_script_path:
            await page.add_script_tag(path=self._axe_script_path)
        else:
            await page.add_script_tag(url=self._axe_url)
        await page.wait_for_function(_AXE_READY)
        return await page.evaluate(_AXE_RUN)

    def _to_records(self, url: str, payload: Any) -> List[ViolationRecord]:
        if not isinstance(payload, list):
            raise CollectorError(
                f"Accessibility results for {url} are not an array: {type(payload).__name__}"
            )
        try:
            return [ViolationRecord.from_axe(item) for item in payload if isinstance(item, dict)]
        except ValidationError as exc:
            raise CollectorError(f"Unexpected axe-core violation payload for {url}") from exc


__all__ = ["AXE_CDN_URL", "AxeViolationCollector", "ViolationCollector"]
