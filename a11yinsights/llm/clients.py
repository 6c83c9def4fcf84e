"""Provider specific clients that turn a prompt into remediation text."""

from __future__ import annotations

import abc
import logging
import math
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Optional

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

from ..errors import ModelLoadingError, ProviderError
from ..tracing import log_event, preview

LOGGER = logging.getLogger("llm")

NO_SUGGESTIONS = "No suggestions available."
GENERATION_ERROR = "Error generating insights."
GENERATION_UNAVAILABLE = "Error generating insights: model unavailable."

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BACKOFF_SECONDS = 10.0
DEFAULT_MAX_BACKOFF_SECONDS = 20.0

SleepFunc = Callable[[float], Awaitable[None]]


def _estimated_time(response: httpx.Response) -> float | None:
    """Return the ``estimated_time`` hint of a loading response, if any."""

    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    value = data.get("estimated_time")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return float(value)


class InsightClient(abc.ABC):
    """Deliver a prompt to one remote completion provider.

    ``submit`` never raises: provider failures, and requests that cannot be
    encoded (bad key or model characters), come back as one of the sentinel
    strings defined in this module. Responses whose status is in
    ``loading_statuses`` are retried after the delay advertised by the
    provider, capped at ``max_backoff``, for at most ``max_attempts`` calls in
    total.
    """

    provider: str = ""
    endpoint: str = ""
    default_model: str = ""
    loading_statuses: FrozenSet[int] = frozenset()

    def __init__(
        self,
        *,
        api_key: str,
        model: str | None = None,
        timeout: float = 60.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        default_backoff: float = DEFAULT_BACKOFF_SECONDS,
        max_backoff: float = DEFAULT_MAX_BACKOFF_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model or self.default_model
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._default_backoff = default_backoff
        self._max_backoff = max_backoff
        self._transport = transport
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self._model

    def _build_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}

    @abc.abstractmethod
    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        """Return the JSON body for ``prompt``."""

    @abc.abstractmethod
    def _extract_text(self, data: Any, prompt: str) -> str | None:
        """Pull the generated text out of a decoded response body."""

    async def submit(self, prompt: str) -> str:
        """Return generated text for ``prompt`` or a sentinel string."""

        retry_kwargs: Dict[str, Any] = {
            "stop": stop_after_attempt(self._max_attempts),
            "wait": self._backoff,
            "retry": retry_if_exception_type(ModelLoadingError),
            "before_sleep": self._log_retry,
            "reraise": True,
        }
        if self._sleep is not None:
            retry_kwargs["sleep"] = self._sleep

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
                async for attempt in AsyncRetrying(**retry_kwargs):
                    with attempt:
                        text = await self._request(http, prompt, attempt.retry_state.attempt_number)
        except ModelLoadingError as exc:
            log_event(
                LOGGER,
                logging.ERROR,
                "llm.unavailable",
                provider=self.provider,
                model=self._model,
                attempts=self._max_attempts,
                estimated_time=exc.estimated_time,
            )
            return GENERATION_UNAVAILABLE
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError, ProviderError) as exc:
            log_event(
                LOGGER,
                logging.ERROR,
                "llm.error",
                provider=self.provider,
                model=self._model,
                error=repr(exc),
                exception=exc.__class__.__name__,
            )
            return GENERATION_ERROR

        text = text.strip()
        log_event(
            LOGGER,
            logging.INFO,
            "llm.response",
            provider=self.provider,
            model=self._model,
            chars=len(text),
            preview=preview(text) if text else None,
        )
        return text or NO_SUGGESTIONS

    async def _request(self, http: httpx.AsyncClient, prompt: str, attempt: int) -> str:
        log_event(
            LOGGER,
            logging.DEBUG,
            "llm.request",
            provider=self.provider,
            model=self._model,
            attempt=attempt,
            prompt_chars=len(prompt),
        )
        response = await http.post(
            self.endpoint,
            headers=self._build_headers(),
            json=self._build_payload(prompt),
        )
        if response.status_code in self.loading_statuses:
            raise ModelLoadingError(_estimated_time(response), status_code=response.status_code)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                f"{self.provider} returned a non-JSON body", status_code=response.status_code
            ) from exc

        try:
            text = self._extract_text(data, prompt)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise ProviderError(
                f"{self.provider} response is missing the generated text",
                status_code=response.status_code,
            ) from exc
        if text is None:
            return ""
        if not isinstance(text, str):
            raise ProviderError(f"{self.provider} returned non-text content", status_code=response.status_code)
        return text

    def _backoff(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, ModelLoadingError) and exc.estimated_time is not None:
            return min(exc.estimated_time, self._max_backoff)
        return min(self._default_backoff, self._max_backoff)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else None
        log_event(
            LOGGER,
            logging.WARNING,
            "llm.retry",
            provider=self.provider,
            model=self._model,
            attempt=retry_state.attempt_number,
            max_attempts=self._max_attempts,
            delay_s=delay,
            reason="model loading",
        )


class HuggingFaceClient(InsightClient):
    """Hosted inference API; answers 503 with ``estimated_time`` while a model loads."""

    provider = "huggingface"
    default_model = "EleutherAI/gpt-neox-20b"
    loading_statuses = frozenset({503})
    base_url = "https://api-inference.huggingface.co/models"

    @property
    def endpoint(self) -> str:  # type: ignore[override]
        return f"{self.base_url}/{self._model}"

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {"inputs": prompt}

    def _extract_text(self, data: Any, prompt: str) -> str | None:
        text = data[0]["generated_text"]
        # text-generation models echo the prompt unless told otherwise
        if isinstance(text, str) and text.startswith(prompt):
            text = text[len(prompt):]
        return text


class OpenAIClient(InsightClient):
    """Chat completions API."""

    provider = "openai"
    endpoint = "https://api.openai.com/v1/chat/completions"
    default_model = "gpt-3.5-turbo"
    max_tokens = 150
    temperature = 0.7

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def _extract_text(self, data: Any, prompt: str) -> str | None:
        return data["choices"][0]["message"]["content"]


class AnthropicClient(InsightClient):
    """Legacy text completions API."""

    provider = "anthropic"
    endpoint = "https://api.anthropic.com/v1/complete"
    default_model = "claude-2"
    api_version = "2023-06-01"
    max_tokens = 300
    temperature = 0.7

    HUMAN_TURN = "\n\nHuman:"
    ASSISTANT_TURN = "\n\nAssistant:"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": self.api_version,
            "Content-Type": "application/json",
        }

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        if not prompt.startswith(self.HUMAN_TURN):
            prompt = f"{self.HUMAN_TURN} {prompt}{self.ASSISTANT_TURN}"
        return {
            "model": self._model,
            "prompt": prompt,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def _extract_text(self, data: Any, prompt: str) -> str | None:
        return data["completion"]


__all__ = [
    "AnthropicClient",
    "DEFAULT_BACKOFF_SECONDS",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_BACKOFF_SECONDS",
    "GENERATION_ERROR",
    "GENERATION_UNAVAILABLE",
    "HuggingFaceClient",
    "InsightClient",
    "NO_SUGGESTIONS",
    "OpenAIClient",
]
