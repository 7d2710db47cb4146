"""Generation clients: the one external call every plain node makes.

This module provides:
- GenerationClient: the protocol the executor depends on
- LiteLLMClient: production client over litellm.acompletion with retries
- MockGenerationClient: deterministic offline client for tests and dry runs
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Protocol, Sequence

import structlog
from litellm import acompletion
from litellm.exceptions import RateLimitError, ServiceUnavailableError, Timeout

from .config import Settings, settings as default_settings
from .errors import GenerationError

logger = structlog.get_logger(__name__)

_TRANSIENT_ERRORS = (RateLimitError, ServiceUnavailableError, Timeout)


class GenerationClient(Protocol):
    async def generate(self, prompt: str) -> str: ...


class LiteLLMClient:
    """Single-prompt completion over any litellm-supported provider.

    Transient provider errors (429, 5xx, timeouts) are retried with
    exponential backoff. Anything else, or a transient error that outlives
    the retries, is raised as ``GenerationError``.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        retry_delay: float = 1.0,
        timeout: Optional[int] = None,
    ) -> None:
        self.model = model or default_settings.default_model
        self.temperature = temperature if temperature is not None else default_settings.temperature
        self.retry_attempts = (
            retry_attempts if retry_attempts is not None else default_settings.llm_max_retries
        )
        self.retry_delay = retry_delay
        self.timeout = timeout or default_settings.llm_request_timeout_seconds

    async def generate(self, prompt: str) -> str:
        last_exception: Optional[Exception] = None
        for attempt in range(self.retry_attempts + 1):
            try:
                response = await acompletion(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=self.temperature,
                    timeout=self.timeout,
                )
                return response.choices[0].message.content or ""
            except _TRANSIENT_ERRORS as e:
                last_exception = e
                if attempt < self.retry_attempts:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.warning(
                        "generation_retry",
                        model=self.model,
                        attempt=attempt + 1,
                        delay_seconds=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)
            except Exception as e:
                logger.error("generation_failed", model=self.model, error=str(e))
                raise GenerationError(f"{type(e).__name__}: {e}") from e

        logger.error(
            "generation_failed",
            model=self.model,
            attempts=self.retry_attempts + 1,
            error=str(last_exception),
        )
        raise GenerationError(
            f"{type(last_exception).__name__}: {last_exception}"
        ) from last_exception


class MockGenerationClient:
    """Offline client that records prompts and answers deterministically.

    Answers come from ``responder`` if given, else from ``responses`` in
    order, else a short echo of the call number.
    """

    def __init__(
        self,
        responses: Optional[Sequence[str]] = None,
        responder: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.responses = list(responses) if responses else []
        self.responder = responder
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.responder is not None:
            return self.responder(prompt)
        if self.responses:
            index = len(self.prompts) - 1
            if index >= len(self.responses):
                raise GenerationError("No more mock responses available")
            return self.responses[index]
        logger.debug("mock_generation", call=self.call_count, prompt_chars=len(prompt))
        return f"mock step {self.call_count}"

    def reset(self) -> None:
        self.prompts.clear()


def build_client(config: Optional[Settings] = None) -> GenerationClient:
    config = config or default_settings
    if config.use_mock_llm:
        return MockGenerationClient()
    return LiteLLMClient(
        model=config.default_model,
        temperature=config.temperature,
        retry_attempts=config.llm_max_retries,
        timeout=config.llm_request_timeout_seconds,
    )
