"""Runtime configuration and logging setup.

All settings can be overridden with ``THOUGHTGRAPH_``-prefixed environment
variables or a ``.env`` file in the working directory.
"""

import logging
import os
import sys
from typing import Any

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the graph engine and its LLM client.

    Attributes:
        default_model: litellm model string used for every plain node.
        gemini_api_key: Exported as GEMINI_API_KEY for litellm when set.
        temperature: Sampling temperature for generation calls.
        llm_request_timeout_seconds: Per-call timeout passed to litellm.
        llm_max_retries: Retries on transient provider errors before giving up.
        use_mock_llm: If True, answer every prompt offline with the mock client.
        max_component_depth: How deep component nodes may nest before the run is rejected.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_format: ``json`` or ``text``.
    """

    default_model: str = "gemini/gemini-2.5-flash"
    gemini_api_key: str = ""
    temperature: float = 0.7
    llm_request_timeout_seconds: int = 120
    llm_max_retries: int = 2
    use_mock_llm: bool = False

    max_component_depth: int = 32

    log_level: str = "WARNING"
    log_format: str = "text"

    model_config = SettingsConfigDict(
        env_prefix="THOUGHTGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def model_post_init(self, __context: Any) -> None:
        if self.gemini_api_key:
            os.environ.setdefault("GEMINI_API_KEY", self.gemini_api_key)


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog for either JSON or console output.

    Args:
        log_level: The minimum log level to emit (DEBUG, INFO, WARNING, ERROR).
        log_format: 'json' for machine-readable output, 'text' for development.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


settings = Settings()

configure_logging(settings.log_level, settings.log_format)
