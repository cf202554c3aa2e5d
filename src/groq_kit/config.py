# src/groq_kit/config.py

from dataclasses import dataclass, replace
from typing import Any

from .errors import GroqValidationError

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_RETRY_ATTEMPTS = 3


@dataclass(frozen=True)
class GroqConfig:
    """Configuration for GroqClient.

    Immutable. Explicit. No magic defaults from environment.
    Validated once, at construction.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    enable_logging: bool = False

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise GroqValidationError("API key is required", field="api_key")
        if self.retry_attempts < 0:
            raise GroqValidationError(
                "Retry attempts must be non-negative", field="retry_attempts"
            )
        if self.timeout_ms <= 0:
            raise GroqValidationError("Timeout must be positive", field="timeout_ms")
        if not self.base_url.startswith(("http://", "https://")):
            raise GroqValidationError(
                "Base URL must be an http(s) URL", field="base_url"
            )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def with_options(self, **changes: Any) -> "GroqConfig":
        """Return a copy with `changes` applied. The copy is revalidated."""
        return replace(self, **changes)

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"GroqConfig(api_key='***', base_url={self.base_url!r}, "
            f"timeout_ms={self.timeout_ms}, retry_attempts={self.retry_attempts}, "
            f"enable_logging={self.enable_logging})"
        )
