# src/groq_kit/factory.py

from .client import GroqClient
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_MS,
    GroqConfig,
)
from .observability.base import MetricsHook, NoOpMetricsHook


def create_client(
    api_key: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    enable_logging: bool = False,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> GroqClient:
    """Create a GroqClient from individual options.

    Args:
        api_key: Groq API key. Required, non-blank.
        base_url: API root; `/chat/completions` is appended.
        timeout_ms: Deadline for one full request round-trip.
        retry_attempts: Retries after the first attempt (>= 0).
        enable_logging: Log every HTTP request/response at INFO.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        Configured GroqClient. Close it with `await client.close()`.

    Raises:
        GroqValidationError: If an option is invalid; `field` names it.

    Example:
        >>> client = create_client("gsk_...", retry_attempts=5)
        >>> text = await client.generate_text("llama-3.1-8b-instant", "Hi")
    """
    config = GroqConfig(
        api_key=api_key,
        base_url=base_url,
        timeout_ms=timeout_ms,
        retry_attempts=retry_attempts,
        enable_logging=enable_logging,
    )
    return create_client_from_config(config, metrics_hook=metrics_hook)


def create_client_from_config(
    config: GroqConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> GroqClient:
    return GroqClient(config, metrics_hook=metrics_hook)
