# src/groq_kit/retry.py

"""Transport-only retries around a single chat completion call.

Only rate-limit and network failures are retried. The schedule is linear:
a rate-limit hint is honored as-is, otherwise the wait before retry k
(1-based) is k seconds. No jitter.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)
from tenacity.wait import wait_base

from .errors import GroqError, GroqNetworkError, GroqRateLimitError
from .observability import names
from .observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS = (GroqRateLimitError, GroqNetworkError)
BACKOFF_STEP_SECONDS = 1.0


class wait_retry_after_or_linear(wait_base):
    """Wait `retry_after_seconds` on a hinted rate limit, else step * attempt."""

    def __init__(self, step: float = BACKOFF_STEP_SECONDS) -> None:
        self.step = step

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, GroqRateLimitError) and exc.retry_after_seconds is not None:
            return float(exc.retry_after_seconds)
        return self.step * retry_state.attempt_number


def _before_sleep(metrics_hook: MetricsHook) -> Callable[[RetryCallState], None]:
    log = before_sleep_log(logger, logging.WARNING)

    def hook(retry_state: RetryCallState) -> None:
        log(retry_state)
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        kind = exc.kind.value if isinstance(exc, GroqError) else "unknown"
        metrics_hook.increment(names.CHAT_RETRIES_TOTAL, labels={"kind": kind})

    return hook


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    retry_attempts: int,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> T:
    """Run `operation` up to retry_attempts + 1 times.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt.
        retry_attempts: Retries after the first attempt (>= 0).
        sleep: Awaitable sleep used between attempts.
        metrics_hook: Receives one increment per scheduled retry.

    Returns:
        The first successful result.

    Raises:
        GroqError: The last failure once the budget is spent, or any
            non-retryable failure immediately.

    Note:
        Cancelling the calling task interrupts both the in-flight request
        and a pending sleep; no further attempts are made.
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(retry_attempts + 1),
        wait=wait_retry_after_or_linear(),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before_sleep=_before_sleep(metrics_hook),
        sleep=sleep,
        reraise=True,
    ):
        with attempt:
            return await operation()

    raise GroqNetworkError("Max retry attempts exceeded")
