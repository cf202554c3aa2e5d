# tests/unit/test_retry.py

from unittest.mock import MagicMock

import pytest

from conftest import RecordingSleep
from groq_kit.errors import (
    GroqAPIError,
    GroqAuthenticationError,
    GroqNetworkError,
    GroqParsingError,
    GroqRateLimitError,
    GroqTimeoutError,
)
from groq_kit.retry import execute_with_retry


class FlakyOperation:
    """Raises the given errors in order, then returns 'ok'."""

    def __init__(self, *errors: Exception) -> None:
        self.errors = list(errors)
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


@pytest.mark.asyncio
async def test_returns_first_success(sleeper: RecordingSleep) -> None:
    operation = FlakyOperation()

    result = await execute_with_retry(operation, retry_attempts=3, sleep=sleeper)

    assert result == "ok"
    assert operation.calls == 1
    assert sleeper.calls == []


@pytest.mark.asyncio
async def test_network_errors_use_linear_backoff(sleeper: RecordingSleep) -> None:
    operation = FlakyOperation(GroqNetworkError(), GroqNetworkError(), GroqNetworkError())

    result = await execute_with_retry(operation, retry_attempts=3, sleep=sleeper)

    assert result == "ok"
    assert operation.calls == 4
    assert sleeper.calls == [1.0, 2.0, 3.0]


@pytest.mark.asyncio
async def test_rate_limit_honors_retry_after(sleeper: RecordingSleep) -> None:
    operation = FlakyOperation(
        GroqRateLimitError(retry_after_seconds=5),
        GroqRateLimitError(retry_after_seconds=7),
    )

    await execute_with_retry(operation, retry_attempts=3, sleep=sleeper)

    assert sleeper.calls == [5.0, 7.0]


@pytest.mark.asyncio
async def test_rate_limit_without_hint_falls_back_to_linear(
    sleeper: RecordingSleep,
) -> None:
    operation = FlakyOperation(
        GroqRateLimitError(), GroqNetworkError(), GroqRateLimitError(retry_after_seconds=0)
    )

    await execute_with_retry(operation, retry_attempts=3, sleep=sleeper)

    assert sleeper.calls == [1.0, 2.0, 0.0]


@pytest.mark.asyncio
async def test_exhausted_budget_reraises_last_failure(sleeper: RecordingSleep) -> None:
    last = GroqRateLimitError(retry_after_seconds=2)
    operation = FlakyOperation(
        GroqNetworkError(), GroqRateLimitError(), GroqNetworkError(), last
    )

    with pytest.raises(GroqRateLimitError) as exc:
        await execute_with_retry(operation, retry_attempts=3, sleep=sleeper)

    assert exc.value is last
    assert operation.calls == 4
    assert sleeper.calls == [1.0, 2.0, 3.0]


@pytest.mark.asyncio
async def test_zero_retry_attempts_means_single_call(sleeper: RecordingSleep) -> None:
    operation = FlakyOperation(GroqNetworkError())

    with pytest.raises(GroqNetworkError):
        await execute_with_retry(operation, retry_attempts=0, sleep=sleeper)

    assert operation.calls == 1
    assert sleeper.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        GroqAuthenticationError(),
        GroqAPIError(500, "boom"),
        GroqTimeoutError(),
        GroqParsingError(),
    ],
)
async def test_non_retryable_errors_propagate_immediately(
    sleeper: RecordingSleep, error: Exception
) -> None:
    operation = FlakyOperation(error)

    with pytest.raises(type(error)):
        await execute_with_retry(operation, retry_attempts=3, sleep=sleeper)

    assert operation.calls == 1
    assert sleeper.calls == []


@pytest.mark.asyncio
async def test_each_retry_is_counted(sleeper: RecordingSleep) -> None:
    metrics_hook = MagicMock()
    operation = FlakyOperation(GroqRateLimitError(), GroqNetworkError())

    await execute_with_retry(
        operation, retry_attempts=3, sleep=sleeper, metrics_hook=metrics_hook
    )

    labels = [c.kwargs["labels"] for c in metrics_hook.increment.call_args_list]
    assert labels == [{"kind": "rate_limit"}, {"kind": "network"}]
