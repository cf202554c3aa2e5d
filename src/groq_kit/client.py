# src/groq_kit/client.py

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from contextlib import aclosing
from dataclasses import replace
from time import monotonic
from typing import Any

import httpx

from .config import GroqConfig
from .errors import GroqError, GroqParsingError, GroqValidationError
from .models import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    Message,
    Role,
)
from .observability import names
from .observability.base import MetricsHook, NoOpMetricsHook
from .retry import execute_with_retry
from .transport import ChatTransport
from .validation import validate_request

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[ChatCompletionChunk], Any]


class GroqClient:
    """Async client for the Groq chat completions API.

    Validates before any I/O. Retries rate-limit and network failures only.
    Holds no state across calls beyond the config and the connection pool.

    Example:
        >>> async with GroqClient(GroqConfig(api_key="gsk_...")) as client:
        ...     text = await client.generate_text(
        ...         "llama-3.3-70b-versatile", "Say hello"
        ...     )
    """

    def __init__(
        self,
        config: GroqConfig,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = ChatTransport(config, http_transport=http_transport)
        self._sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized GroqClient with base_url=%s, timeout_ms=%s, retry_attempts=%s",
            config.base_url,
            config.timeout_ms,
            config.retry_attempts,
        )

    @property
    def config(self) -> GroqConfig:
        return self._config

    async def create_chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletion:
        """Create a chat completion with full request customization.

        Raises:
            GroqValidationError: Before any network call.
            GroqError: Any other failure kind, after retries where they apply.
        """
        start = monotonic()

        try:
            validate_request(request)
            if request.stream:
                raise GroqValidationError(
                    "Use stream_chat_completion for streaming requests",
                    field="stream",
                )

            logger.debug(
                "Calling Groq: model=%s, messages=%d",
                request.model,
                len(request.messages),
            )
            response = await execute_with_retry(
                lambda: self._transport.send(request),
                retry_attempts=self._config.retry_attempts,
                sleep=self._sleep,
                metrics_hook=self.metrics_hook,
            )
        except GroqError as e:
            self._record_failure(request.model, e)
            raise

        elapsed_ms = 1000 * (monotonic() - start)

        self.metrics_hook.record_latency(names.CHAT_COMPLETION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.CHAT_REQUESTS_TOTAL,
            labels={"model": request.model, "outcome": "success"},
        )
        self.metrics_hook.increment(
            names.CHAT_TOKENS_PROMPT, response.usage.prompt_tokens
        )
        self.metrics_hook.increment(
            names.CHAT_TOKENS_COMPLETION, response.usage.completion_tokens
        )
        self.metrics_hook.increment(names.CHAT_TOKENS_TOTAL, response.usage.total_tokens)

        logger.info(
            "Groq completion: model=%s, choices=%d, tokens=%d, latency=%.0fms",
            response.model,
            len(response.choices),
            response.usage.total_tokens,
            elapsed_ms,
        )

        return response

    async def chat(
        self,
        model: str,
        messages: list[Message] | str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
        stop: list[str] | None = None,
        presence_penalty: float | None = None,
        frequency_penalty: float | None = None,
        n: int | None = None,
    ) -> ChatCompletion:
        """Create a chat completion from a model id and messages.

        A plain string is sent as a single user message.
        """
        if isinstance(messages, str):
            messages = [Message(role=Role.USER, content=messages)]

        return await self.create_chat_completion(
            ChatCompletionRequest(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                top_p=top_p,
                stop=stop,
                presence_penalty=presence_penalty,
                frequency_penalty=frequency_penalty,
                n=n,
            )
        )

    async def generate_text(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> str:
        """Return only the text of the first choice.

        Raises:
            GroqParsingError: If the response carries no choices.
        """
        response = await self.chat(
            model,
            prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
        )
        if not response.choices:
            raise GroqParsingError("No response content found")
        return response.choices[0].message.content

    async def stream_chat_completion(
        self,
        request: ChatCompletionRequest,
        on_chunk: ChunkCallback,
    ) -> str:
        """Stream a completion, calling `on_chunk` once per delta chunk.

        `on_chunk` may be a plain function or a coroutine function.
        Never retried: a partially consumed stream cannot be replayed.

        Returns:
            The concatenated delta content.
        """
        start = monotonic()
        parts: list[str] = []

        try:
            validate_request(request)
            request = replace(request, stream=True)
            logger.debug(
                "Streaming from Groq: model=%s, messages=%d",
                request.model,
                len(request.messages),
            )

            async with aclosing(self._transport.stream(request)) as chunks:
                async for chunk in chunks:
                    if inspect.iscoroutinefunction(on_chunk):
                        await on_chunk(chunk)
                    else:
                        on_chunk(chunk)
                    parts.append(chunk.content)
        except GroqError as e:
            self._record_failure(request.model, e)
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.CHAT_STREAM_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.CHAT_REQUESTS_TOTAL,
            labels={"model": request.model, "outcome": "success"},
        )
        self.metrics_hook.increment(names.CHAT_STREAM_CHUNKS_TOTAL, len(parts))

        logger.info(
            "Groq stream complete: model=%s, chunks=%d, latency=%.0fms",
            request.model,
            len(parts),
            elapsed_ms,
        )
        return "".join(parts)

    async def close(self) -> None:
        """Release the connection pool. Safe to call more than once."""
        await self._transport.close()

    async def __aenter__(self) -> "GroqClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _record_failure(self, model: str, error: GroqError) -> None:
        logger.debug("Groq call failed: model=%s, kind=%s", model, error.kind.value)
        self.metrics_hook.increment(
            names.CHAT_ERRORS_TOTAL, labels={"kind": error.kind.value}
        )
        self.metrics_hook.increment(
            names.CHAT_REQUESTS_TOTAL,
            labels={"model": model, "outcome": error.kind.value},
        )
