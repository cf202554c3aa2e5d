# src/groq_kit/transport.py

import asyncio
import logging
from collections.abc import AsyncIterator

import httpx

from ._wire import parse_chunk, parse_completion, request_to_payload
from .config import GroqConfig
from .error_mapper import error_from_exception, error_from_response, error_from_status
from .models import ChatCompletion, ChatCompletionChunk, ChatCompletionRequest

logger = logging.getLogger(__name__)
http_logger = logging.getLogger("groq_kit.http")

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


async def _log_request(request: httpx.Request) -> None:
    # Headers are never logged, they carry the credential
    http_logger.info("HTTP request: %s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    http_logger.info(
        "HTTP response: %s %s -> %d",
        response.request.method,
        response.request.url,
        response.status_code,
    )


class ChatTransport:
    """One HTTP POST per call against {base_url}/chat/completions.

    Owns the httpx connection pool for the lifetime of the client.
    Stateless across calls otherwise.
    """

    def __init__(
        self,
        config: GroqConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        event_hooks: dict[str, list] = {}
        if config.enable_logging:
            event_hooks = {"request": [_log_request], "response": [_log_response]}

        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            transport=http_transport,
            event_hooks=event_hooks,
        )
        self._url = config.completions_url
        self._timeout = config.timeout_seconds
        self._closed = False
        logger.debug("Initialized ChatTransport for %s", self._url)

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def send(self, request: ChatCompletionRequest) -> ChatCompletion:
        """Send one non-streaming request.

        The configured timeout bounds the whole round-trip, not each phase.

        Raises:
            GroqError: Mapped from the status code, body or transport failure.
        """
        self._ensure_open()
        payload = request_to_payload(request)

        try:
            response = await asyncio.wait_for(
                self._client.post(self._url, json=payload),
                timeout=self._timeout,
            )
        except (httpx.RequestError, asyncio.TimeoutError) as e:
            raise error_from_exception(e) from e

        if not response.is_success:
            raise error_from_response(response)

        return parse_completion(response.content)

    async def stream(
        self, request: ChatCompletionRequest
    ) -> AsyncIterator[ChatCompletionChunk]:
        """Send one streaming request and yield chunks as they arrive.

        A failed handshake is mapped by status code only; the body is not read.
        """
        self._ensure_open()
        payload = request_to_payload(request)

        try:
            async with self._client.stream(
                "POST",
                self._url,
                json=payload,
                headers={"Accept": "text/event-stream"},
            ) as response:
                if not response.is_success:
                    raise error_from_status(response)

                async for line in response.aiter_lines():
                    line = line.strip()
                    if not line.startswith(SSE_DATA_PREFIX):
                        continue

                    data = line[len(SSE_DATA_PREFIX) :].strip()
                    if data == SSE_DONE:
                        return
                    yield parse_chunk(data)
        except httpx.RequestError as e:
            raise error_from_exception(e) from e

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()
        logger.debug("Closed ChatTransport")

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Client is closed")
