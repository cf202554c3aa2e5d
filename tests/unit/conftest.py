# tests/unit/conftest.py

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from groq_kit.client import GroqClient
from groq_kit.config import GroqConfig

MODEL = "llama-3.3-70b-versatile"


def completion_body(content: str | None = "Hello! How can I help you?") -> dict:
    """A minimal 200 body from /chat/completions."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": MODEL,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 8, "total_tokens": 18},
    }


def sse_body(*contents: str) -> bytes:
    """A server-sent event stream with one chunk per content, then [DONE]."""
    lines = []
    for content in contents:
        chunk = {
            "id": "chatcmpl-123",
            "object": "chat.completion.chunk",
            "created": 1700000000,
            "model": MODEL,
            "choices": [{"index": 0, "delta": {"content": content}}],
        }
        lines.append(f"data: {json.dumps(chunk)}\n\n")
    lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class RecordingHandler:
    """httpx.MockTransport handler that replays responses in order.

    The last response repeats once the list is exhausted. An httpx
    exception class in the list is raised instead of returning a response.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        outcome = self.responses[index]
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("simulated failure", request=request)
        # Fresh copy per call; a response body can only be consumed once
        return httpx.Response(
            outcome.status_code, headers=outcome.headers, content=outcome.content
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def payload(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(sleeper: RecordingSleep) -> Callable[..., GroqClient]:
    def _make(handler: Callable, **config_options: Any) -> GroqClient:
        config = GroqConfig(api_key="test-key", **config_options)
        client = GroqClient(config, http_transport=httpx.MockTransport(handler))
        client._sleep = sleeper
        return client

    return _make
