# src/groq_kit/__init__.py

"""Async client for the Groq chat completions API.

Design principles:
- Validate first: Malformed requests never reach the network
- Transport only: Retries only on network/rate-limit errors
- Typed failures: Every error is a GroqError tagged with a FailureKind
- No leakage: httpx and pydantic objects never escape the client

Example:
    >>> from groq_kit import create_client, Message, Role
    >>>
    >>> async with create_client("gsk_...") as client:
    ...     response = await client.chat(
    ...         "llama-3.3-70b-versatile",
    ...         [Message(role=Role.USER, content="Hello!")],
    ...     )
    ...     print(response.content)
"""

# Client
from .client import GroqClient

# Config
from .config import GroqConfig

# Errors
from .errors import (
    FailureKind,
    GroqAPIError,
    GroqAuthenticationError,
    GroqError,
    GroqNetworkError,
    GroqParsingError,
    GroqRateLimitError,
    GroqTimeoutError,
    GroqValidationError,
)

# Factory
from .factory import create_client, create_client_from_config

# Types
from .models import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    Choice,
    ChunkChoice,
    Delta,
    Message,
    Role,
    Usage,
)

# Observability
from .observability import MetricsHook, NoOpMetricsHook

__all__ = [
    # Client
    "GroqClient",
    # Config
    "GroqConfig",
    # Errors
    "FailureKind",
    "GroqAPIError",
    "GroqAuthenticationError",
    "GroqError",
    "GroqNetworkError",
    "GroqParsingError",
    "GroqRateLimitError",
    "GroqTimeoutError",
    "GroqValidationError",
    # Factory
    "create_client",
    "create_client_from_config",
    # Types
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "Choice",
    "ChunkChoice",
    "Delta",
    "Message",
    "Role",
    "Usage",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
]
