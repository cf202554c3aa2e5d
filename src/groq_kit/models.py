# src/groq_kit/models.py

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in the conversation.

    Immutable. Ordering within a conversation is up to the caller.
    """

    role: Role
    content: str
    images: tuple[str, ...] = ()  # URLs or data URIs, vision models only


@dataclass(frozen=True)
class ChatCompletionRequest:
    """Request payload for chat completions.

    Optional sampling parameters left as None are omitted from the wire body.
    """

    model: str
    messages: list[Message]
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    stop: list[str] | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    n: int | None = None
    stream: bool = False


@dataclass(frozen=True)
class Usage:
    """Token usage for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass(frozen=True)
class Choice:
    index: int
    message: Message
    finish_reason: str | None


@dataclass(frozen=True)
class ChatCompletion:
    """Response from the chat completions endpoint.

    Read-only. Produced once per successful call.
    """

    id: str
    object: str
    created: int
    model: str
    choices: list[Choice]
    usage: Usage

    @property
    def content(self) -> str | None:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content


@dataclass(frozen=True)
class Delta:
    role: Role | None = None
    content: str | None = None


@dataclass(frozen=True)
class ChunkChoice:
    index: int
    delta: Delta
    finish_reason: str | None = None


@dataclass(frozen=True)
class ChatCompletionChunk:
    """One incremental fragment of a streamed completion."""

    id: str
    object: str
    created: int
    model: str
    choices: list[ChunkChoice] = field(default_factory=list)

    @property
    def content(self) -> str:
        if not self.choices:
            return ""
        return self.choices[0].delta.content or ""
