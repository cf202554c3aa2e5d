# src/groq_kit/_wire.py

"""Internal module for converting between public types and the JSON wire format.

This is infrastructure, not behavior. Pure data transformation.
Pydantic models stop here; callers only ever see the dataclasses in models.py.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .errors import GroqParsingError
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


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageURL(BaseModel):
    url: str


class ImagePart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentPart = Annotated[TextPart | ImagePart, Field(discriminator="type")]


class WireMessage(BaseModel):
    role: Role
    content: str | list[ContentPart] | None = None


class WireRequest(BaseModel):
    model: str
    messages: list[WireMessage]
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    stop: list[str] | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    n: int | None = None
    stream: bool = False


class WireUsage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class WireChoice(BaseModel):
    index: int
    message: WireMessage
    finish_reason: str | None = None


class WireCompletion(BaseModel):
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: list[WireChoice]
    usage: WireUsage


class WireDelta(BaseModel):
    role: Role | None = None
    content: str | None = None


class WireChunkChoice(BaseModel):
    index: int = 0
    delta: WireDelta = Field(default_factory=WireDelta)
    finish_reason: str | None = None


class WireChunk(BaseModel):
    id: str
    object: str = "chat.completion.chunk"
    created: int
    model: str
    choices: list[WireChunkChoice] = Field(default_factory=list)


class WireErrorDetails(BaseModel):
    message: str
    type: str | None = None
    code: str | int | None = None


class WireErrorEnvelope(BaseModel):
    error: WireErrorDetails


def _message_to_wire(message: Message) -> WireMessage:
    if not message.images:
        return WireMessage(role=message.role, content=message.content)

    parts: list[TextPart | ImagePart] = []
    if message.content:
        parts.append(TextPart(text=message.content))
    parts.extend(ImagePart(image_url=ImageURL(url=url)) for url in message.images)
    return WireMessage(role=message.role, content=parts)


def _message_from_wire(wire: WireMessage) -> Message:
    if wire.content is None:
        return Message(role=wire.role, content="")
    if isinstance(wire.content, str):
        return Message(role=wire.role, content=wire.content)

    text = "".join(p.text for p in wire.content if isinstance(p, TextPart))
    images = tuple(p.image_url.url for p in wire.content if isinstance(p, ImagePart))
    return Message(role=wire.role, content=text, images=images)


def request_to_payload(request: ChatCompletionRequest) -> dict[str, Any]:
    """Convert a request to the JSON body sent to /chat/completions.

    Unset optional parameters are omitted; `stream` is always present.
    """
    wire = WireRequest(
        model=request.model,
        messages=[_message_to_wire(m) for m in request.messages],
        temperature=request.temperature,
        max_tokens=request.max_tokens,
        top_p=request.top_p,
        stop=list(request.stop) if request.stop is not None else None,
        presence_penalty=request.presence_penalty,
        frequency_penalty=request.frequency_penalty,
        n=request.n,
        stream=request.stream,
    )
    return wire.model_dump(mode="json", exclude_none=True)


def request_from_payload(payload: dict[str, Any]) -> ChatCompletionRequest:
    """Inverse of request_to_payload.

    Raises:
        GroqParsingError: If the payload does not match the request shape.
    """
    try:
        wire = WireRequest.model_validate(payload)
    except ValidationError as e:
        raise GroqParsingError(f"Invalid request payload: {e}") from e

    return ChatCompletionRequest(
        model=wire.model,
        messages=[_message_from_wire(m) for m in wire.messages],
        temperature=wire.temperature,
        max_tokens=wire.max_tokens,
        top_p=wire.top_p,
        stop=wire.stop,
        presence_penalty=wire.presence_penalty,
        frequency_penalty=wire.frequency_penalty,
        n=wire.n,
        stream=wire.stream,
    )


def parse_completion(raw: str | bytes) -> ChatCompletion:
    """Decode a 2xx response body.

    Raises:
        GroqParsingError: On invalid JSON or a body of the wrong shape.
    """
    try:
        wire = WireCompletion.model_validate_json(raw)
    except ValidationError as e:
        raise GroqParsingError(f"Failed to parse API response: {e}") from e

    return ChatCompletion(
        id=wire.id,
        object=wire.object,
        created=wire.created,
        model=wire.model,
        choices=[
            Choice(
                index=c.index,
                message=_message_from_wire(c.message),
                finish_reason=c.finish_reason,
            )
            for c in wire.choices
        ],
        usage=Usage(
            prompt_tokens=wire.usage.prompt_tokens,
            completion_tokens=wire.usage.completion_tokens,
            total_tokens=wire.usage.total_tokens,
        ),
    )


def parse_chunk(data: str) -> ChatCompletionChunk:
    """Decode the JSON payload of one server-sent `data:` line."""
    try:
        wire = WireChunk.model_validate_json(data)
    except ValidationError as e:
        raise GroqParsingError(f"Failed to parse stream chunk: {e}") from e

    return ChatCompletionChunk(
        id=wire.id,
        object=wire.object,
        created=wire.created,
        model=wire.model,
        choices=[
            ChunkChoice(
                index=c.index,
                delta=Delta(role=c.delta.role, content=c.delta.content),
                finish_reason=c.finish_reason,
            )
            for c in wire.choices
        ],
    )


def parse_error_body(raw: str | bytes) -> WireErrorDetails | None:
    """Return the structured error details, or None if the body has none."""
    try:
        return WireErrorEnvelope.model_validate_json(raw).error
    except ValidationError:
        return None
