# src/groq_kit/validation.py

import logging

from .errors import GroqValidationError
from .models import ChatCompletionRequest, Role

logger = logging.getLogger(__name__)


def _check_range(
    value: float | None, low: float, high: float, field: str, message: str
) -> None:
    if value is not None and not low <= value <= high:
        raise GroqValidationError(message, field=field)


def validate_request(request: ChatCompletionRequest) -> None:
    """Reject malformed requests before any network call.

    Raises:
        GroqValidationError: Naming the first invalid field.
    """
    if not request.model or not request.model.strip():
        raise GroqValidationError("Model cannot be empty", field="model")

    if not request.messages:
        raise GroqValidationError("Messages cannot be empty", field="messages")

    for message in request.messages:
        try:
            Role(message.role)
        except ValueError:
            raise GroqValidationError(
                f"Invalid message role: {message.role!r}", field="messages"
            ) from None

    _check_range(
        request.temperature, 0, 2, "temperature", "Temperature must be between 0 and 2"
    )
    _check_range(request.top_p, 0, 1, "top_p", "Top P must be between 0 and 1")

    if request.max_tokens is not None and request.max_tokens < 1:
        raise GroqValidationError("Max tokens must be positive", field="max_tokens")

    if request.n is not None and request.n < 1:
        raise GroqValidationError("Completion count must be positive", field="n")

    _check_range(
        request.presence_penalty,
        -2,
        2,
        "presence_penalty",
        "Presence penalty must be between -2 and 2",
    )
    _check_range(
        request.frequency_penalty,
        -2,
        2,
        "frequency_penalty",
        "Frequency penalty must be between -2 and 2",
    )

    if request.stop is not None and any(not s for s in request.stop):
        raise GroqValidationError("Stop sequences cannot be empty", field="stop")

    logger.debug(
        "Validated request: model=%s, messages=%d",
        request.model,
        len(request.messages),
    )
