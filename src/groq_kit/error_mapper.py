# src/groq_kit/error_mapper.py

"""Maps HTTP outcomes to the groq-kit failure taxonomy.

This is the boundary. httpx exceptions and raw responses stop here.
"""

import asyncio
import logging

import httpx

from ._wire import parse_error_body
from .errors import (
    GroqAPIError,
    GroqAuthenticationError,
    GroqError,
    GroqNetworkError,
    GroqRateLimitError,
    GroqTimeoutError,
)

logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> int | None:
    """Parse a retry-after header given in whole seconds.

    HTTP-date values, fractions and negative numbers count as absent.
    """
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def error_from_status(response: httpx.Response) -> GroqError:
    """Map a non-success response using its status code and headers only."""
    status = response.status_code
    if status == 401:
        return GroqAuthenticationError()
    if status == 429:
        return GroqRateLimitError(
            retry_after_seconds=parse_retry_after(response.headers.get("retry-after"))
        )
    return GroqAPIError(status, response.reason_phrase or "Unexpected status")


def error_from_response(response: httpx.Response) -> GroqError:
    """Map a non-success response that has been read in full.

    A structured `{"error": {...}}` body supplies message and code; anything
    else is reported with the raw body text.
    """
    status = response.status_code
    if status in (401, 429):
        return error_from_status(response)

    details = parse_error_body(response.content)
    if details is None:
        logger.debug("Unstructured error body for status %d", status)
        return GroqAPIError(status, response.text)

    return GroqAPIError(
        status,
        details.message,
        error_code=str(details.code) if details.code is not None else None,
        error_type=details.type,
    )


def error_from_exception(exc: BaseException) -> GroqError:
    """Map a transport-level exception.

    The caller is expected to raise the result `from exc`.
    """
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return GroqTimeoutError()
    return GroqNetworkError(f"Network error occurred: {exc}")
