# src/groq_kit/errors.py

"""Failure taxonomy for groq-kit.

Every failure raised by the client is a GroqError. Each subclass carries a
closed `kind` tag so callers can match on FailureKind or catch by class.
"""

from enum import Enum
from typing import ClassVar


class FailureKind(str, Enum):
    """Closed set of failure kinds."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    API = "api"
    NETWORK = "network"
    TIMEOUT = "timeout"
    PARSING = "parsing"


class GroqError(Exception):
    """Base class for all groq-kit failures."""

    kind: ClassVar[FailureKind]
    retryable: ClassVar[bool] = False
    default_message: ClassVar[str] = "Groq request failed"

    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def cause(self) -> BaseException | None:
        """Underlying exception, when raised with `raise ... from exc`."""
        return self.__cause__


class GroqValidationError(GroqError):
    """Malformed config or request. Raised before any I/O."""

    kind = FailureKind.VALIDATION

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class GroqAuthenticationError(GroqError):
    kind = FailureKind.AUTHENTICATION
    default_message = "Invalid or missing API key"

    def __init__(self, message: str | None = None):
        super().__init__(message, status_code=401)


class GroqRateLimitError(GroqError):
    """HTTP 429. `retry_after_seconds` comes from the retry-after header."""

    kind = FailureKind.RATE_LIMIT
    retryable = True
    default_message = "Rate limit exceeded"

    def __init__(
        self,
        message: str | None = None,
        *,
        retry_after_seconds: int | None = None,
    ):
        super().__init__(message, status_code=429)
        self.retry_after_seconds = retry_after_seconds


class GroqAPIError(GroqError):
    """Non-success status that is neither 401 nor 429."""

    kind = FailureKind.API

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        error_code: str | None = None,
        error_type: str | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.error_code = error_code
        self.error_type = error_type

    def __str__(self) -> str:
        return f"API Error [{self.status_code}]: {self.message}"


class GroqNetworkError(GroqError):
    kind = FailureKind.NETWORK
    retryable = True
    default_message = "Network error occurred"


class GroqTimeoutError(GroqError):
    kind = FailureKind.TIMEOUT
    default_message = "Request timed out"


class GroqParsingError(GroqError):
    kind = FailureKind.PARSING
    default_message = "Failed to parse API response"
