"""Custom exceptions for the Forge sites client."""

from __future__ import annotations


class ForgeError(Exception):
    """Base exception for everything raised by forgesites."""


class InvalidArgumentError(ForgeError, ValueError):
    """A call was rejected locally, before any request was sent."""


class ForgeClientError(ForgeError):
    """The client was used incorrectly (e.g. an entity with no client bound)."""


class ForgeConnectionError(ForgeError):
    """The request never produced a response (DNS, TLS, timeout, ...)."""


class ForgeAPIError(ForgeError):
    """Base exception for Forge API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ForgeAuthenticationError(ForgeAPIError):
    """401 - Invalid or missing API key."""


class ForgeNotFoundError(ForgeAPIError):
    """404 - Resource not found."""


class ForgeValidationError(ForgeAPIError):
    """422 - Validation error with details."""

    def __init__(self, details: dict) -> None:
        self.details = details
        super().__init__(str(details), status_code=422)


class ForgeRateLimitError(ForgeAPIError):
    """429 - Rate limit exceeded."""
