"""Browser API exceptions.

Two families matter to the state layer: transport failures (the request
did not produce a usable 2xx response) and malformed payloads (a 2xx
response whose body does not have the expected shape).
"""

from __future__ import annotations

from typing import Any


class BrowserAPIError(Exception):
    """Base exception for browser API errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (if a response was received).
        response_body: Decoded response body (if available).
        endpoint: The API endpoint that was called.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize BrowserAPIError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the API.
            response_body: Decoded response body from the API.
            endpoint: The API endpoint that was called.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[endpoint: {self.endpoint}]")
        return " ".join(parts)

    @property
    def user_message(self) -> str:
        """Message suitable for showing to an operator.

        Prefers the ``error`` field of a structured ``{"error": ...}`` body
        over the generic transport message.
        """
        if isinstance(self.response_body, dict):
            server_error = self.response_body.get("error")
            if isinstance(server_error, str) and server_error:
                return server_error
        return self.message


class BrowserConnectionError(BrowserAPIError):
    """Raised when the API cannot be reached.

    Covers connection refusals, DNS failures and timeouts.
    """

    def __init__(
        self,
        message: str = "Failed to connect to browser API",
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize BrowserConnectionError.

        Args:
            message: Human-readable error message.
            endpoint: The API endpoint that was attempted.
            original_error: The underlying httpx exception.
        """
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class BrowserNotFoundError(BrowserAPIError):
    """Raised on a 404 response."""

    def __init__(
        self,
        message: str = "Resource not found",
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            response_body=response_body,
            endpoint=endpoint,
        )


class MalformedPayloadError(BrowserAPIError):
    """Raised when a successful response does not match the expected shape."""

    def __init__(
        self,
        message: str = "Malformed response payload",
        expected: str | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
        status_code: int | None = 200,
    ) -> None:
        """Initialize MalformedPayloadError.

        Args:
            message: Human-readable error message.
            expected: Short description of the expected shape.
            response_body: The decoded body that failed validation.
            endpoint: The API endpoint that was called.
            status_code: Status of the (successful) response.
        """
        if expected:
            message = f"{message}: expected {expected}"
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
        )
        self.expected = expected


class BrowserConfigError(Exception):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message.
            details: Additional details.
        """
        super().__init__(message)
        self.message = message
        self.details = details
