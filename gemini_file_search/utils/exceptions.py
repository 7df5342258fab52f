"""Custom exceptions for Gemini File Search."""


class FileSearchError(Exception):
    """Base exception for all Gemini File Search errors."""

    pass


class ValidationError(FileSearchError):
    """Raised when caller-supplied input violates a precondition.

    Attributes:
        field: Name of the parameter that failed validation
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ApiError(FileSearchError):
    """Raised when the Gemini API returns a non-success status.

    Attributes:
        operation: API operation that failed (e.g. "generateContent")
        status_code: HTTP status returned by the provider
        body: Raw response body text
    """

    def __init__(self, operation: str, status_code: int, body: str) -> None:
        super().__init__(f"Gemini {operation} failed: {status_code} {body}")
        self.operation = operation
        self.status_code = status_code
        self.body = body


class RateLimitError(ApiError):
    """Raised when the Gemini API rejects a request with 429."""

    pass


class NetworkError(FileSearchError):
    """Raised when the request could not reach the provider."""

    pass


class RequestTimeoutError(NetworkError, TimeoutError):
    """Raised when a request does not complete before its deadline."""

    pass


class CredentialError(FileSearchError):
    """Raised when no usable API key can be resolved for a provider."""

    pass


class ResponseFormatError(FileSearchError):
    """Raised when a successful response cannot be interpreted."""

    pass
