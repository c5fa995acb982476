"""Structured exception classes for the WooCommerce API client."""

import json
from typing import Any, Dict, List, Optional


class WooCommerceError(Exception):
    """Base exception for all WooCommerce API client errors.

    This exception serves as the parent class for every error raised by
    the client, providing a consistent interface for error handling in
    the per-resource services and in calling code.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict(), default=str)


class ConfigurationError(WooCommerceError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)


class RequestBuildError(WooCommerceError):
    """Raised when a request cannot be constructed.

    Covers empty paths, bodies that cannot be JSON encoded and query
    option objects that cannot be turned into query parameters. Nothing
    has been sent when this is raised.

    :param message: Description of the build failure
    :param field: Optional name of the offending option field
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize build error with message and optional field."""
        details = {}
        if field:
            details["field"] = field
        super().__init__(message=message, code="REQUEST_BUILD_ERROR", details=details)


class TransportError(WooCommerceError):
    """Raised when no HTTP response could be obtained.

    Connection failures, DNS errors and timeouts end up here. These are
    never retried.

    :param message: Description of the network failure
    :param original_error: The underlying httpx exception
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """Initialize transport error with message and the wrapped exception."""
        details = {}
        if original_error is not None:
            details["original_error"] = str(original_error)
            details["error_type"] = type(original_error).__name__
        super().__init__(message=message, code="TRANSPORT_ERROR", details=details)
        self.original_error = original_error


class DecodingError(WooCommerceError):
    """Raised when a response body cannot be parsed.

    The raw body and the parser message are kept for diagnostics.

    :param message: Parser failure message
    :param body: Raw response body
    :param status_code: Optional HTTP status of the response
    """

    def __init__(
        self,
        message: str,
        body: bytes = b"",
        status_code: Optional[int] = None,
    ):
        """Initialize decoding error with the body that failed to parse."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if body:
            details["body"] = body[:512].decode("utf-8", errors="replace")
        super().__init__(message=message, code="DECODING_ERROR", details=details)
        self.body = body
        self.status_code = status_code


class PaginationParseError(DecodingError):
    """Raised when a ``Link`` header does not have the expected shape.

    Only the pagination step fails; when raised from a list call the
    already decoded items are attached as ``items``.

    :param message: Description of the malformed entry
    :param header: The raw header value
    """

    def __init__(self, message: str, header: str = ""):
        """Initialize pagination error with the offending header value."""
        super().__init__(message=message, body=header.encode("utf-8"))
        self.code = "PAGINATION_PARSE_ERROR"
        self.header = header
        self.items: Optional[List[Any]] = None


class ResponseError(WooCommerceError):
    """Raised for any non-2xx response from the API.

    Mirrors the API's error envelope ``{code, message, data}``.

    :param message: Message from the error body, or empty
    :param status_code: HTTP status code of the response
    :param error_code: The API's own string error code, e.g. ``woocommerce_rest_invalid_id``
    :param data: The raw ``data`` slot of the error body
    :param errors: Field-level validation messages extracted from ``data``
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[str] = None,
        data: Any = None,
        errors: Optional[List[str]] = None,
    ):
        """Initialize response error with status and parsed error body."""
        details: Dict[str, Any] = {"status_code": status_code}
        if error_code:
            details["api_code"] = error_code
        if errors:
            details["errors"] = errors
        super().__init__(message=message, code="RESPONSE_ERROR", details=details)
        self.status_code = status_code
        self.error_code = error_code
        self.data = data
        self.errors = errors or []


class RateLimitError(ResponseError):
    """Raised on HTTP 429.

    :param retry_after: Seconds the server asked us to wait, 0 if not given
    """

    def __init__(
        self,
        message: str,
        retry_after: float = 0.0,
        error_code: Optional[str] = None,
        data: Any = None,
        errors: Optional[List[str]] = None,
    ):
        """Initialize rate limit error with the advertised wait."""
        super().__init__(
            message=message,
            status_code=429,
            error_code=error_code,
            data=data,
            errors=errors,
        )
        self.code = "RATE_LIMIT_ERROR"
        self.retry_after = retry_after
        self.details["retry_after"] = retry_after


class ServiceUnavailableError(ResponseError):
    """Raised on HTTP 503. Retried while the retry budget allows."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        data: Any = None,
        errors: Optional[List[str]] = None,
    ):
        """Initialize service unavailable error."""
        super().__init__(
            message=message,
            status_code=503,
            error_code=error_code,
            data=data,
            errors=errors,
        )
        self.code = "SERVICE_UNAVAILABLE_ERROR"
