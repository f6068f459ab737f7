"""Exception hierarchy for the Binance account SDK.

This module defines the public exception hierarchy for the entire SDK. All exceptions
raised by this library inherit from BaseError.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - API server returned an error response
├── TransportError - Network/protocol-level errors during transmission
├── DecodeError - A successful response did not match the expected type
├── ValidationError - Client-side input validation failures
├── ConfigurationError - Credentials missing or unusable for signing
└── LocalLookupError - A local post-filter over a response found nothing
"""


class BaseError(Exception):
    """Base exception for all SDK errors.

    All exceptions raised by this library inherit from this class, allowing users
    to catch all SDK-related errors with a single except clause.

    This exception should not be raised directly. Use one of the specific subclasses
    instead.
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """Exception raised when the API server returns an error response.

    ExchangeError indicates that:
    - The network connection succeeded
    - The request was properly formatted and transmitted
    - A server processed the request and returned an error response
    """

    pass


class BadHttpStatus(ExchangeError):
    """Raised when response status from exchange is not 2XX."""

    status_code: int
    message: str
    code: int | None

    def __init__(self, status_code: int, message: str, code: int | None = None):
        """Initialize a BadHttpStatus error.

        Args:
            status_code: The HTTP status code returned by the server.
            message: Description of the HTTP error.
            code: The exchange error code from the response body, if any.

        """
        self.status_code = status_code
        self.message = message
        self.code = code
        super().__init__(message)


## 5xx status errors - unexpected - should be reported


class InternalServerError(BadHttpStatus):
    """Raised when the server returns a 500 Internal Server Error."""

    pass


class BadGateway(BadHttpStatus):
    """Raised when the server returns a 502 Bad Gateway error."""

    pass


class ServiceUnavailable(BadHttpStatus):
    """Raised when the server returns a 503 Service Unavailable error.

    The exchange uses this status when the execution status of a request is
    unknown, so the request may or may not have been applied.
    """

    pass


class GatewayTimeout(BadHttpStatus):
    """Raised when the server returns a 504 Gateway Timeout error."""

    pass


## 4xx status errors


class BadRequest(BadHttpStatus):
    """Raised when the server returns a 400 Bad Request error."""

    pass


class Unauthorized(BadHttpStatus):
    """Raised when the server returns a 401 Unauthorized error."""

    pass


class Forbidden(BadHttpStatus):
    """Raised when the server returns a 403 Forbidden error."""

    pass


class NotFound(BadHttpStatus):
    """Raised when the server returns a 404 Not Found error."""

    pass


class IpBanned(BadHttpStatus):
    """Raised when the server returns 418 after repeated rate limit violations."""

    pass


class RateLimited(BadHttpStatus):
    """Raised when the server returns a 429 Rate Limited error."""

    pass


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """Exception raised for errors in the process of transporting data to/from the API server.

    TransportError indicates that:
    - The error occurred in the process of transporting data
    - Valid application-level data was not successfully exchanged
    - The error could be transient and may succeed on retry

    The SDK never retries on its own; retry policy belongs to the caller.
    """

    pass


class HttpConnectionError(TransportError):
    """Raised when a connection cannot be established or is lost."""

    def __init__(self, message: str, url: str | None = None):
        """Initialize an HttpConnectionError.

        Args:
            message: Description of the connection error.
            url: The URL that failed to connect, if available.

        """
        self.message = message
        self.url = url
        if url:
            super().__init__(f"{message} (url: {url})")
        else:
            super().__init__(message)


class TransportTimeoutError(TransportError):
    """Raised when a request or connection times out."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        """Initialize a TransportTimeoutError.

        Args:
            message: Description of the timeout error.
            timeout_seconds: The timeout duration in seconds, if available.

        """
        self.message = message
        self.timeout_seconds = timeout_seconds
        if timeout_seconds:
            super().__init__(f"{message} (timeout: {timeout_seconds}s)")
        else:
            super().__init__(message)


class DeserializationError(TransportError):
    """Raised by an executor when a successful response body is not valid JSON.

    The account client re-raises it as a :class:`DecodeError` naming the operation.
    """

    def __init__(self, message: str, status: int | None = None):
        """Initialize a DeserializationError.

        Args:
            message: Description of the deserialization error.
            status: The HTTP status of the response, if available.

        """
        self.message = message
        self.status = status
        super().__init__(message)


# ============================================================================
# DECODE ERROR
# ============================================================================


class DecodeError(BaseError):
    """Exception raised when a successful response does not match the expected type.

    DecodeError indicates that:
    - The exchange accepted and processed the request
    - The body was not JSON, or its JSON did not fit the response type
    - Retrying a mutating operation may apply it twice
    """

    def __init__(self, message: str, operation: str, status: int | None = None):
        """Initialize a DecodeError.

        Args:
            message: Description of the mismatch.
            operation: The SDK operation whose response failed to decode.
            status: The HTTP status of the response, if available.

        """
        self.message = message
        self.operation = operation
        self.status = status
        super().__init__(f"{operation} (status: {status}): {message}")


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Exception raised for client-side input validation failures.

    ValidationError indicates that:
    - No network request was attempted
    - The error is due to invalid input from the caller
    - The error can be fixed by correcting the input parameters

    Common causes include:
    - Missing required parameters
    - Out-of-range values
    - Malformed numeric input
    - Mutually dependent parameters set inconsistently
    """

    pass


class InvalidOrderError(ValidationError):
    """Raised when an order request violates an exchange order rule."""

    def __init__(self, rule: str):
        """Initialize an InvalidOrderError.

        Args:
            rule: Human readable description of the violated rule.

        """
        self.rule = rule
        super().__init__(rule)


# ============================================================================
# CONFIGURATION ERROR
# ============================================================================


class ConfigurationError(BaseError):
    """Exception raised when the client is not configured well enough to sign or send.

    No request is sent when this error is raised.
    """

    pass


class MissingCredentialsError(ConfigurationError):
    """Raised when required authentication credentials are missing."""

    def __init__(self, credential_type: str = "API key"):
        """Initialize a MissingCredentialsError.

        Args:
            credential_type: The type of credential that is missing (default: "API key").

        """
        self.credential_type = credential_type
        super().__init__(f"{credential_type} is not set")


# ============================================================================
# LOCAL LOOKUP ERROR
# ============================================================================


class LocalLookupError(BaseError):
    """Exception raised when a client-side filter over a valid response finds nothing.

    The exchange call itself succeeded; the requested item was simply absent.
    """

    pass


class AssetNotFoundError(LocalLookupError):
    """Raised when an account holds no balance entry for the requested asset."""

    def __init__(self, asset: str):
        """Initialize an AssetNotFoundError.

        Args:
            asset: The asset symbol that was looked up.

        """
        self.asset = asset
        super().__init__(f"Asset not found: {asset}")
