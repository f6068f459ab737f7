"""Abstract interface for HTTP executors.

This module defines the abstract base class that all HTTP executor
implementations must follow, enabling pluggable transport layers.
"""

from abc import ABC, abstractmethod

from binance_account.types import Json

API_KEY_HEADER = "X-MBX-APIKEY"


class HttpResponse:
    """Container for HTTP response data.

    Encapsulates the status code, body, and headers from an HTTP response.
    """

    status: int
    body: Json
    headers: dict[str, str] | None

    __slots__ = ("status", "body", "headers")

    def __init__(
        self,
        *,
        status: int,
        body: Json | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize an HTTP response object.

        Args:
            status: The HTTP status code of the response.
            body: The JSON response body. Defaults to an empty dict if None.
            headers: Optional HTTP response headers as key-value pairs.

        """
        self.status = status
        self.body = body if body is not None else {}
        self.headers = headers


class HttpExecutor(ABC):
    """Abstract base class for HTTP request executors.

    Signed requests carry all of their parameters, including the signature, in
    the URL query string and are sent with an empty body for every method.
    """

    api_url: str
    api_key: str | None = None

    @abstractmethod
    def __init__(
        self,
        api_url: str,
        api_key: str | None,
    ):
        """Initialize the HTTP executor.

        Args:
            api_url: The base API URL for making requests.
            api_key: Optional API key for authentication.

        """
        ...

    @abstractmethod
    async def send_signed_request(
        self,
        method: str,
        path: str,
        signed_query: str,
    ) -> HttpResponse:
        """Send a signed HTTP request with API key authentication.

        Args:
            method: The HTTP method (e.g., 'GET', 'POST', 'DELETE').
            path: The URL path for the request.
            signed_query: The encoded query string, ending with the signature.

        Returns:
            An HttpResponse object containing the status, body, and headers.

        """
        ...

    async def close(self) -> None:
        """Release any connections held by the executor."""
        return None

    def signed_url(self, path: str, signed_query: str) -> str:
        return f"{self.api_url}{path}?{signed_query}"
