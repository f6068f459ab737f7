"""HTTP executor implementation using httpx.

This module provides async HTTP request handling using the httpx library.
It is the default executor of the SDK.
"""

from typing_extensions import override

import httpx

from binance_account.config import DEFAULT_API_URL
from binance_account.errors import (
    BaseError,
    HttpConnectionError,
    MissingCredentialsError,
    TransportError,
    TransportTimeoutError,
)
from binance_account.executors.interface import (
    API_KEY_HEADER,
    HttpExecutor,
    HttpResponse,
)
from binance_account.helpers import deserialize_response, get_user_agent


class HttpxHttpExecutor(HttpExecutor):
    """HTTP executor implementation using httpx.

    Provides async HTTP request execution using an ``httpx.AsyncClient``.
    """

    @override
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the HTTPX HTTP executor.

        Args:
            api_url: The base URL for the REST API. Defaults to DEFAULT_API_URL.
            api_key: Optional API key for signed requests. If not provided,
                signed requests will fail with a MissingCredentialsError.
            timeout: Optional request timeout in seconds. Defaults to the httpx
                default.

        """
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.client = (
            httpx.AsyncClient(timeout=timeout)
            if timeout is not None
            else httpx.AsyncClient()
        )

    @override
    async def send_signed_request(
        self,
        method: str,
        path: str,
        signed_query: str,
    ) -> HttpResponse:
        """Send a signed request to the API.

        Args:
            method: The HTTP method to use (e.g., 'GET', 'POST', 'DELETE').
            path: The API endpoint path to request (will be appended to api_url).
            signed_query: The signed query string.

        Returns:
            HttpResponse containing the status code and deserialized response body.

        Raises:
            MissingCredentialsError: If the api_key is not set.
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If there is a connection or network error.
            TransportError: If any other transport-level error occurs.

        """
        if self.api_key is None:
            raise MissingCredentialsError("API key")

        url = self.signed_url(path, signed_query)
        try:
            headers = {
                API_KEY_HEADER: self.api_key,
                "Accept": "application/json",
                "User-Agent": get_user_agent(),
            }

            response = await self.client.request(method, url, headers=headers)

        except BaseError:
            raise
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"{method} request to {path} timed out", timeout_seconds=self.timeout
            ) from e
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise HttpConnectionError(f"Failed to connect to {path}", url=path) from e
        except httpx.NetworkError as e:
            raise HttpConnectionError(
                f"Network error during {method} request to {path}", url=path
            ) from e
        except Exception as e:
            raise TransportError(f"{method} request to {path} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, path, response.status_code),
            headers=dict(response.headers),
        )

    @override
    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self.client.aclose()
