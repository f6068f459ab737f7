"""HTTP executor implementation using requests.

This module provides HTTP request handling using the popular requests library.
The blocking call runs in a worker thread so that the event loop is not held
while waiting on the exchange.
"""

import asyncio
from typing_extensions import override

import requests

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


class RequestsHttpExecutor(HttpExecutor):
    """HTTP executor implementation using requests.

    Provides HTTP request execution using a ``requests.Session``.
    """

    @override
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the RequestsHttpExecutor with API configuration.

        Args:
            api_url: The base URL for the REST API. Defaults to DEFAULT_API_URL.
            api_key: The API key for signed requests. Optional.
            timeout: Optional request timeout in seconds.

        """
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

    @override
    async def send_signed_request(
        self, method: str, path: str, signed_query: str
    ) -> HttpResponse:
        """Send a signed request to the API.

        Raises:
            MissingCredentialsError: If the api_key is not set.
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If the connection to the server fails.
            TransportError: If any other transport-level error occurs.

        """
        if self.api_key is None:
            raise MissingCredentialsError("API key")

        url = self.signed_url(path, signed_query)
        headers = {
            API_KEY_HEADER: self.api_key,
            "Accept": "application/json",
            "User-Agent": get_user_agent(),
        }
        try:
            response = await asyncio.to_thread(
                self.session.request,
                method,
                url,
                headers=headers,
                timeout=self.timeout,
            )
        except BaseError:
            raise
        except requests.Timeout as e:
            raise TransportTimeoutError(
                f"{method} request to {path} timed out", timeout_seconds=self.timeout
            ) from e
        except requests.ConnectionError as e:
            raise HttpConnectionError(f"Failed to connect to {path}", url=path) from e
        except Exception as e:
            raise TransportError(f"{method} request to {path} failed: {e}") from e
        return HttpResponse(
            status=response.status_code,
            body=deserialize_response(response.content, path, response.status_code),
            headers=dict(response.headers),
        )

    @override
    async def close(self) -> None:
        self.session.close()
