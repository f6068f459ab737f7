"""HTTP executor implementation using aiohttp.

This module provides async HTTP request handling using the aiohttp library.
"""

import asyncio
from typing_extensions import override

import aiohttp
from yarl import URL

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


class AiohttpHttpExecutor(HttpExecutor):
    """HTTP executor implementation using aiohttp.

    The ``aiohttp.ClientSession`` is created on first use so that it is bound to
    the running event loop.
    """

    @override
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize an AiohttpHttpExecutor.

        Args:
            api_url: The base URL for the REST API. Defaults to DEFAULT_API_URL.
            api_key: Optional API key for signed requests.
            timeout: Optional total request timeout in seconds.

        """
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            if self.timeout is not None:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                )
            else:
                self._session = aiohttp.ClientSession()
        return self._session

    @override
    async def send_signed_request(
        self,
        method: str,
        path: str,
        signed_query: str,
    ) -> HttpResponse:
        """Send a signed request to the API.

        Raises:
            MissingCredentialsError: If the api_key is not set.
            TransportTimeoutError: If the request times out.
            HttpConnectionError: If the connection fails or is lost.
            TransportError: If any other transport-level error occurs.

        """
        if self.api_key is None:
            raise MissingCredentialsError("API key")

        # the query is already encoded and signed, so it must be sent verbatim
        url = URL(self.signed_url(path, signed_query), encoded=True)
        headers = {
            API_KEY_HEADER: self.api_key,
            "Accept": "application/json",
            "User-Agent": get_user_agent(),
        }
        try:
            async with self._get_session().request(
                method, url, headers=headers
            ) as response:
                status = response.status
                content = await response.read()
                response_headers = dict(response.headers)
        except BaseError:
            raise
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError(
                f"{method} request to {path} timed out", timeout_seconds=self.timeout
            ) from e
        except aiohttp.ClientConnectionError as e:
            raise HttpConnectionError(
                f"Failed to connect to {path}: {e}", url=path
            ) from e
        except Exception as e:
            raise TransportError(f"{method} request to {path} failed: {e}") from e
        return HttpResponse(
            status=status,
            body=deserialize_response(content, path, status),
            headers=response_headers,
        )

    @override
    async def close(self) -> None:
        """Close the executor and its underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
