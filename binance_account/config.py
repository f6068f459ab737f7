"""Client configuration."""

from dataclasses import dataclass
from typing import Self

DEFAULT_API_URL: str = "https://api.binance.com"
TESTNET_API_URL: str = "https://testnet.binance.vision"

DEFAULT_RECV_WINDOW: int = 5000


@dataclass(frozen=True)
class Config:
    """Endpoint and signing defaults shared by every request of a client.

    Attributes:
        rest_api_endpoint: Base URL of the REST API, without trailing slash.
        recv_window: Receive window in milliseconds used when a request does not
            specify its own. Cannot be greater than 60000.

    """

    rest_api_endpoint: str = DEFAULT_API_URL
    recv_window: int = DEFAULT_RECV_WINDOW

    @classmethod
    def testnet(cls) -> Self:
        """Configuration for the spot testnet, where orders use test funds."""
        return cls(rest_api_endpoint=TESTNET_API_URL)
