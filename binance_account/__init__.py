"""Typed async client for Binance account and trading REST endpoints."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed package version, or "unknown" when not installed."""
    try:
        return version("binance-account")
    except PackageNotFoundError:
        return "unknown"


__version__ = get_version()

from binance_account.account import Account  # noqa: E402
from binance_account.config import Config  # noqa: E402
from binance_account.errors import (  # noqa: E402
    AssetNotFoundError,
    BaseError,
    ConfigurationError,
    DecodeError,
    ExchangeError,
    InvalidOrderError,
    LocalLookupError,
    MissingCredentialsError,
    TransportError,
    ValidationError,
)
from binance_account.helpers import print_data  # noqa: E402
from binance_account.types import (  # noqa: E402
    AccountInformation,
    Balance,
    Fill,
    Order,
    OrderCanceled,
    OrderCancellation,
    OrderRequest,
    OrderResponseType,
    OrdersQuery,
    OrderSide,
    OrderStatus,
    OrderStatusRequest,
    OrderType,
    SubAccountCreationResponse,
    TestResponse,
    TimeInForce,
    TradeHistory,
    Transaction,
)

__all__ = [
    "Account",
    "Config",
    "get_version",
    "print_data",
    # Errors
    "AssetNotFoundError",
    "BaseError",
    "ConfigurationError",
    "DecodeError",
    "ExchangeError",
    "InvalidOrderError",
    "LocalLookupError",
    "MissingCredentialsError",
    "TransportError",
    "ValidationError",
    # Requests
    "OrderCancellation",
    "OrderRequest",
    "OrdersQuery",
    "OrderStatusRequest",
    # Enums
    "OrderResponseType",
    "OrderSide",
    "OrderStatus",
    "OrderType",
    "TimeInForce",
    # Responses
    "AccountInformation",
    "Balance",
    "Fill",
    "Order",
    "OrderCanceled",
    "SubAccountCreationResponse",
    "TestResponse",
    "TradeHistory",
    "Transaction",
]
