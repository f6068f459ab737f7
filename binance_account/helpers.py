"""Helper utilities for the Binance account SDK.

This module contains utility functions for client identification, response
deserialization, decoding JSON into the SDK's response types, and display
formatting.
"""

import inspect
import logging
from dataclasses import asdict, is_dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, TypeVar

import orjson
from prettyprinter import cpprint

from binance_account.errors import DeserializationError
from binance_account.types import (
    AccountInformation,
    Balance,
    Fill,
    Json,
    Transaction,
)

log = logging.getLogger(__name__)


# ============================================================================
# CLIENT IDENTIFICATION
# ============================================================================


@lru_cache(maxsize=1)
def get_user_agent() -> str:
    """Get the client identification string sent with every request."""
    import binance_account

    return f"BinanceAccountPythonSDK/{binance_account.__version__}"


# ============================================================================
# OBJECT CONSTRUCTION
# ============================================================================

T = TypeVar("T")


def create_with(func: Callable[..., T], data: Dict[str, Any]) -> T:
    """Create an object from a dictionary, filtering to only valid parameters.

    This allows constructing objects from API responses that may contain
    additional fields beyond what the constructor expects, making the SDK
    more resilient to API changes.

    Args:
        func: Constructor or factory function to call
        data: Dictionary of data to pass as kwargs

    Returns:
        Instance created by calling func with filtered data

    Raises:
        TypeError: If data is not a JSON object or required fields are missing

    """
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    valid_keys = inspect.signature(func).parameters.keys()
    filtered_data = {k: v for k, v in data.items() if k in valid_keys}
    return func(**filtered_data)


# ============================================================================
# DESERIALIZATION
# ============================================================================


def deserialize_response(response_body: bytes, url: str, status: int = 200) -> Json:
    """Deserialize a JSON response body.

    Error responses are not always JSON (a firewall may answer with an HTML page),
    so a non-2XX body that fails to parse is returned as ``{"msg": <text>}`` and
    the status mapping still applies.

    Args:
        response_body: Response bytes to deserialize
        url: URL that was requested (for error messages)
        status: HTTP status of the response

    Returns:
        Deserialized JSON object or array

    Raises:
        DeserializationError: If a 2XX body cannot be deserialized

    """
    try:
        return orjson.loads(response_body)  # type: ignore
    except Exception as e:
        if not 200 <= status < 300:
            text = response_body.decode("utf-8", errors="replace").strip()
            return {"msg": text} if text else {}
        raise DeserializationError(
            f"Failed to parse JSON response from {url}: {e}", status=status
        ) from e


def decode_object(cls: Callable[..., T]) -> Callable[[Json], T]:
    """Return a decoder building ``cls`` from a JSON object."""

    def decode(body: Json) -> T:
        return create_with(cls, body)  # type: ignore

    return decode


def decode_list(cls: Callable[..., T]) -> Callable[[Json], list[T]]:
    """Return a decoder building a list of ``cls`` from a JSON array of objects."""

    def decode(body: Json) -> list[T]:
        if not isinstance(body, list):
            raise TypeError(f"Expected a JSON array, got {type(body).__name__}")
        return [create_with(cls, item) for item in body]  # type: ignore

    return decode


def decode_account_information(body: Json) -> AccountInformation:
    if not isinstance(body, dict):
        raise TypeError(f"Expected a JSON object, got {type(body).__name__}")
    data = dict(body)
    data["balances"] = [create_with(Balance, b) for b in body["balances"]]  # type: ignore
    return create_with(AccountInformation, data)


def decode_transaction(body: Json) -> Transaction:
    if not isinstance(body, dict):
        raise TypeError(f"Expected a JSON object, got {type(body).__name__}")
    data = dict(body)
    if "fills" in body:
        data["fills"] = [create_with(Fill, f) for f in body["fills"]]  # type: ignore
    return create_with(Transaction, data)


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def print_data(response: Any) -> None:
    """Pretty-print response data, handling dataclasses specially.

    Dataclass instances are converted to dictionaries before printing
    for better formatting.

    Args:
        response: Data to print

    """
    if is_dataclass(response) and not isinstance(response, type):
        cpprint(asdict(response))
    else:
        cpprint(response)
