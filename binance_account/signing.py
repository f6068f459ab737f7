"""Canonical query encoding and HMAC request signing.

Signed endpoints authenticate a request by an HMAC-SHA256 signature computed over
the exact query string that is sent. Two requests with the same logical parameters
must therefore encode to the same bytes, independent of the order in which the
fields were set. This module provides:

- :class:`QueryParams`, an explicit builder of the parameters that are present
- :func:`format_param_value`, the canonical string form of a parameter value
- :func:`canonical_query`, the sorted, URL-encoded query string
- :func:`build_signed_request`, which appends ``recvWindow``, ``timestamp`` and
  finally ``signature``
"""

import hmac
from decimal import Decimal
from enum import Enum
from hashlib import sha256
from time import time_ns
from typing import Iterable, Self, TypeAlias
from urllib.parse import urlencode

from binance_account.errors import MissingCredentialsError, ValidationError

ParamValue: TypeAlias = str | int | bool | Decimal | float | Enum

MAX_RECV_WINDOW: int = 60_000

RECV_WINDOW_KEY = "recvWindow"
TIMESTAMP_KEY = "timestamp"
SIGNATURE_KEY = "signature"


def current_timestamp_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return time_ns() // 1_000_000


def format_param_value(value: ParamValue) -> str:
    """Convert a parameter value to its canonical wire string.

    Enums use their wire value, booleans are lower case, and decimals are written
    in fixed-point notation with trailing zeros removed.

    Raises:
        ValidationError: If the value has an unsupported type or is not finite.

    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_param_value(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        value = Decimal(str(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValidationError(f"Invalid numeric parameter {value}")
        return format(value.normalize(), "f")
    if isinstance(value, str):
        return value
    raise ValidationError(
        f"Unsupported parameter type {type(value).__name__} for {value!r}"
    )


class QueryParams:
    """Parameters that are present on a request, keyed by wire name.

    ``None`` values are skipped, so optional request fields that are not set never
    appear on the wire. Adding a key twice keeps the last value.
    """

    __slots__ = ("_params",)

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def add(self, key: str, value: ParamValue | None) -> Self:
        if value is not None:
            self._params[key] = format_param_value(value)
        return self

    def pairs(self) -> list[tuple[str, str]]:
        """Return the ``(key, value)`` pairs sorted by key."""
        return sorted(self._params.items())

    def copy(self) -> "QueryParams":
        clone = QueryParams()
        clone._params = dict(self._params)
        return clone

    def __contains__(self, key: object) -> bool:
        return key in self._params

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParams):
            return NotImplemented
        return self._params == other._params

    def __repr__(self) -> str:
        return f"QueryParams({dict(self.pairs())!r})"


def canonical_query(pairs: Iterable[tuple[str, str]]) -> str:
    """URL-encode ``pairs`` in the given order. An empty set encodes to ``""``."""
    return urlencode(list(pairs))


def sign(secret_key: str, payload: str) -> str:
    """Return the hex HMAC-SHA256 of ``payload`` keyed by ``secret_key``."""
    return hmac.new(secret_key.encode(), payload.encode(), sha256).hexdigest()


def build_signed_request(
    params: QueryParams,
    secret_key: str | None,
    recv_window: int,
    timestamp: int | None = None,
) -> str:
    """Build the signed query string for a request.

    ``recvWindow`` and ``timestamp`` are added to a copy of ``params``, the full
    set is encoded with :func:`canonical_query` and signed, and the hex digest is
    appended as the final ``signature`` parameter.

    Args:
        params: The request parameters. Not modified.
        secret_key: The shared API secret used as HMAC key.
        recv_window: Milliseconds after ``timestamp`` for which the exchange
            accepts the request. Must be in ``1..60000``.
        timestamp: Epoch milliseconds to sign with. Defaults to the current time.

    Returns:
        str: The query string, e.g. ``recvWindow=5000&timestamp=...&signature=...``

    Raises:
        MissingCredentialsError: If ``secret_key`` is missing or empty.
        ValidationError: If ``recv_window`` is out of range.

    """
    if not secret_key:
        raise MissingCredentialsError("Secret key")
    if isinstance(recv_window, bool) or not 0 < recv_window <= MAX_RECV_WINDOW:
        raise ValidationError(
            f"recvWindow must be between 1 and {MAX_RECV_WINDOW} ms, got {recv_window}"
        )
    if timestamp is None:
        timestamp = current_timestamp_ms()

    signed = params.copy()
    signed.add(RECV_WINDOW_KEY, recv_window)
    signed.add(TIMESTAMP_KEY, timestamp)

    query = canonical_query(signed.pairs())
    signature = sign(secret_key, query)
    return f"{query}&{SIGNATURE_KEY}={signature}"
