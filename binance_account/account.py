"""Account and trading API client.

This module provides the :class:`Account` client for the signed account and
trading REST endpoints: account information and balances, order placement,
status and cancellation (live and sandbox), trade history and sub-account
creation.
"""

import logging
from types import TracebackType
from typing import Callable, Self, TypeVar

from binance_account.config import Config
from binance_account.errors import (
    AssetNotFoundError,
    BadGateway,
    BadHttpStatus,
    BadRequest,
    DecodeError,
    DeserializationError,
    Forbidden,
    GatewayTimeout,
    InternalServerError,
    IpBanned,
    MissingCredentialsError,
    NotFound,
    RateLimited,
    ServiceUnavailable,
    Unauthorized,
    ValidationError,
)
from binance_account.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from binance_account.executors.interface import HttpResponse
from binance_account.helpers import (
    decode_account_information,
    decode_list,
    decode_object,
    decode_transaction,
)
from binance_account.signing import (
    MAX_RECV_WINDOW,
    build_signed_request,
    current_timestamp_ms,
)
from binance_account.types import (
    AccountInformation,
    Balance,
    Json,
    Order,
    OrderCanceled,
    OrderCancellation,
    OrderRequest,
    OrdersQuery,
    OrderStatusRequest,
    SignedRequest,
    SubAccountCreationRequest,
    SubAccountCreationResponse,
    SymbolFilter,
    TestResponse,
    TradeHistory,
    Transaction,
)
from binance_account.validation import (
    validate_order,
    validate_order_selector,
    validate_orders_query,
)

log = logging.getLogger(__name__)

API_V3_ACCOUNT = "/api/v3/account"
API_V3_OPEN_ORDERS = "/api/v3/openOrders"
API_V3_ALL_ORDERS = "/api/v3/allOrders"
API_V3_MYTRADES = "/api/v3/myTrades"
API_V3_ORDER = "/api/v3/order"
# Orders sent here are validated by the exchange but never reach the matching engine
API_V3_ORDER_TEST = "/api/v3/order/test"
API_VIRTUAL_SUB_ACCOUNT = "/sapi/v1/sub-account/virtualSubAccount"

T = TypeVar("T")
R = TypeVar("R", bound=SignedRequest)


def raise_response_errors(response: HttpResponse) -> None:
    """Check HTTP response status and raise appropriate errors.

    Validates the response status code and raises pre-defined exceptions for non-2XX
    status codes with the exchange error code and message extracted from the body.

    Args:
        response: The HTTP response to validate

    Raises:
        BadRequest: For 400 status codes
        Unauthorized: For 401 status codes
        Forbidden: For 403 status codes
        NotFound: For 404 status codes
        IpBanned: For 418 status codes
        RateLimited: For 429 status codes
        BadHttpStatus: For other 4XX status codes
        InternalServerError: For 500 status codes
        BadGateway: For 502 status codes
        ServiceUnavailable: For 503 status codes
        GatewayTimeout: For 504 status codes

    """
    status = response.status

    # Success status codes (2xx)
    if 200 <= status < 300:
        return

    body = response.body if isinstance(response.body, dict) else {}

    # Exchange errors look like {"code": -1121, "msg": "Invalid symbol."}
    raw_code = body.get("code")
    msg = body.get("msg")
    code = raw_code if isinstance(raw_code, int) else None

    if code is not None and msg is not None:
        error_message = f"[{code}] {msg}"
    elif msg:
        error_message = str(msg)
    else:
        error_message = str(body) if body else "<no error message>"

    # 4xx Client Errors
    if status == 400:
        raise BadRequest(status, f"Bad request: {error_message}", code)

    if status == 401:
        raise Unauthorized(status, f"Unauthorized: {error_message}", code)

    if status == 403:
        raise Forbidden(status, f"Forbidden: {error_message}", code)

    if status == 404:
        raise NotFound(status, f"Not found: {error_message}", code)

    if status == 418:
        raise IpBanned(status, f"IP banned: {error_message}", code)

    if status == 429:
        raise RateLimited(status, f"Rate limit exceeded: {error_message}", code)

    # Other 4xx errors
    if 400 <= status < 500:
        raise BadHttpStatus(status, f"Client error ({status}): {error_message}", code)

    # 5xx Server Errors
    if status == 500:
        raise InternalServerError(
            status, f"Internal server error: {error_message}", code
        )

    if status == 502:
        raise BadGateway(status, f"Bad gateway: {error_message}", code)

    if status == 503:
        raise ServiceUnavailable(status, f"Service unavailable: {error_message}", code)

    if status == 504:
        raise GatewayTimeout(status, f"Gateway timeout: {error_message}", code)

    # Other 5xx errors
    if 500 <= status < 600:
        raise InternalServerError(
            status, f"Server error ({status}): {error_message}", code
        )

    # 3xx Redirects or other unexpected status codes
    raise BadHttpStatus(
        status, f"Unexpected status code ({status}): {error_message}", code
    )


class Account:
    """Signed account and trading API client.

    The client holds only immutable configuration, so a single instance can be
    shared by concurrent tasks. Each operation signs its request at call time and
    is never retried.

    Examples:
        .. code-block:: python

            import asyncio

            from binance_account import Account, Config
            from binance_account.env_setup import setup_environment

            async def main() -> None:
                config, api_key, secret_key = setup_environment()
                async with Account(api_key, secret_key, config=config) as account:
                    info = await account.get_account()
                    print(info.balances)

            asyncio.run(main())

    """

    _http_executor: HttpExecutor

    def __init__(
        self,
        api_key: str | None = None,
        secret_key: str | None = None,
        config: Config | None = None,
        executor: HttpExecutor | None = None,
        clock: Callable[[], int] | None = None,
    ):
        """Initialize the account client.

        Args:
            api_key: API key sent with every request (optional, required to send)
            secret_key: Secret used to sign requests (optional, required to send)
            config: Endpoint and default receive window (default: production)
            executor: Custom HTTP executor (optional, uses default if not provided)
            clock: Returns the epoch milliseconds to sign with (default: wall clock)

        Raises:
            ValidationError: If the configured receive window is out of range

        """
        config = config if config is not None else Config()
        if isinstance(config.recv_window, bool) or not (
            0 < config.recv_window <= MAX_RECV_WINDOW
        ):
            raise ValidationError(
                f"recv_window must be between 1 and {MAX_RECV_WINDOW} ms, "
                f"got {config.recv_window}"
            )
        self._config = config
        self._secret_key = secret_key
        self._clock = clock if clock is not None else current_timestamp_ms

        if executor is not None:
            if api_key is not None:
                executor.api_key = api_key
            self._http_executor = executor
        else:
            self._http_executor = DEFAULT_HTTP_EXECUTOR(
                api_url=config.rest_api_endpoint,
                api_key=api_key,
            )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def recv_window(self) -> int:
        """Default receive window in milliseconds for requests that set none."""
        return self._config.recv_window

    @property
    def api_key(self) -> str:
        """Get the API key.

        Raises:
            MissingCredentialsError: If api_key has not been set

        """
        if self._http_executor.api_key is None:
            raise MissingCredentialsError("API key")
        return self._http_executor.api_key

    async def close(self) -> None:
        """Release the connections held by the HTTP executor."""
        await self._http_executor.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    ############################################################################
    ## Account endpoints

    async def get_account(self) -> AccountInformation:
        """Get general account information.

        Returns:
            AccountInformation: Commissions, trading permissions and balances

        Raises:
            DecodeError: If the API response cannot be parsed

        Example:
            .. code-block:: python

                info = await account.get_account()
                print(info.canTrade)

        Endpoint:
            GET /api/v3/account

        """
        return await self._send(
            "get_account",
            "GET",
            API_V3_ACCOUNT,
            SymbolFilter(),
            decode_account_information,
        )

    async def get_balance(self, asset: str) -> Balance:
        """Get the balance of a single asset.

        Fetches the account information and picks the entry for ``asset``.

        Args:
            asset: The asset symbol (e.g., "BTC")

        Returns:
            Balance: Free and locked amounts of the asset

        Raises:
            AssetNotFoundError: If the account has no entry for the asset. This is
                a local lookup miss, the exchange call itself succeeded.

        Endpoint:
            GET /api/v3/account

        """
        account = await self.get_account()
        for balance in account.balances:
            if balance.asset == asset:
                return balance
        raise AssetNotFoundError(asset)

    async def trade_history(self, symbol: str) -> list[TradeHistory]:
        """Get the account's trades for a symbol.

        Endpoint:
            GET /api/v3/myTrades

        """
        return await self._send(
            "trade_history",
            "GET",
            API_V3_MYTRADES,
            SymbolFilter(symbol=symbol),
            decode_list(TradeHistory),
        )

    async def create_sub_account(self, label: str) -> SubAccountCreationResponse:
        """Create a virtual sub-account.

        Args:
            label: String used to build the sub-account's virtual email

        Returns:
            SubAccountCreationResponse: The email of the new sub-account

        Endpoint:
            POST /sapi/v1/sub-account/virtualSubAccount

        """
        return await self._send(
            "create_sub_account",
            "POST",
            API_VIRTUAL_SUB_ACCOUNT,
            SubAccountCreationRequest(sub_account_string=label),
            decode_object(SubAccountCreationResponse),
        )

    ############################################################################
    ## Order queries

    async def get_open_orders(self, symbol: str) -> list[Order]:
        """Get all currently open orders for a single symbol.

        Endpoint:
            GET /api/v3/openOrders

        """
        return await self._send(
            "get_open_orders",
            "GET",
            API_V3_OPEN_ORDERS,
            SymbolFilter(symbol=symbol),
            decode_list(Order),
        )

    async def get_all_open_orders(self) -> list[Order]:
        """Get all currently open orders across every symbol.

        Endpoint:
            GET /api/v3/openOrders

        """
        return await self._send(
            "get_all_open_orders",
            "GET",
            API_V3_OPEN_ORDERS,
            SymbolFilter(),
            decode_list(Order),
        )

    async def get_all_orders(self, query: OrdersQuery) -> list[Order]:
        """Get all account orders of a symbol: active, canceled or filled.

        Args:
            query: Symbol and optional order id, time range and limit filters

        Returns:
            list[Order]: The matching orders

        Raises:
            ValidationError: If the limit or time range of the query is invalid

        Example:
            .. code-block:: python

                orders = await account.get_all_orders(
                    OrdersQuery(symbol="BTCUSDT", limit=10)
                )

        Endpoint:
            GET /api/v3/allOrders

        """
        return await self._send(
            "get_all_orders",
            "GET",
            API_V3_ALL_ORDERS,
            query,
            decode_list(Order),
            validator=validate_orders_query,
        )

    async def order_status(self, query: OrderStatusRequest) -> Order:
        """Check an order's status.

        Args:
            query: Symbol and either order_id or orig_client_order_id

        Returns:
            Order: The order

        Raises:
            ValidationError: If the query names no order

        Endpoint:
            GET /api/v3/order

        """
        return await self._order_status(
            "order_status", API_V3_ORDER, query, decode_object(Order)
        )

    async def test_order_status(self, query: OrderStatusRequest) -> TestResponse:
        """Check an order's status against the sandbox endpoint.

        Built and validated exactly like :meth:`order_status`.

        Endpoint:
            GET /api/v3/order/test

        """
        return await self._order_status(
            "test_order_status", API_V3_ORDER_TEST, query, decode_object(TestResponse)
        )

    ############################################################################
    ## Order placement and cancellation

    async def place_order(self, order: OrderRequest) -> Transaction:
        """Place an order.

        The order is validated against the exchange rules before anything is
        sent; an invalid order never reaches the network.

        Args:
            order: The order to place

        Returns:
            Transaction: The placement result, with detail depending on
                ``order.new_order_resp_type``

        Raises:
            InvalidOrderError: If the order violates an exchange rule
            DecodeError: If the API response cannot be parsed

        Example:
            .. code-block:: python

                limit_buy = OrderRequest(
                    symbol="BTCUSDT",
                    side=OrderSide.BUY,
                    order_type=OrderType.LIMIT,
                    time_in_force=TimeInForce.FOK,
                    quantity=10,
                    price="0.014",
                )
                transaction = await account.place_order(limit_buy)

        Endpoint:
            POST /api/v3/order

        """
        return await self._submit_order(
            "place_order", API_V3_ORDER, order, decode_transaction
        )

    async def place_test_order(self, order: OrderRequest) -> TestResponse:
        """Place a test order.

        Despite being a test, the order goes through the same validation and
        encoding as :meth:`place_order`. The exchange validates it but does not
        send it to the matching engine.

        Raises:
            InvalidOrderError: If the order violates an exchange rule

        Endpoint:
            POST /api/v3/order/test

        """
        return await self._submit_order(
            "place_test_order",
            API_V3_ORDER_TEST,
            order,
            decode_object(TestResponse),
        )

    async def cancel_order(self, cancellation: OrderCancellation) -> OrderCanceled:
        """Cancel an active order.

        Args:
            cancellation: Symbol and either order_id or orig_client_order_id

        Returns:
            OrderCanceled: The canceled order

        Raises:
            ValidationError: If the cancellation names no order

        Example:
            .. code-block:: python

                await account.cancel_order(
                    OrderCancellation(symbol="BTCUSDT", order_id=28)
                )

        Endpoint:
            DELETE /api/v3/order

        """
        return await self._cancel(
            "cancel_order", API_V3_ORDER, cancellation, decode_object(OrderCanceled)
        )

    async def test_cancel_order(self, cancellation: OrderCancellation) -> TestResponse:
        """Cancel an order against the sandbox endpoint.

        Endpoint:
            DELETE /api/v3/order/test

        """
        return await self._cancel(
            "test_cancel_order",
            API_V3_ORDER_TEST,
            cancellation,
            decode_object(TestResponse),
        )

    async def cancel_all_open_orders(self, symbol: str) -> list[Order]:
        """Cancel all open orders of a symbol.

        Endpoint:
            DELETE /api/v3/openOrders

        """
        return await self._send(
            "cancel_all_open_orders",
            "DELETE",
            API_V3_OPEN_ORDERS,
            SymbolFilter(symbol=symbol),
            decode_list(Order),
        )

    """ Shared request paths of live and sandbox endpoints """

    async def _submit_order(
        self,
        operation: str,
        path: str,
        order: OrderRequest,
        decode: Callable[[Json], T],
    ) -> T:
        return await self._send(
            operation, "POST", path, order, decode, validator=validate_order
        )

    async def _cancel(
        self,
        operation: str,
        path: str,
        cancellation: OrderCancellation,
        decode: Callable[[Json], T],
    ) -> T:
        return await self._send(
            operation,
            "DELETE",
            path,
            cancellation,
            decode,
            validator=validate_order_selector,
        )

    async def _order_status(
        self,
        operation: str,
        path: str,
        query: OrderStatusRequest,
        decode: Callable[[Json], T],
    ) -> T:
        return await self._send(
            operation, "GET", path, query, decode, validator=validate_order_selector
        )

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        request: R,
        decode: Callable[[Json], T],
        validator: Callable[[R], None] | None = None,
    ) -> T:
        """Validate, encode, sign, send and decode a single request.

        Args:
            operation: Name of the calling operation, used in logs and errors
            method: HTTP method
            path: The API endpoint path
            request: The request to encode
            decode: Builds the response type from the JSON body
            validator: Optional check run before anything else

        Returns:
            T: The decoded response

        Raises:
            ValidationError: If the validator or the signer rejects the request
            MissingCredentialsError: If the secret or API key is missing
            TransportError: If the HTTP exchange could not be completed
            ExchangeError: If the exchange answered with an error status
            DecodeError: If a successful body is not JSON or does not match the
                response type

        """
        if validator is not None:
            validator(request)

        params = request.to_params()
        recv_window = (
            request.recv_window
            if request.recv_window is not None
            else self._config.recv_window
        )
        signed_query = build_signed_request(
            params, self._secret_key, recv_window, timestamp=self._clock()
        )

        log.debug("%s: %s %s (%d params)", operation, method, path, len(params))
        try:
            response = await self._http_executor.send_signed_request(
                method, path, signed_query
            )
        except DeserializationError as e:
            raise DecodeError(e.message, operation, e.status) from e
        raise_response_errors(response)

        try:
            return decode(response.body)
        except (TypeError, KeyError, ValueError, ArithmeticError) as e:
            raise DecodeError(
                f"Received invalid response {response.body!r}",
                operation,
                response.status,
            ) from e
