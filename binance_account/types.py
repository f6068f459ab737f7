"""Type definitions for the Binance account SDK.

This module contains type definitions, enums, and dataclasses used throughout
the SDK, organized into logical sections for clarity.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, TypeAlias, overload

from binance_account.errors import ValidationError
from binance_account.signing import QueryParams

# ============================================================================
# TYPE ALIASES
# ============================================================================

OrderId: TypeAlias = int

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
# Account endpoints answer with either an object or a list of objects
Json: TypeAlias = JsonObject | JsonArray

NumericInput: TypeAlias = Decimal | str | float | int


# ============================================================================
# NUMERIC CONVERSION UTILITIES
# ============================================================================

DECIMAL_PATTERN = re.compile(r"^\d+(\.\d+)?$")


@overload
def numeric_to_decimal(n: NumericInput) -> Decimal: ...


@overload
def numeric_to_decimal(n: None) -> None: ...


def numeric_to_decimal(n: NumericInput | None) -> Decimal | None:
    """Convert various numeric input types to Decimal, or None if input is None."""
    if n is None:
        return n
    if isinstance(n, bool):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if isinstance(n, str):
        if not DECIMAL_PATTERN.match(n):
            raise ValidationError(f"Invalid numeric input {n}")
        return Decimal(n)
    if isinstance(n, (int, float)):
        n = Decimal(str(n))
    if not isinstance(n, Decimal):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    # same domain as DECIMAL_PATTERN: finite and not negative
    if not n.is_finite() or n < 0:
        raise ValidationError(f"Invalid numeric input {n}")
    return n


def _decimal_field(value: Any) -> Decimal | None:
    """Convert a numeric response field to Decimal, keeping None."""
    if value is None:
        return None
    return Decimal(str(value))


# ============================================================================
# CORE ENUMS
# ============================================================================


class OrderSide(Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(Enum):
    """Order type."""

    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"


class TimeInForce(Enum):
    """How long an order stays active before it expires."""

    GTC = "GTC"  # good till canceled
    IOC = "IOC"  # immediate or cancel
    FOK = "FOK"  # fill or kill


class OrderResponseType(Enum):
    """Verbosity of the order placement response."""

    ACK = "ACK"
    RESULT = "RESULT"
    FULL = "FULL"


class OrderStatus(Enum):
    """Order status."""

    NEW = "NEW"
    PENDING_NEW = "PENDING_NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    EXPIRED_IN_MATCH = "EXPIRED_IN_MATCH"


# ============================================================================
# REQUEST TYPES
# ============================================================================


class SignedRequest(Protocol):
    """A request that can be encoded and signed by the account client."""

    recv_window: int | None

    def to_params(self) -> QueryParams: ...


@dataclass
class SymbolFilter:
    """Parameters of account endpoints that take at most a symbol."""

    symbol: str | None = None
    recv_window: int | None = None

    def to_params(self) -> QueryParams:
        return QueryParams().add("symbol", self.symbol)


@dataclass
class OrderRequest:
    """Request to place a new order.

    Numeric fields accept Decimal, str, float or int and are stored as Decimal.

    Examples:
        .. code-block:: python

            limit_buy = OrderRequest(
                symbol="BTCUSDT",
                side=OrderSide.BUY,
                order_type=OrderType.LIMIT,
                time_in_force=TimeInForce.GTC,
                quantity="0.001",
                price="25000",
            )

    """

    symbol: str
    side: OrderSide
    order_type: OrderType
    time_in_force: TimeInForce | None = None
    quantity: NumericInput | None = None
    quote_order_qty: NumericInput | None = None
    price: NumericInput | None = None
    # A unique id for the order, generated by the exchange if not sent
    new_client_order_id: str | None = None
    # Used with stop loss and take profit order types
    stop_price: NumericInput | None = None
    # Used with limit, stop loss limit and take profit limit to create an iceberg order
    iceberg_qty: NumericInput | None = None
    # Market and limit orders default to FULL, others to ACK
    new_order_resp_type: OrderResponseType | None = None
    # Cannot be greater than 60000
    recv_window: int | None = None

    def __post_init__(self) -> None:
        self.quantity = numeric_to_decimal(self.quantity)
        self.quote_order_qty = numeric_to_decimal(self.quote_order_qty)
        self.price = numeric_to_decimal(self.price)
        self.stop_price = numeric_to_decimal(self.stop_price)
        self.iceberg_qty = numeric_to_decimal(self.iceberg_qty)

    def to_params(self) -> QueryParams:
        return (
            QueryParams()
            .add("symbol", self.symbol)
            .add("side", self.side)
            .add("type", self.order_type)
            .add("timeInForce", self.time_in_force)
            .add("quantity", self.quantity)
            .add("quoteOrderQty", self.quote_order_qty)
            .add("price", self.price)
            .add("newClientOrderId", self.new_client_order_id)
            .add("stopPrice", self.stop_price)
            .add("icebergQty", self.iceberg_qty)
            .add("newOrderRespType", self.new_order_resp_type)
        )


@dataclass
class OrderCancellation:
    """Request to cancel an active order.

    Either ``order_id`` (exchange side id) or ``orig_client_order_id`` (id given
    by the client at placement) must be set.
    """

    symbol: str
    order_id: OrderId | None = None
    orig_client_order_id: str | None = None
    # Uniquely identifies this cancel, generated by the exchange if not sent
    new_client_order_id: str | None = None
    recv_window: int | None = None

    def to_params(self) -> QueryParams:
        return (
            QueryParams()
            .add("symbol", self.symbol)
            .add("orderId", self.order_id)
            .add("origClientOrderId", self.orig_client_order_id)
            .add("newClientOrderId", self.new_client_order_id)
        )


@dataclass
class OrderStatusRequest:
    """Request for the status of a single order."""

    symbol: str
    order_id: OrderId | None = None
    orig_client_order_id: str | None = None
    recv_window: int | None = None

    def to_params(self) -> QueryParams:
        return (
            QueryParams()
            .add("symbol", self.symbol)
            .add("orderId", self.order_id)
            .add("origClientOrderId", self.orig_client_order_id)
        )


@dataclass
class OrdersQuery:
    """Query over all orders (active, canceled or filled) of a symbol."""

    symbol: str
    # Orders with id >= order_id, otherwise the most recent orders
    order_id: OrderId | None = None
    start_time: int | None = None
    end_time: int | None = None
    # Default 500, max 1000
    limit: int | None = None
    recv_window: int | None = None

    def to_params(self) -> QueryParams:
        return (
            QueryParams()
            .add("symbol", self.symbol)
            .add("orderId", self.order_id)
            .add("startTime", self.start_time)
            .add("endTime", self.end_time)
            .add("limit", self.limit)
        )


@dataclass
class SubAccountCreationRequest:
    """Request to create a virtual sub-account."""

    sub_account_string: str
    recv_window: int | None = None

    def to_params(self) -> QueryParams:
        return QueryParams().add("subAccountString", self.sub_account_string)


# ============================================================================
# ACCOUNT RESPONSE TYPES
# ============================================================================


@dataclass
class Balance:
    """Holdings of a single asset."""

    asset: str
    free: Decimal
    locked: Decimal

    def __init__(self, asset: str, free: str, locked: str):
        self.asset = asset
        self.free = Decimal(free)
        self.locked = Decimal(locked)


@dataclass
class AccountInformation:
    """Account commissions, permissions and balances."""

    makerCommission: int
    takerCommission: int
    buyerCommission: int
    sellerCommission: int
    canTrade: bool
    canWithdraw: bool
    canDeposit: bool
    updateTime: int
    accountType: str
    balances: list[Balance]
    permissions: list[str] = field(default_factory=list)


@dataclass
class SubAccountCreationResponse:
    """Response from creating a virtual sub-account."""

    email: str


# ============================================================================
# ORDER RESPONSE TYPES
# ============================================================================


@dataclass
class Order:
    """Represents an order on the exchange."""

    symbol: str
    orderId: int
    orderListId: int
    clientOrderId: str
    price: Decimal
    origQty: Decimal
    executedQty: Decimal
    cummulativeQuoteQty: Decimal
    status: OrderStatus
    timeInForce: TimeInForce
    type: OrderType
    side: OrderSide
    stopPrice: Decimal | None
    icebergQty: Decimal | None
    time: int | None
    updateTime: int | None
    isWorking: bool | None
    origQuoteOrderQty: Decimal | None

    def __init__(
        self,
        symbol: str,
        orderId: int,
        clientOrderId: str,
        price: str,
        origQty: str,
        executedQty: str,
        cummulativeQuoteQty: str,
        status: str,
        timeInForce: str,
        type: str,
        side: str,
        orderListId: int = -1,
        stopPrice: str | None = None,
        icebergQty: str | None = None,
        time: int | None = None,
        updateTime: int | None = None,
        isWorking: bool | None = None,
        origQuoteOrderQty: str | None = None,
    ):
        """Initialize an Order instance.

        Bulk cancellation answers with a reduced order shape, so the fields that
        are only present on order queries default to None.
        """
        self.symbol = symbol
        self.orderId = int(orderId)
        self.orderListId = int(orderListId)
        self.clientOrderId = clientOrderId
        self.price = Decimal(price)
        self.origQty = Decimal(origQty)
        self.executedQty = Decimal(executedQty)
        self.cummulativeQuoteQty = Decimal(cummulativeQuoteQty)
        self.status = OrderStatus(status)
        self.timeInForce = TimeInForce(timeInForce)
        self.type = OrderType(type)
        self.side = OrderSide(side)
        self.stopPrice = _decimal_field(stopPrice)
        self.icebergQty = _decimal_field(icebergQty)
        self.time = time
        self.updateTime = updateTime
        self.isWorking = isWorking
        self.origQuoteOrderQty = _decimal_field(origQuoteOrderQty)


@dataclass
class Fill:
    """Partial execution of a placed order."""

    price: Decimal
    qty: Decimal
    commission: Decimal
    commissionAsset: str
    tradeId: int | None

    def __init__(
        self,
        price: str,
        qty: str,
        commission: str,
        commissionAsset: str,
        tradeId: int | None = None,
    ):
        self.price = Decimal(price)
        self.qty = Decimal(qty)
        self.commission = Decimal(commission)
        self.commissionAsset = commissionAsset
        self.tradeId = tradeId


@dataclass
class Transaction:
    """Result of placing an order.

    An ``ACK`` response carries only the identifiers; ``RESULT`` adds the order
    state and ``FULL`` adds the fills.
    """

    symbol: str
    orderId: int
    orderListId: int
    clientOrderId: str
    transactTime: int
    price: Decimal | None
    origQty: Decimal | None
    executedQty: Decimal | None
    cummulativeQuoteQty: Decimal | None
    status: OrderStatus | None
    timeInForce: TimeInForce | None
    type: OrderType | None
    side: OrderSide | None
    fills: list[Fill]

    def __init__(
        self,
        symbol: str,
        orderId: int,
        clientOrderId: str,
        transactTime: int,
        orderListId: int = -1,
        price: str | None = None,
        origQty: str | None = None,
        executedQty: str | None = None,
        cummulativeQuoteQty: str | None = None,
        status: str | None = None,
        timeInForce: str | None = None,
        type: str | None = None,
        side: str | None = None,
        fills: list[Fill] | None = None,
    ):
        self.symbol = symbol
        self.orderId = int(orderId)
        self.orderListId = int(orderListId)
        self.clientOrderId = clientOrderId
        self.transactTime = transactTime
        self.price = _decimal_field(price)
        self.origQty = _decimal_field(origQty)
        self.executedQty = _decimal_field(executedQty)
        self.cummulativeQuoteQty = _decimal_field(cummulativeQuoteQty)
        self.status = OrderStatus(status) if status else None
        self.timeInForce = TimeInForce(timeInForce) if timeInForce else None
        self.type = OrderType(type) if type else None
        self.side = OrderSide(side) if side else None
        self.fills = fills if fills is not None else []


@dataclass
class OrderCanceled:
    """Response from canceling an order."""

    symbol: str
    origClientOrderId: str | None
    orderId: int | None
    orderListId: int | None
    clientOrderId: str | None
    price: Decimal | None
    origQty: Decimal | None
    executedQty: Decimal | None
    cummulativeQuoteQty: Decimal | None
    status: OrderStatus | None
    timeInForce: TimeInForce | None
    type: OrderType | None
    side: OrderSide | None

    def __init__(
        self,
        symbol: str,
        origClientOrderId: str | None = None,
        orderId: int | None = None,
        orderListId: int | None = None,
        clientOrderId: str | None = None,
        price: str | None = None,
        origQty: str | None = None,
        executedQty: str | None = None,
        cummulativeQuoteQty: str | None = None,
        status: str | None = None,
        timeInForce: str | None = None,
        type: str | None = None,
        side: str | None = None,
    ):
        self.symbol = symbol
        self.origClientOrderId = origClientOrderId
        self.orderId = int(orderId) if orderId is not None else None
        self.orderListId = orderListId
        self.clientOrderId = clientOrderId
        self.price = _decimal_field(price)
        self.origQty = _decimal_field(origQty)
        self.executedQty = _decimal_field(executedQty)
        self.cummulativeQuoteQty = _decimal_field(cummulativeQuoteQty)
        self.status = OrderStatus(status) if status else None
        self.timeInForce = TimeInForce(timeInForce) if timeInForce else None
        self.type = OrderType(type) if type else None
        self.side = OrderSide(side) if side else None


@dataclass
class TestResponse:
    """Response of the sandbox endpoints, which validate but never execute."""

    __test__ = False  # not a pytest test class


@dataclass
class TradeHistory:
    """A trade executed for the account."""

    id: int
    symbol: str
    orderId: int
    orderListId: int
    price: Decimal
    qty: Decimal
    quoteQty: Decimal
    commission: Decimal
    commissionAsset: str
    time: int
    isBuyer: bool
    isMaker: bool
    isBestMatch: bool

    def __init__(
        self,
        id: int,
        symbol: str,
        orderId: int,
        price: str,
        qty: str,
        quoteQty: str,
        commission: str,
        commissionAsset: str,
        time: int,
        isBuyer: bool,
        isMaker: bool,
        isBestMatch: bool,
        orderListId: int = -1,
    ):
        self.id = id
        self.symbol = symbol
        self.orderId = int(orderId)
        self.orderListId = int(orderListId)
        self.price = Decimal(price)
        self.qty = Decimal(qty)
        self.quoteQty = Decimal(quoteQty)
        self.commission = Decimal(commission)
        self.commissionAsset = commissionAsset
        self.time = time
        self.isBuyer = isBuyer
        self.isMaker = isMaker
        self.isBestMatch = isBestMatch
