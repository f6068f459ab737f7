"""Client-side validation of requests against exchange rules.

Every function here is a pure check that raises before any network call is made.
Order rules are kept in :data:`ORDER_RULES`; adding an exchange rule means adding
a function that returns a description of the violation, or None when the order
complies.
"""

from typing import Callable

from binance_account.errors import InvalidOrderError, ValidationError
from binance_account.types import (
    OrderCancellation,
    OrderRequest,
    OrdersQuery,
    OrderStatusRequest,
    TimeInForce,
)

MAX_ORDERS_QUERY_LIMIT: int = 1000

OrderRule = Callable[[OrderRequest], str | None]


def iceberg_requires_gtc(order: OrderRequest) -> str | None:
    if order.iceberg_qty is not None and order.time_in_force != TimeInForce.GTC:
        return "Time in force has to be GTC for iceberg orders"
    return None


ORDER_RULES: tuple[OrderRule, ...] = (iceberg_requires_gtc,)


def validate_order(order: OrderRequest) -> None:
    """Check an order request against every rule in :data:`ORDER_RULES`.

    Raises:
        InvalidOrderError: Naming the first rule the order violates.

    """
    for rule in ORDER_RULES:
        violation = rule(order)
        if violation is not None:
            raise InvalidOrderError(violation)


def validate_order_selector(request: OrderCancellation | OrderStatusRequest) -> None:
    """Check that a request identifies an order.

    Raises:
        ValidationError: If neither order_id nor orig_client_order_id is provided

    """
    if request.order_id is None and request.orig_client_order_id is None:
        raise ValidationError(
            "Either order_id or orig_client_order_id must be provided"
        )


def validate_orders_query(query: OrdersQuery) -> None:
    """Check the bounds of an all-orders query.

    Raises:
        ValidationError: If limit is outside 1..1000 or the time range is inverted

    """
    if query.limit is not None and not 0 < query.limit <= MAX_ORDERS_QUERY_LIMIT:
        raise ValidationError(
            f"limit must be between 1 and {MAX_ORDERS_QUERY_LIMIT}, got {query.limit}"
        )
    if (
        query.start_time is not None
        and query.end_time is not None
        and query.start_time > query.end_time
    ):
        raise ValidationError(
            f"start_time {query.start_time} is after end_time {query.end_time}"
        )
