"""Tests for encoding requests into wire parameters."""

from binance_account.types import (
    OrderCancellation,
    OrderRequest,
    OrderResponseType,
    OrdersQuery,
    OrderSide,
    OrderStatusRequest,
    OrderType,
    SubAccountCreationRequest,
    SymbolFilter,
    TimeInForce,
)


def test_order_request_params():
    order = OrderRequest(
        symbol="BTCUSDT",
        side=OrderSide.BUY,
        order_type=OrderType.LIMIT,
        time_in_force=TimeInForce.FOK,
        quantity=10,
        price="0.0140",
        new_client_order_id="my-order",
        new_order_resp_type=OrderResponseType.FULL,
        recv_window=1000,
    )

    assert dict(order.to_params().pairs()) == {
        "symbol": "BTCUSDT",
        "side": "BUY",
        "type": "LIMIT",
        "timeInForce": "FOK",
        "quantity": "10",
        "price": "0.014",
        "newClientOrderId": "my-order",
        "newOrderRespType": "FULL",
    }


def test_market_order_omits_unset_fields():
    order = OrderRequest(
        symbol="BTCUSDT",
        side=OrderSide.SELL,
        order_type=OrderType.MARKET,
        quote_order_qty="100",
    )

    assert order.to_params().pairs() == [
        ("quoteOrderQty", "100"),
        ("side", "SELL"),
        ("symbol", "BTCUSDT"),
        ("type", "MARKET"),
    ]


def test_stop_and_iceberg_params():
    order = OrderRequest(
        symbol="BTCUSDT",
        side=OrderSide.SELL,
        order_type=OrderType.TAKE_PROFIT_LIMIT,
        time_in_force=TimeInForce.GTC,
        quantity="2",
        price="30000",
        stop_price="29999.50",
        iceberg_qty="0.5",
    )
    params = order.to_params()

    assert params["stopPrice"] == "29999.5"
    assert params["icebergQty"] == "0.5"


def test_cancellation_params():
    cancellation = OrderCancellation(
        symbol="LTCBTC",
        orig_client_order_id="myOrder1",
        new_client_order_id="cancelMyOrder1",
    )

    assert dict(cancellation.to_params().pairs()) == {
        "symbol": "LTCBTC",
        "origClientOrderId": "myOrder1",
        "newClientOrderId": "cancelMyOrder1",
    }


def test_order_status_params():
    query = OrderStatusRequest(symbol="LTCBTC", order_id=1)

    assert query.to_params().pairs() == [("orderId", "1"), ("symbol", "LTCBTC")]


def test_orders_query_params():
    query = OrdersQuery(
        symbol="BTCUSDT", order_id=5, start_time=1000, end_time=2000, limit=10
    )

    assert dict(query.to_params().pairs()) == {
        "symbol": "BTCUSDT",
        "orderId": "5",
        "startTime": "1000",
        "endTime": "2000",
        "limit": "10",
    }


def test_symbol_filter_params():
    assert len(SymbolFilter().to_params()) == 0
    assert SymbolFilter(symbol="BTCUSDT").to_params().pairs() == [
        ("symbol", "BTCUSDT")
    ]


def test_sub_account_params():
    request = SubAccountCreationRequest(sub_account_string="desk1")

    assert request.to_params().pairs() == [("subAccountString", "desk1")]


def test_recv_window_is_not_a_param():
    query = OrdersQuery(symbol="BTCUSDT", recv_window=1000)

    assert "recvWindow" not in query.to_params()
