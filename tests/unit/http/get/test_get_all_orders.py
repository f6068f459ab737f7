import pytest

from binance_account.errors import ValidationError
from binance_account.types import OrdersQuery
from tests.unit.conftest import load_json


@pytest.mark.asyncio
async def test_get_all_orders(mock_http_client):
    client, mock_http = mock_http_client
    payload = load_json("response.open_orders", 3)

    mock_http.stage_json(
        payload,
        call_validation=lambda call: call.function_name == "send_signed_request"
        and call.arg_pack[0:2] == ("GET", "/api/v3/allOrders"),
    )

    orders = await client.get_all_orders(
        OrdersQuery(symbol="BTCUSDT", start_time=1699999999000, limit=10)
    )

    assert [order.orderId for order in orders] == [28, 29]
    assert orders[1].stopPrice is not None
    params = mock_http.call_log[0].params
    assert params["symbol"] == "BTCUSDT"
    assert params["startTime"] == "1699999999000"
    assert params["limit"] == "10"
    assert "endTime" not in params
    assert "orderId" not in params


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "query",
    [
        OrdersQuery(symbol="BTCUSDT", limit=0),
        OrdersQuery(symbol="BTCUSDT", limit=1001),
        OrdersQuery(symbol="BTCUSDT", start_time=10, end_time=5),
    ],
)
async def test_get_all_orders_invalid_query_is_not_sent(mock_http_client, query):
    client, mock_http = mock_http_client

    with pytest.raises(ValidationError):
        await client.get_all_orders(query)

    assert len(mock_http.call_log) == 0
