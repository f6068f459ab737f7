from decimal import Decimal

import pytest

from binance_account.errors import DeserializationError
from binance_account.helpers import (
    create_with,
    decode_list,
    decode_transaction,
    deserialize_response,
    get_user_agent,
    print_data,
)
from binance_account.types import Balance, Order
from tests.unit.conftest import load_json


def test_create_with_ignores_unknown_fields():
    balance = create_with(
        Balance, {"asset": "BTC", "free": "1.5", "locked": "0", "extra": 1}
    )

    assert balance == Balance(asset="BTC", free="1.5", locked="0")


def test_create_with_requires_an_object():
    with pytest.raises(TypeError):
        create_with(Balance, [{"asset": "BTC"}])  # type: ignore


def test_decode_list_requires_an_array():
    with pytest.raises(TypeError):
        decode_list(Order)({"symbol": "BTCUSDT"})


def test_decode_transaction_with_fills():
    transaction = decode_transaction(load_json("response.transaction", 3))

    assert [fill.tradeId for fill in transaction.fills] == [56, 57, 58]
    assert sum(fill.qty for fill in transaction.fills) == Decimal("8")


def test_deserialize_response():
    assert deserialize_response(b'{"a": [1, 2]}', "/x") == {"a": [1, 2]}

    with pytest.raises(DeserializationError) as exc_info:
        deserialize_response(b"not json", "/api/v3/account")

    assert "/api/v3/account" in str(exc_info.value)
    assert exc_info.value.status == 200


@pytest.mark.parametrize(
    "status, content, expected",
    [
        (403, b"<html>Forbidden</html>", {"msg": "<html>Forbidden</html>"}),
        (502, b"\n", {}),
        (418, b'{"code": -1003, "msg": "banned"}', {"code": -1003, "msg": "banned"}),
    ],
)
def test_deserialize_error_response(status, content, expected):
    assert deserialize_response(content, "/api/v3/account", status) == expected


def test_user_agent():
    assert get_user_agent().startswith("BinanceAccountPythonSDK/")


def test_print_data(capsys):
    print_data(Balance(asset="BTC", free="1", locked="0"))
    print_data([1, 2])

    out = capsys.readouterr().out
    assert "BTC" in out
