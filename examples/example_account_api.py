"""
Account API Example

This example demonstrates the signed account and trading endpoints. Orders are
only sent to the sandbox endpoints, which validate an order exactly like the
live ones but never pass it to the matching engine.

Account Information:
- Get account info (commissions, permissions, balances)
- Get the balance of a single asset
- Get trade history

Orders:
- List open orders and order history
- Place and cancel sandbox orders
- Check an order's status against the sandbox

Environment Variables Required:
- ENVIRONMENT: "production" (default) or "testnet"
- BINANCE_API_KEY_<ENVIRONMENT>: Your API key
- BINANCE_SECRET_KEY_<ENVIRONMENT>: Your secret key for signing
- BINANCE_API_ENDPOINT_<ENVIRONMENT>: Optional endpoint override
- BINANCE_RECV_WINDOW_<ENVIRONMENT>: Optional receive window in milliseconds
"""

import asyncio
import logging

from binance_account import (
    Account,
    AssetNotFoundError,
    OrderCancellation,
    OrderRequest,
    OrdersQuery,
    OrderSide,
    OrderStatusRequest,
    OrderType,
    TimeInForce,
    get_version,
    print_data,
)
from binance_account.env_setup import setup_environment

SYMBOL = "BTCUSDT"


async def example_account_api() -> None:
    """Demonstrate the account endpoints and the order sandbox."""

    print("=" * 70)
    print(f"Binance Account API Example (SDK {get_version()})")
    print("=" * 70)

    print("\n[Setup] Loading credentials from environment...")
    config, api_key, secret_key = setup_environment()
    print(f"[Setup] API Endpoint: {config.rest_api_endpoint}")
    print(f"[Setup] Receive window: {config.recv_window} ms\n")

    async with Account(api_key, secret_key, config=config) as account:
        # ==============================================================
        # PART 1: ACCOUNT INFORMATION
        # ==============================================================
        print("=" * 70)
        print("1. ACCOUNT INFORMATION")
        print("=" * 70)

        info = await account.get_account()
        print(f"\n[Account] Can trade: {info.canTrade}")
        print("[Account] Non-zero balances:")
        for balance in info.balances:
            if balance.free or balance.locked:
                print(f"  {balance.asset}: {balance.free} free, {balance.locked} held")

        try:
            print_data(await account.get_balance("BTC"))
        except AssetNotFoundError as e:
            print(f"[Account] {e}")

        trades = await account.trade_history(SYMBOL)
        print(f"\n[Trades] {len(trades)} trades on {SYMBOL}")

        # ==============================================================
        # PART 2: ORDER QUERIES
        # ==============================================================
        print("\n" + "=" * 70)
        print("2. ORDER QUERIES")
        print("=" * 70)

        open_orders = await account.get_all_open_orders()
        print(f"\n[Orders] {len(open_orders)} open orders across all symbols")

        history = await account.get_all_orders(OrdersQuery(symbol=SYMBOL, limit=5))
        print(f"[Orders] Last {len(history)} orders on {SYMBOL}:")
        for order in history:
            print_data(order)

        # ==============================================================
        # PART 3: SANDBOX ORDERS
        # ==============================================================
        print("\n" + "=" * 70)
        print("3. SANDBOX ORDERS")
        print("=" * 70)

        limit_buy = OrderRequest(
            symbol=SYMBOL,
            side=OrderSide.BUY,
            order_type=OrderType.LIMIT,
            time_in_force=TimeInForce.GTC,
            quantity="0.001",
            price="10000",
            new_client_order_id="example-order",
        )
        print_data(await account.place_test_order(limit_buy))
        print_data(
            await account.test_order_status(
                OrderStatusRequest(symbol=SYMBOL, orig_client_order_id="example-order")
            )
        )
        print_data(
            await account.test_cancel_order(
                OrderCancellation(symbol=SYMBOL, orig_client_order_id="example-order")
            )
        )
        print("\n[Sandbox] Order validated, nothing was executed")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(example_account_api())
