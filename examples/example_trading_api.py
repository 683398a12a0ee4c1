"""
Trading API Example

This example demonstrates the signed Poloniex trading API commands.

Environment Variables Required (or a .env file):
- POLONIEX_API_KEY: Your API key
- POLONIEX_API_SECRET: Your API secret
- POLONIEX_API_URL: Optional API URL override
"""

import asyncio

from poloniex_api import (
    CurrencyPairRequest,
    OrderNumberRequest,
    OrderRequest,
    PoloniexApiClient,
    sign_message,
)
from poloniex_api.errors import ExchangeError
from poloniex_api.helpers import print_data


async def example_trading_api() -> None:
    """Demonstrate account and order commands."""

    print("=" * 70)
    print("Poloniex Trading API Example")
    print("=" * 70)

    async with PoloniexApiClient.from_env() as poloniex:
        if not poloniex.is_authenticated():
            print("[Setup] POLONIEX_API_KEY / POLONIEX_API_SECRET are not set")
            return

        # The signing scheme can be inspected without sending anything
        print("\n[Signing] Signature for a sample body:")
        print(f"  {sign_message({'command': 'returnBalances', 'nonce': 1}, 'secret')}")

        print("\n[Fetching] Balances...")
        balances = await poloniex.return_balances()
        non_zero = {k: v for k, v in balances.data.items() if float(v) > 0}
        print_data(non_zero)

        print("\n[Fetching] Fee info...")
        print_data((await poloniex.return_fee_info()).data)

        print("\n[Fetching] Open orders for BTC_ETH...")
        print_data(
            (await poloniex.return_open_orders(CurrencyPairRequest("BTC_ETH"))).data
        )

        # Place a post-only order far from the market, then cancel it
        print("\n[Trading] Placing a post-only buy order...")
        try:
            order = await poloniex.buy(
                OrderRequest("BTC_ETH", rate="0.00001", amount="1", postOnly=True)
            )
        except ExchangeError as e:
            print(f"  Order rejected: {e.message}")
            return

        order_number = order.data["orderNumber"]
        print(f"  Order placed: {order_number}")

        cancelled = await poloniex.cancel_order(OrderNumberRequest(order_number))
        print(f"  Cancelled: {cancelled.data}")

    print("\n" + "=" * 70)
    print("Example completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    asyncio.run(example_trading_api())
