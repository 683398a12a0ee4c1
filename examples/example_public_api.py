"""
Public API Example

This example demonstrates how to use the Poloniex public API commands.
No authentication is required for these commands - they provide market data
available to everyone.

Commands covered:
- Ticker
- 24h volume
- Order book
- Recent trades
- Candlestick data (chart data)
- Currencies
"""

import asyncio
import time

from poloniex_api import (
    ChartDataRequest,
    ChartPeriod,
    OrderBookRequest,
    PublicTradeHistoryRequest,
    get_client,
    get_version,
)
from poloniex_api.helpers import print_data


async def example_public_api() -> None:
    """Demonstrate the public API commands without authentication."""

    print("=" * 70)
    print("Poloniex Public API Example")
    print("=" * 70)

    print(f"\n[Info] poloniex-api version: {get_version()}\n")

    async with get_client() as poloniex:
        # ==================================================================
        # TICKER
        # ==================================================================
        print("\n[Fetching] Ticker for all markets...")
        ticker = await poloniex.return_ticker()
        btc_eth = ticker.data["BTC_ETH"]
        print(f"  BTC_ETH last: {btc_eth['last']}")
        print(f"  Lowest ask:   {btc_eth['lowestAsk']}")
        print(f"  Highest bid:  {btc_eth['highestBid']}")

        print("\n[Fetching] 24h volume...")
        volume = await poloniex.return_24h_volume()
        print(f"  Markets reported: {len(volume.data)}")

        # ==================================================================
        # ORDER BOOK
        # ==================================================================
        print("\n[Fetching] Order book for BTC_ETH (depth=5)...")
        book = await poloniex.return_order_book(OrderBookRequest("BTC_ETH", depth=5))
        print(f"  Best ask: {book.data['asks'][0]}")
        print(f"  Best bid: {book.data['bids'][0]}")

        # ==================================================================
        # TRADES AND CANDLES
        # ==================================================================
        now = int(time.time())
        print("\n[Fetching] Trades for BTC_ETH in the last hour...")
        trades = await poloniex.return_public_trade_history(
            PublicTradeHistoryRequest("BTC_ETH", start=now - 3600, end=now)
        )
        print(f"  Found {len(trades.data)} trades")

        print("\n[Fetching] 4h candles for BTC_ETH over the last day...")
        candles = await poloniex.return_chart_data(
            ChartDataRequest(
                "BTC_ETH", ChartPeriod.FOUR_HOURS, start=now - 86400, end=now
            )
        )
        print_data(candles.data[-1])

        print("\n[Fetching] Currencies...")
        currencies = await poloniex.return_currencies()
        print(f"  {len(currencies.data)} currencies listed")

    print("\n" + "=" * 70)
    print("Example completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    """
    Run the public API example.

    Usage:
        python example_public_api.py
    """
    asyncio.run(example_public_api())
