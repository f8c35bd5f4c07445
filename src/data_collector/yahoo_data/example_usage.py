"""
Example usage of the Yahoo Finance ticker client

Fetches a month of daily history and the earnings/holders tables for one symbol.
"""

import asyncio

from src.data_collector.yahoo_data import Ticker, YahooDataError
from src.utils.logger import get_logger

logger = get_logger(__name__)


async def example_history(ticker: Ticker) -> None:
    """Example: daily bars for the last month"""
    print("\n=== History Example ===")
    frame = await ticker.history_frame(period="1mo", interval="1d")
    print(frame.tail())


async def example_fundamentals(ticker: Ticker) -> None:
    """Example: earnings and holders, fetched once and then served from cache"""
    print("\n=== Fundamentals Example ===")
    earnings = await ticker.get_earnings()
    print(earnings.tail())

    major_holders = await ticker.get_major_holders()
    print(major_holders if major_holders is not None else "No major holders table")


async def main() -> None:
    async with Ticker("TSM") as ticker:
        try:
            await example_history(ticker)
            await example_fundamentals(ticker)
        except YahooDataError as e:
            logger.error(f"Example failed: {e}")
            print(f"Error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
