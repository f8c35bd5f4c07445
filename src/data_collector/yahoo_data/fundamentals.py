"""
Per-ticker fundamentals: table builders and the memoizing cache

The cache moves Uninitialized -> Fetching -> Cached and never refreshes;
a ticker instance keeps the first successfully built record for its lifetime.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import pandas as pd

from src.data_collector.yahoo_data.data_models import (
    EARNINGS_COLUMNS,
    EarningsRow,
    FundamentalsRecord,
    HolderTable,
)
from src.data_collector.yahoo_data.quote_extractor import descend
from src.utils.logger import get_logger


logger = get_logger(__name__)

EARNINGS_TIMEFRAMES = ("yearly", "quarterly")


def build_earnings_frame(summary: Dict[str, Any], timeframe: str) -> pd.DataFrame:
    """
    Flatten ``earnings.financialsChart.<timeframe>`` into a date/earnings/revenue table.

    An empty summary (page without quote data) gives an empty table. A summary
    missing the path raises FieldAccessError.
    """
    if timeframe not in EARNINGS_TIMEFRAMES:
        raise ValueError(f"timeframe must be one of {EARNINGS_TIMEFRAMES}, got {timeframe!r}")
    if not summary:
        return pd.DataFrame(columns=EARNINGS_COLUMNS)

    path = ("earnings", "financialsChart", timeframe)
    entries = descend(summary, path) or []
    rows = [
        EarningsRow(
            date=descend(entry, ("date",)),
            earnings=descend(entry, ("earnings", "raw")),
            revenue=descend(entry, ("revenue", "raw")),
        )
        for entry in entries
    ]
    return pd.DataFrame([row.model_dump() for row in rows], columns=EARNINGS_COLUMNS)


def holders_frame(table: Optional[HolderTable]) -> Optional[pd.DataFrame]:
    """Table rows to a DataFrame; a missing table stays None, a bodyless one keeps its headers"""
    if table is None:
        return None
    if not table:
        return pd.DataFrame(columns=getattr(table, "columns", []))
    return pd.DataFrame(table)


class FundamentalsCache:
    """
    Memoizes one FundamentalsRecord per owner with single-flight loading.

    Concurrent callers during the first build await the same task; a failed
    build is reported to every waiter and leaves the cache uninitialized.
    """

    def __init__(self, loader: Callable[[], Awaitable[FundamentalsRecord]]) -> None:
        self._loader = loader
        self._record: Optional[FundamentalsRecord] = None
        self._pending: Optional[asyncio.Future] = None

    @property
    def record(self) -> Optional[FundamentalsRecord]:
        return self._record

    @property
    def is_loaded(self) -> bool:
        return self._record is not None

    def _discard_failed(self, task: asyncio.Future) -> None:
        # a cancelled or failed build returns the cache to uninitialized
        if self._pending is task and (task.cancelled() or task.exception() is not None):
            self._pending = None

    async def get(self) -> FundamentalsRecord:
        if self._record is not None:
            return self._record

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._loader())
            self._pending.add_done_callback(self._discard_failed)
        pending = self._pending

        try:
            # shield: a cancelled waiter must not cancel the shared build
            record = await asyncio.shield(pending)
        except BaseException:
            if self._pending is pending and pending.done():
                self._pending = None
            raise

        self._record = record
        self._pending = None
        return record
