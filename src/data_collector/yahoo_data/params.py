"""
History request parameter normalization

Turns the user-facing ``period``/``interval``/``start``/``end`` arguments of
``Ticker.history`` into the query sent to the chart endpoint. Pure, no I/O.

Date strings are read the way the chart endpoint has always been fed by this
client: ``YYYY-MM-DD`` with the month number used as a zero-based month
index, and the ``end`` string converted to milliseconds rather than seconds.
Both quirks are kept on purpose; the provider output is what defines
correctness here.
"""

import time
from datetime import date, datetime, timedelta
from typing import Optional, Union

from src.data_collector.yahoo_data.data_models import TimeRangeQuery
from src.data_collector.yahoo_data.exceptions import InvalidParameterError

DateInput = Union[str, int, float, date, datetime, None]

# 1900-01-01T00:00:00Z
EPOCH_1900 = -2208988800

VALID_PERIODS = ("1d", "5d", "1mo", "3mo", "6mo", "1y", "2y", "5y", "10y", "ytd", "max")
VALID_INTERVALS = (
    "1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h", "1d", "5d", "1wk", "1mo", "3mo",
)
INTERVAL_REWRITES = {"30m": "15m"}
EVENTS = "div,splits"


def _local_datetime(year: int, month_index: int, day: int) -> datetime:
    """Build a local datetime, rolling overflowing months and days forward"""
    years, month0 = divmod(year * 12 + month_index, 12)
    return datetime(years, month0 + 1, 1) + timedelta(days=day - 1)


def _to_seconds(value: Union[date, datetime]) -> int:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return round(value.timestamp())


def _parse_date_string(value: str) -> Optional[datetime]:
    parts = value.split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
        return _local_datetime(year, month, day)
    except (ValueError, OverflowError):
        return None


def _resolve_start(start: DateInput) -> int:
    if not start:
        return EPOCH_1900
    if isinstance(start, (date, datetime)):
        return _to_seconds(start)
    if isinstance(start, (int, float)):
        return round(start)
    parsed = _parse_date_string(str(start))
    if parsed is None:
        return EPOCH_1900
    return round(parsed.timestamp())


def _resolve_end(end: DateInput, now: float) -> int:
    if not end:
        return round(now)
    if isinstance(end, (date, datetime)):
        return _to_seconds(end)
    if isinstance(end, (int, float)):
        return round(end)
    parsed = _parse_date_string(str(end))
    if parsed is None:
        return round(now)
    # milliseconds, not seconds
    return round(parsed.timestamp() * 1000)


def _validate_interval(interval: str) -> str:
    value = (interval or "").lower()
    if value not in VALID_INTERVALS:
        raise InvalidParameterError(f"interval [{interval}] is not valid")
    return INTERVAL_REWRITES.get(value, value)


def normalize_history_params(
    period: Optional[str] = "1mo",
    interval: str = "1d",
    start: DateInput = None,
    end: DateInput = None,
    prepost: bool = False,
    now: Optional[float] = None,
) -> TimeRangeQuery:
    """
    Build the chart query for a history request.

    Args:
        period: One of 1d,5d,1mo,3mo,6mo,1y,2y,5y,10y,ytd,max. Ignored when
            ``start`` is given; empty or ``max`` requests an explicit range.
        interval: One of 1m,2m,5m,15m,30m,60m,90m,1h,1d,5d,1wk,1mo,3mo.
        start: Start date (``YYYY-MM-DD`` string, date, datetime, or Unix seconds
            as an int or float, rounded to whole seconds).
            Defaults to 1900-01-01.
        end: End date, same forms as ``start``. Defaults to now.
        prepost: Include pre and post market data.
        now: Current time in seconds since epoch; defaults to ``time.time()``.

    Returns:
        TimeRangeQuery with either ``range`` or ``period1``/``period2`` set.

    Raises:
        InvalidParameterError: If ``period`` or ``interval`` is not accepted.
    """
    if start or not period or period.lower() == "max":
        current = time.time() if now is None else now
        range_fields = {
            "period1": _resolve_start(start),
            "period2": _resolve_end(end, current),
        }
    else:
        if period.lower() not in VALID_PERIODS:
            raise InvalidParameterError(f"period [{period}] is not valid")
        range_fields = {"range": period.lower()}

    return TimeRangeQuery(
        **range_fields,
        interval=_validate_interval(interval),
        include_pre_post=bool(prepost),
        events=EVENTS,
    )
