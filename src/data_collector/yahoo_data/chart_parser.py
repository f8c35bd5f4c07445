import json
from typing import Any, Dict, Optional

import pandas as pd

from src.data_collector.yahoo_data.exceptions import ParseError
from src.utils.logger import get_logger


logger = get_logger(__name__)

PRICE_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]


def parse_chart_response(body: str) -> Any:
    """Parse the chart endpoint body. The payload is returned unchanged."""
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Chart response is not valid JSON: {e}") from e


def _event_series(events: Dict[str, Any], kind: str, value_of) -> pd.Series:
    entries = (events or {}).get(kind) or {}
    if not entries:
        return pd.Series(dtype="float64")
    dates = [entry["date"] for entry in entries.values()]
    values = [value_of(entry) for entry in entries.values()]
    series = pd.Series(values, index=pd.to_datetime(dates, unit="s", utc=True), dtype="float64")
    return series.groupby(level=0).sum()


def _split_ratio(entry: Dict[str, Any]) -> float:
    denominator = entry.get("denominator") or 1
    return float(entry.get("numerator") or 0) / float(denominator)


def chart_to_frame(
    payload: Dict[str, Any],
    actions: bool = True,
    auto_adjust: bool = True,
    back_adjust: bool = False,
    rounding: bool = False,
    tz: Optional[str] = None,
) -> pd.DataFrame:
    """
    Convert a chart payload into an OHLCV DataFrame indexed by bar time.

    Args:
        payload: Parsed chart endpoint response
        actions: Add Dividends and Stock Splits columns
        auto_adjust: Adjust all OHLC prices by the adjusted close ratio
        back_adjust: Adjust Open/High/Low only, keeping the traded Close
        rounding: Round prices to 2 decimals
        tz: Target timezone; defaults to the exchange timezone reported in meta

    Returns:
        DataFrame indexed by ``Date``

    Raises:
        ParseError: If the payload reports an error or carries no result
    """
    chart = (payload or {}).get("chart") or {}
    error = chart.get("error")
    if error:
        raise ParseError(f"Chart error {error.get('code')}: {error.get('description')}")
    results = chart.get("result") or []
    if not results:
        raise ParseError("Chart response has no result")
    result = results[0]

    timestamps = result.get("timestamp") or []
    indicators = result.get("indicators") or {}
    quote = (indicators.get("quote") or [{}])[0]
    index = pd.to_datetime(timestamps, unit="s", utc=True)
    index.name = "Date"

    frame = pd.DataFrame(
        {column: quote.get(column.lower()) or [None] * len(timestamps) for column in PRICE_COLUMNS},
        index=index,
        dtype="float64",
    )
    adjclose = (indicators.get("adjclose") or [{}])[0].get("adjclose")
    frame["Adj Close"] = adjclose if adjclose else frame["Close"]

    if auto_adjust or back_adjust:
        ratio = frame["Adj Close"] / frame["Close"]
        for column in ("Open", "High", "Low"):
            frame[column] = frame[column] * ratio
        if auto_adjust:
            frame["Close"] = frame["Adj Close"]
        frame = frame.drop(columns=["Adj Close"])

    if actions:
        events = result.get("events") or {}
        dividends = _event_series(events, "dividends", lambda entry: entry.get("amount") or 0.0)
        splits = _event_series(events, "splits", _split_ratio)
        frame["Dividends"] = dividends.reindex(frame.index).fillna(0.0).to_numpy()
        frame["Stock Splits"] = splits.reindex(frame.index).fillna(0.0).to_numpy()

    if rounding:
        frame = frame.round(2)

    target_tz = tz or (result.get("meta") or {}).get("exchangeTimezoneName")
    if target_tz:
        frame.index = frame.index.tz_convert(target_tz)

    logger.debug(f"Built price frame with {len(frame)} rows")
    return frame
