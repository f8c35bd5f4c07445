"""
Yahoo Finance ticker client

Serves historical chart data and lazily built fundamentals (earnings and
holders tables) for a single symbol.
"""

import json
from typing import Any, Dict, Optional

import pandas as pd

from src.data_collector.yahoo_data.chart_parser import chart_to_frame, parse_chart_response
from src.data_collector.yahoo_data.config import YahooDataConfig, yahoo_data_config
from src.data_collector.yahoo_data.data_models import FundamentalsRecord, HolderTables
from src.data_collector.yahoo_data.exceptions import (
    InvalidParameterError,
    RequestError,
    TransportError,
)
from src.data_collector.yahoo_data.fundamentals import (
    FundamentalsCache,
    build_earnings_frame,
    holders_frame,
)
from src.data_collector.yahoo_data.holders_scraper import scrape_holders
from src.data_collector.yahoo_data.params import DateInput, normalize_history_params
from src.data_collector.yahoo_data.quote_extractor import extract_quote_summary
from src.data_collector.yahoo_data.session import ProxyConfig, SessionManager
from src.utils.logger import get_logger

logger = get_logger(__name__)


def request_error_from(error: TransportError) -> RequestError:
    """Wrap a transport failure, preferring the provider's JSON error envelope when present"""
    message, code = error.message, ""
    try:
        data = json.loads(error.body or "")
    except ValueError:
        data = None

    if isinstance(data, dict):
        # envelopes look like {"chart": {"result": null, "error": {"code": ..., "description": ...}}}
        for section in data.values():
            envelope = section.get("error") if isinstance(section, dict) else None
            if isinstance(envelope, dict):
                message = envelope.get("description") or message
                code = envelope.get("code") or ""
                break

    return RequestError(message, error.status_code, code)


class Ticker:
    """Market data for one symbol"""

    def __init__(
        self,
        symbol: str,
        proxy: ProxyConfig = None,
        config: Optional[YahooDataConfig] = None,
        session_manager: Optional[SessionManager] = None,
    ) -> None:
        """
        Args:
            symbol: Ticker symbol, e.g. "TSM"
            proxy: Proxy URL or {"https": url} mapping forwarded to the transport
            config: Endpoint/HTTP configuration (defaults to yahoo_data_config)
            session_manager: Transport to use instead of a new SessionManager
        """
        self._symbol = symbol
        self.proxy = proxy
        self.config = config or yahoo_data_config
        self.session_manager = session_manager or SessionManager(proxy, self.config)
        self._fundamentals = FundamentalsCache(self._build_fundamentals)

    @property
    def symbol(self) -> str:
        return self._symbol

    def __repr__(self) -> str:
        return f"Ticker(symbol={self._symbol!r})"

    async def __aenter__(self) -> "Ticker":
        await self.session_manager.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.session_manager.__aexit__(exc_type, exc, tb)

    async def _fetch(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        try:
            return await self.session_manager.get(url, params)
        except TransportError as e:
            raise request_error_from(e) from e

    async def history(
        self,
        period: Optional[str] = "1mo",
        interval: str = "1d",
        start: DateInput = None,
        end: DateInput = None,
        prepost: bool = False,
        actions: bool = True,
        auto_adjust: bool = True,
        back_adjust: bool = False,
        rounding: bool = False,
        tz: Optional[str] = None,
    ) -> Any:
        """
        Get historical chart data as returned by Yahoo.

        Args:
            period: 1d,5d,1mo,3mo,6mo,1y,2y,5y,10y,ytd,max. Use either period or start/end
            interval: 1m,2m,5m,15m,30m,60m,90m,1h,1d,5d,1wk,1mo,3mo.
                Intraday data cannot extend past the last 60 days
            start: Start date string (YYYY-MM-DD), date or datetime. Default is 1900-01-01
            end: End date string (YYYY-MM-DD), date or datetime. Default is now
            prepost: Include pre and post market data
            actions, auto_adjust, back_adjust, rounding, tz: Frame options; the raw
                payload is returned unchanged, see `history_frame`

        Returns:
            Parsed chart JSON

        Raises:
            InvalidParameterError: Before any request, for a bad period or interval
            RequestError: If the request fails
            ParseError: If the body is not JSON
        """
        query = normalize_history_params(period, interval, start, end, prepost)
        url = self.config.get_history_url(self._symbol)
        logger.info(f"Fetching history for {self._symbol}")
        logger.debug(f"{url} {query.to_params()}")

        body = await self._fetch(url, query.to_params())
        return parse_chart_response(body)

    async def history_frame(
        self,
        period: Optional[str] = "1mo",
        interval: str = "1d",
        start: DateInput = None,
        end: DateInput = None,
        prepost: bool = False,
        actions: bool = True,
        auto_adjust: bool = True,
        back_adjust: bool = False,
        rounding: bool = False,
        tz: Optional[str] = None,
    ) -> pd.DataFrame:
        """Same as `history`, returned as an OHLCV DataFrame with the frame options applied"""
        payload = await self.history(period, interval, start, end, prepost)
        return chart_to_frame(payload, actions, auto_adjust, back_adjust, rounding, tz)

    # Fundamentals

    async def _fetch_holders(self) -> HolderTables:
        url = self.config.get_holders_url(self._symbol)
        try:
            return scrape_holders(await self._fetch(url))
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Holders unavailable for {self._symbol}: {e}")
            return HolderTables()

    async def _build_fundamentals(self) -> FundamentalsRecord:
        logger.info(f"Fetching fundamentals for {self._symbol}")
        page = await self._fetch(self.config.get_quote_summary_url(self._symbol))
        summary = extract_quote_summary(page)

        holders = await self._fetch_holders()

        return FundamentalsRecord(
            earnings=build_earnings_frame(summary, "yearly"),
            quarterly_earnings=build_earnings_frame(summary, "quarterly"),
            major_holders=holders_frame(holders.major_holders),
            institutional_holders=holders_frame(holders.institutional_holders),
            mutualfund_holders=holders_frame(holders.mutualfund_holders),
        )

    @property
    def fundamentals(self) -> Optional[FundamentalsRecord]:
        """The cached fundamentals record, or None before `load_fundamentals` has completed"""
        return self._fundamentals.record

    async def load_fundamentals(self) -> FundamentalsRecord:
        """Fetch and cache fundamentals on first call; later calls make no requests"""
        return await self._fundamentals.get()

    async def get_fundamental(self, name: str) -> Any:
        """Return one fundamentals field by name; unpopulated fields are None"""
        if name not in FundamentalsRecord.field_names():
            raise InvalidParameterError(f"fundamental [{name}] is not valid")
        record = await self.load_fundamentals()
        return getattr(record, name)

    async def get_earnings(self) -> pd.DataFrame:
        return await self.get_fundamental("earnings")

    async def get_quarterly_earnings(self) -> pd.DataFrame:
        return await self.get_fundamental("quarterly_earnings")

    async def get_major_holders(self) -> Optional[pd.DataFrame]:
        return await self.get_fundamental("major_holders")

    async def get_institutional_holders(self) -> Optional[pd.DataFrame]:
        return await self.get_fundamental("institutional_holders")

    async def get_mutualfund_holders(self) -> Optional[pd.DataFrame]:
        return await self.get_fundamental("mutualfund_holders")
