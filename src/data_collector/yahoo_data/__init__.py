"""
Yahoo Finance data collection: chart history and scraped fundamentals per ticker.

Layered as params -> session (transport) -> parsers/scrapers -> fundamentals cache -> Ticker.
"""

from .ticker import Ticker
from .session import SessionManager
from .params import normalize_history_params
from .chart_parser import parse_chart_response, chart_to_frame
from .quote_extractor import extract_embedded_json, extract_quote_summary
from .holders_scraper import parse_html_tables, scrape_holders
from .fundamentals import FundamentalsCache
from .data_models import TimeRangeQuery, EarningsRow, HolderTables, FundamentalsRecord
from .exceptions import (
    YahooDataError,
    InvalidParameterError,
    TransportError,
    RequestError,
    ParseError,
    FieldAccessError,
)

__all__ = [
    "Ticker",
    "SessionManager",
    "normalize_history_params",
    "parse_chart_response",
    "chart_to_frame",
    "extract_embedded_json",
    "extract_quote_summary",
    "parse_html_tables",
    "scrape_holders",
    "FundamentalsCache",
    "TimeRangeQuery",
    "EarningsRow",
    "HolderTables",
    "FundamentalsRecord",
    "YahooDataError",
    "InvalidParameterError",
    "TransportError",
    "RequestError",
    "ParseError",
    "FieldAccessError",
]
