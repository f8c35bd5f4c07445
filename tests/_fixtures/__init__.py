"""Fixtures package for tests.

Re-export commonly used fakes and canned responses for convenient imports
from `tests._fixtures` package.
"""

from .helpers import run, FakeAiohttpResponse, FakeAiohttpSession
from .remote_api_responses import (
    FakeTransport,
    canned_transport,
    make_quote_page,
    make_holders_page,
    make_table,
    SAMPLE_CHART,
    SAMPLE_FINANCIALS_CHART,
    CHART_ERROR_BODY,
    MAJOR_HOLDERS_TABLE,
    INSTITUTIONAL_HOLDERS_TABLE,
    MUTUALFUND_HOLDERS_TABLE,
)

__all__ = [
    "run",
    "FakeAiohttpResponse",
    "FakeAiohttpSession",
    "FakeTransport",
    "canned_transport",
    "make_quote_page",
    "make_holders_page",
    "make_table",
    "SAMPLE_CHART",
    "SAMPLE_FINANCIALS_CHART",
    "CHART_ERROR_BODY",
    "MAJOR_HOLDERS_TABLE",
    "INSTITUTIONAL_HOLDERS_TABLE",
    "MUTUALFUND_HOLDERS_TABLE",
]
