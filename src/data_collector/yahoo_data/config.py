"""
Configuration for Yahoo Finance data collection

This module contains the endpoint templates and HTTP settings used by the
Yahoo Finance ticker client.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional
from dotenv import load_dotenv
# Load environment variables from a .env file if present
load_dotenv()


@dataclass
class YahooDataConfig:
    """Configuration for the Yahoo Finance client"""

    # Endpoints
    BASE_URL: str = "https://query1.finance.yahoo.com"
    SCRAPE_URL: str = "https://finance.yahoo.com/quote"
    HISTORY_CHART_ENDPOINT: str = "/v8/finance/chart/{symbol}"
    QUOTE_SUMMARY_ENDPOINT: str = "/{symbol}/financials"
    HOLDERS_ENDPOINT: str = "/{symbol}/holders"

    # HTTP
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/90.0.4430.93 Safari/537.36"
    )
    PROXY: Optional[str] = None

    # Timeouts
    REQUEST_TIMEOUT: int = 30  # seconds
    CONNECTION_TIMEOUT: int = 10  # seconds

    @property
    def headers(self) -> Dict[str, str]:
        """Get HTTP headers for page and API requests"""
        return {"User-Agent": self.USER_AGENT}

    def get_history_url(self, symbol: str) -> str:
        """Get the full URL for the historical chart endpoint"""
        return f"{self.BASE_URL}{self.HISTORY_CHART_ENDPOINT.format(symbol=symbol)}"

    def get_quote_summary_url(self, symbol: str) -> str:
        """Get the full URL for the quote summary (financials) page"""
        return f"{self.SCRAPE_URL}{self.QUOTE_SUMMARY_ENDPOINT.format(symbol=symbol)}"

    def get_holders_url(self, symbol: str) -> str:
        """Get the full URL for the holders page"""
        return f"{self.SCRAPE_URL}{self.HOLDERS_ENDPOINT.format(symbol=symbol)}"

    @classmethod
    def from_env(cls) -> "YahooDataConfig":
        """Create configuration from environment variables"""
        return cls(
            BASE_URL=os.getenv("YAHOO_BASE_URL", cls.BASE_URL),
            SCRAPE_URL=os.getenv("YAHOO_SCRAPE_URL", cls.SCRAPE_URL),
            USER_AGENT=os.getenv("YAHOO_USER_AGENT", cls.USER_AGENT),
            PROXY=os.getenv("YAHOO_PROXY") or None,
            REQUEST_TIMEOUT=int(os.getenv("YAHOO_REQUEST_TIMEOUT", str(cls.REQUEST_TIMEOUT))),
            CONNECTION_TIMEOUT=int(
                os.getenv("YAHOO_CONNECTION_TIMEOUT", str(cls.CONNECTION_TIMEOUT))
            ),
        )


# Global configuration instance
yahoo_data_config = YahooDataConfig.from_env()
