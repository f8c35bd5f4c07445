"""
Exception types raised by the Yahoo Finance ticker client
"""

from typing import Optional, Tuple


class YahooDataError(Exception):
    """Base class for all errors raised by the yahoo_data package"""


class InvalidParameterError(YahooDataError, ValueError):
    """Raised when a period or interval value is not accepted by the chart endpoint"""


class TransportError(YahooDataError):
    """Network failure or non-2xx response from the HTTP transport"""

    def __init__(
        self, message: str, status_code: Optional[int] = None, body: Optional[str] = None
    ) -> None:
        self.message: str = message
        self.status_code: Optional[int] = status_code
        self.body: Optional[str] = body
        super().__init__(self.message)


class RequestError(YahooDataError):
    """A request to Yahoo failed; carries the provider error code when one was returned"""

    def __init__(
        self, message: str, status_code: Optional[int] = None, code: str = ""
    ) -> None:
        self.message: str = message
        self.status_code: Optional[int] = status_code
        self.code: str = code
        super().__init__(self.message)


class ParseError(YahooDataError, ValueError):
    """A response body could not be turned into the expected structure"""


class FieldAccessError(ParseError):
    """A fixed path into a parsed payload does not exist"""

    def __init__(self, path: Tuple[str, ...], missing: str) -> None:
        self.path: Tuple[str, ...] = path
        self.missing: str = missing
        super().__init__(f"Missing '{missing}' while reading {'.'.join(path)}")
