"""
Data models for Yahoo Finance requests and parsed responses

Pydantic models validate the chart query and earnings rows; the per-ticker
fundamentals record is a plain dataclass holding pandas tables.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# One scraped holders row: header-keyed cell text, int keys for cells beyond the header
HolderRow = Dict[Union[str, int], str]


class HolderTable(list):
    """Rows of one scraped holders table; ``columns`` keeps the header text"""

    def __init__(self, rows=(), columns=()):
        super().__init__(rows)
        self.columns: List[str] = list(columns)

EARNINGS_COLUMNS = ["date", "earnings", "revenue"]


class TimeRangeQuery(BaseModel):
    """Canonical query parameters for the historical chart endpoint"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    range: Optional[str] = None
    period1: Optional[int] = None
    period2: Optional[int] = None
    interval: str
    include_pre_post: bool = Field(default=False, alias="includePrePost")
    events: str = "div,splits"

    @model_validator(mode="after")
    def check_range_or_period(self) -> "TimeRangeQuery":
        """Exactly one of `range` or the (period1, period2) pair must be set"""
        has_range = self.range is not None
        has_periods = self.period1 is not None and self.period2 is not None
        if has_range == has_periods:
            raise ValueError("Exactly one of range or period1/period2 must be provided")
        if not has_periods and (self.period1 is not None or self.period2 is not None):
            raise ValueError("period1 and period2 must be provided together")
        return self

    def to_params(self) -> Dict[str, str]:
        """Render the query as aiohttp-compatible string parameters"""
        params: Dict[str, str] = {}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            else:
                params[key] = str(value)
        return params


class EarningsRow(BaseModel):
    """One flattened entry of earnings.financialsChart"""

    date: str
    earnings: Optional[float] = None
    revenue: Optional[float] = None

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        """Yearly entries carry an int year, quarterly ones a label such as '2Q2020'"""
        if v is None:
            return v
        return str(v)


@dataclass
class HolderTables:
    """Up to three holders tables scraped from the holders page"""

    major_holders: Optional[HolderTable] = None
    institutional_holders: Optional[HolderTable] = None
    mutualfund_holders: Optional[HolderTable] = None


@dataclass
class FundamentalsRecord:
    """Per-ticker fundamentals; fields not populated by the collector stay None"""

    earnings: pd.DataFrame
    quarterly_earnings: pd.DataFrame
    major_holders: Optional[pd.DataFrame] = None
    institutional_holders: Optional[pd.DataFrame] = None
    mutualfund_holders: Optional[pd.DataFrame] = None
    dividends: Optional[Any] = None
    splits: Optional[Any] = None
    financials: Optional[Any] = None
    quarterly_financials: Optional[Any] = None
    balance_sheet: Optional[Any] = None
    quarterly_balance_sheet: Optional[Any] = None
    cashflow: Optional[Any] = None
    quarterly_cashflow: Optional[Any] = None
    sustainability: Optional[Any] = None
    recommendations: Optional[Any] = None
    calendar: Optional[Any] = None
    isin: Optional[Any] = None

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]
