import json

import pytest

from src.data_collector.yahoo_data.chart_parser import chart_to_frame, parse_chart_response
from src.data_collector.yahoo_data.exceptions import ParseError
from tests._fixtures import SAMPLE_CHART


@pytest.mark.unit
def test_parse_chart_response_passes_payload_through():
    assert parse_chart_response(json.dumps(SAMPLE_CHART)) == SAMPLE_CHART


@pytest.mark.unit
def test_parse_chart_response_rejects_invalid_json():
    with pytest.raises(ParseError):
        parse_chart_response("<html>not json</html>")


@pytest.mark.unit
def test_chart_to_frame_unadjusted_keeps_adj_close():
    frame = chart_to_frame(SAMPLE_CHART, auto_adjust=False)

    assert list(frame.columns) == ["Open", "High", "Low", "Close", "Volume", "Adj Close", "Dividends", "Stock Splits"]
    assert len(frame) == 3
    assert frame.index.name == "Date"
    assert frame["Close"].iloc[0] == pytest.approx(110.5)
    assert frame["Adj Close"].iloc[0] == pytest.approx(100.0)


@pytest.mark.unit
def test_chart_to_frame_auto_adjust_scales_prices():
    """auto_adjust applies the adjclose/close ratio to OHLC"""
    frame = chart_to_frame(SAMPLE_CHART)

    ratio = 100.0 / 110.5
    assert "Adj Close" not in frame.columns
    assert frame["Close"].iloc[0] == pytest.approx(100.0)
    assert frame["Open"].iloc[0] == pytest.approx(110.0 * ratio)
    assert frame["Open"].iloc[1] == pytest.approx(112.0)


@pytest.mark.unit
def test_chart_to_frame_back_adjust_keeps_close():
    frame = chart_to_frame(SAMPLE_CHART, auto_adjust=False, back_adjust=True)

    assert frame["Close"].iloc[0] == pytest.approx(110.5)
    assert frame["Low"].iloc[0] == pytest.approx(109.0 * 100.0 / 110.5)


@pytest.mark.unit
def test_chart_to_frame_actions_align_with_bars():
    frame = chart_to_frame(SAMPLE_CHART)

    assert frame["Dividends"].tolist() == [0.0, 0.45, 0.0]
    assert frame["Stock Splits"].tolist() == [0.0, 0.0, 2.0]


@pytest.mark.unit
def test_chart_to_frame_without_actions_rounding_and_tz():
    frame = chart_to_frame(SAMPLE_CHART, actions=False, rounding=True, tz="UTC")

    assert "Dividends" not in frame.columns
    assert str(frame.index.tz) == "UTC"
    assert frame["Open"].equals(frame["Open"].round(2))


@pytest.mark.unit
def test_chart_to_frame_uses_exchange_timezone_by_default():
    frame = chart_to_frame(SAMPLE_CHART)
    assert str(frame.index.tz) == "America/New_York"


@pytest.mark.unit
def test_chart_to_frame_reports_chart_error():
    payload = {"chart": {"result": None, "error": {"code": "Not Found", "description": "No data found"}}}
    with pytest.raises(ParseError, match="No data found"):
        chart_to_frame(payload)


@pytest.mark.unit
def test_chart_to_frame_requires_result():
    with pytest.raises(ParseError):
        chart_to_frame({"chart": {"result": [], "error": None}})
