import pytest

from src.data_collector.yahoo_data.holders_scraper import parse_html_tables, scrape_holders
from tests._fixtures import (
    INSTITUTIONAL_HOLDERS_TABLE,
    MAJOR_HOLDERS_TABLE,
    MUTUALFUND_HOLDERS_TABLE,
    make_holders_page,
    make_table,
)


@pytest.mark.unit
def test_three_tables_fill_all_slots():
    page = make_holders_page(MAJOR_HOLDERS_TABLE, INSTITUTIONAL_HOLDERS_TABLE, MUTUALFUND_HOLDERS_TABLE)

    holders = scrape_holders(page)

    assert len(holders.major_holders) == 4
    assert len(holders.institutional_holders) == 3
    assert len(holders.mutualfund_holders) == 2


@pytest.mark.unit
def test_two_tables_leave_mutualfund_empty():
    """Exactly two tables go to major and institutional; mutual fund stays None"""
    page = make_holders_page(MAJOR_HOLDERS_TABLE, INSTITUTIONAL_HOLDERS_TABLE)

    holders = scrape_holders(page)

    assert holders.mutualfund_holders is None
    assert len(holders.major_holders) == 4
    assert len(holders.institutional_holders) == 3


@pytest.mark.unit
def test_one_table_fills_major_only():
    holders = scrape_holders(make_holders_page(INSTITUTIONAL_HOLDERS_TABLE))

    assert len(holders.major_holders) == 3
    assert holders.institutional_holders is None
    assert holders.mutualfund_holders is None


@pytest.mark.unit
def test_no_tables_gives_all_none():
    holders = scrape_holders("<html><body><div id='Main'><p>No data</p></div></body></html>")

    assert holders.major_holders is None
    assert holders.institutional_holders is None
    assert holders.mutualfund_holders is None


@pytest.mark.unit
def test_extra_tables_are_ignored_positionally():
    extra = make_table(["Holder"], [["Someone"]])
    page = make_holders_page(MAJOR_HOLDERS_TABLE, INSTITUTIONAL_HOLDERS_TABLE, MUTUALFUND_HOLDERS_TABLE, extra)

    holders = scrape_holders(page)

    assert len(holders.mutualfund_holders) == 2


@pytest.mark.unit
def test_rows_are_keyed_by_header_text_and_left_uncleaned():
    """Cells keep their raw text, keyed by the matching header"""
    tables = parse_html_tables(make_holders_page(INSTITUTIONAL_HOLDERS_TABLE))

    first = tables[0][0]
    assert list(first.keys()) == ["Holder", "Shares", "Date Reported", "% Out", "Value"]
    assert first["Holder"] == "Fisher Asset Management, LLC"
    assert first["Shares"] == "38,722,282"
    assert first["Date Reported"] == "Mar 30, 2021"
    assert first["% Out"] == "0.75%"


@pytest.mark.unit
def test_cells_beyond_headers_are_keyed_by_index():
    """Tables without (enough) headers key cells by their position"""
    tables = parse_html_tables(make_holders_page(MAJOR_HOLDERS_TABLE, make_table(["Holder"], [["A", "B"]])))

    assert tables[0][0] == {0: "0.00%", 1: "% of Shares Held by All Insider"}
    assert tables[1][0] == {"Holder": "A", 1: "B"}


@pytest.mark.unit
def test_tables_outside_main_are_ignored():
    """Only tables under #Main are read"""
    tables = parse_html_tables(make_holders_page())
    assert tables == []


@pytest.mark.unit
def test_table_without_rows_keeps_its_headers():
    tables = parse_html_tables(make_holders_page(make_table(["Holder", "Shares"], [])))

    assert tables == [[]]
    assert tables[0].columns == ["Holder", "Shares"]


@pytest.mark.unit
def test_nested_table_rows_are_not_read_into_outer_table():
    nested = "<table><thead><tr><th>Inner</th></tr></thead><tbody><tr><td>x</td><td>y</td></tr></tbody></table>"
    outer = make_table(["Holder", "Shares"], [["Vanguard", "1,000"], ["BlackRock", nested]])

    tables = parse_html_tables(make_holders_page(outer))

    assert tables[0].columns == ["Holder", "Shares"]
    assert len(tables[0]) == 2
    assert tables[0][0] == {"Holder": "Vanguard", "Shares": "1,000"}
    assert list(tables[0][1].keys()) == ["Holder", "Shares"]
