"""
Holders page scraping

Reads the HTML tables under the page's ``#Main`` container into header-keyed
rows. Cell values are kept as text; percentages, share counts and dates are
not converted here.
"""

from typing import List

from bs4 import BeautifulSoup

from src.data_collector.yahoo_data.data_models import HolderRow, HolderTable, HolderTables
from src.utils.logger import get_logger


logger = get_logger(__name__)

HOLDERS_TABLE_SELECTOR = "#Main table"
HOLDER_SLOTS = ("major_holders", "institutional_holders", "mutualfund_holders")


def _own_rows(section) -> list:
    if section is None:
        return []
    return section.find_all("tr", recursive=False)


def _table_rows(table) -> HolderTable:
    # only this table's own rows; nested tables are not read into it
    headers = [
        th.get_text(strip=True)
        for tr in _own_rows(table.find("thead", recursive=False))
        for th in tr.find_all("th", recursive=False)
    ]
    rows = HolderTable(columns=headers)
    for tr in _own_rows(table.find("tbody", recursive=False)):
        row: HolderRow = {}
        for i, td in enumerate(tr.find_all("td", recursive=False)):
            # rows can carry more cells than headers; those are keyed by position
            key = headers[i] if i < len(headers) else i
            row[key] = td.get_text(strip=True)
        rows.append(row)
    return rows


def parse_html_tables(html: str, selector: str = HOLDERS_TABLE_SELECTOR) -> List[HolderTable]:
    """Parse every table matched by ``selector`` in document order"""
    soup = BeautifulSoup(html, "html.parser")
    return [_table_rows(table) for table in soup.select(selector)]


def scrape_holders(html: str) -> HolderTables:
    """
    Assign the page's tables to the major, institutional and mutual fund slots.

    Tables are assigned by position; slots without a table stay None.
    """
    tables = parse_html_tables(html)
    logger.debug(f"Found {len(tables)} holders tables")
    return HolderTables(**dict(zip(HOLDER_SLOTS, tables)))
