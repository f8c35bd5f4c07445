"""
Quote summary extraction from Yahoo quote pages

Yahoo inlines the page state as a JSON object assigned to ``root.App.main``
inside a script tag. The markers below are tied to the current page template;
update them here if the template changes.
"""

import json
from typing import Any, Dict, Sequence, Tuple

from src.data_collector.yahoo_data.exceptions import FieldAccessError, ParseError
from src.utils.logger import get_logger


logger = get_logger(__name__)

QUOTE_SUMMARY_MARKER = "QuoteSummaryStore"
# start marker, then cut markers applied in order
EMBEDDED_JSON_MARKERS: Tuple[str, ...] = ("root.App.main =", "(this)", ";\n}")
QUOTE_SUMMARY_PATH: Tuple[str, ...] = ("context", "dispatcher", "stores", "QuoteSummaryStore")


def extract_embedded_json(html: str, markers: Sequence[str] = EMBEDDED_JSON_MARKERS) -> Any:
    """
    Pull the JSON object embedded in a page.

    The page is split on ``markers[0]`` and the second segment kept; that text
    is then cut at the first occurrence of each remaining marker, in order,
    and parsed as JSON.

    Raises:
        ParseError: If the start marker is absent or the remaining text is not JSON
    """
    start, *cuts = markers
    segments = html.split(start)
    if len(segments) < 2:
        raise ParseError(f"Marker {start!r} not found in page")

    text = segments[1]
    for marker in cuts:
        text = text.split(marker)[0]

    try:
        return json.loads(text)
    except ValueError as e:
        raise ParseError(f"Embedded JSON could not be parsed: {e}") from e


def descend(data: Any, path: Sequence[str]) -> Any:
    """Follow ``path`` through nested dicts, raising FieldAccessError on the first gap"""
    node = data
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise FieldAccessError(tuple(path), key)
        node = node[key]
    return node


def extract_quote_summary(html: str) -> Dict[str, Any]:
    """Return the QuoteSummaryStore object of a quote page, or {} when the page has none"""
    if QUOTE_SUMMARY_MARKER not in html:
        logger.warning("QuoteSummaryStore not present in page; fundamentals unavailable")
        return {}

    data = extract_embedded_json(html)
    return descend(data, QUOTE_SUMMARY_PATH)
