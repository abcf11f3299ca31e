"""Pure helpers that turn page HTML snapshots into plain values.

Nothing here talks to the browser: scrapers grab ``page.content()`` and hand
the markup over, which keeps every extraction testable against fixture HTML.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ar_vote_scraper.errors import MissingFieldError

logger = logging.getLogger(__name__)

HEADER_DELIMITER = " - "

_TRAILING_NUMBER_RE = re.compile(r"(\d+)\D*$")
_NUMBER_RE = re.compile(r"-?\d+")


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def normalize_space(text: Optional[str]) -> str:
    """Collapse runs of whitespace (newlines, tabs, nbsp) into single spaces."""
    if not text:
        return ""
    return " ".join(text.split())


def clean_text(element: Tag) -> str:
    """Text of an element with spaces kept around inline tags.

    ``get_text(strip=True)`` glues adjacent text nodes together, so
    ``Sesión <b>Ordinaria</b>`` would read ``SesiónOrdinaria``.
    """
    return normalize_space(element.get_text(separator=" ", strip=True))


def parse_int(text: Optional[str]) -> Optional[int]:
    """First integer found in ``text``, or None."""
    if text is None:
        return None
    match = _NUMBER_RE.search(text.replace(".", ""))
    return int(match.group()) if match else None


def numeric_suffix(segment: str) -> Optional[int]:
    """Trailing number of a header segment: "Reunión 5" -> 5."""
    match = _TRAILING_NUMBER_RE.search(segment.strip())
    return int(match.group(1)) if match else None


def split_header(text: str) -> tuple[Optional[int], Optional[int], Optional[int]]:
    """Split "Período 137 - Reunión 5 - Acta 3" into (137, 5, 3).

    Missing segments come back as None.
    """
    segments = normalize_space(text).split(HEADER_DELIMITER)
    values = [numeric_suffix(s) for s in segments[:3]]
    values += [None] * (3 - len(values))
    return values[0], values[1], values[2]


def id_from_url(url: Optional[str]) -> Optional[int]:
    """Voting id at the end of a detail URL: "/votacion/4123" -> 4123."""
    if not url:
        return None
    match = re.search(r"(\d+)/?(?:[?#].*)?$", url.strip())
    return int(match.group(1)) if match else None


def epoch_to_iso(value: Optional[str]) -> Optional[str]:
    """Unix timestamp in seconds -> ISO-8601 UTC date-time."""
    seconds = parse_int(value)
    if seconds is None:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat()


def date_to_iso(value: Optional[str]) -> Optional[str]:
    """Session dates as printed by the sites -> ISO-8601 date-time.

    Accepts "20190314", "14/03/2019" and "2019-03-14".
    """
    text = normalize_space(value)
    if not text:
        return None
    for fmt in ("%Y%m%d", "%d/%m/%Y", "%Y-%m-%d", "%d/%m/%Y %H:%M"):
        try:
            return datetime.strptime(text, fmt).isoformat()
        except ValueError:
            continue
    return None


def absolute_url(base: str, href: Optional[str]) -> Optional[str]:
    if not href:
        return None
    return urljoin(base, href.strip())


def select_text(root: Tag, selector: str, name: str) -> str:
    """Cleaned text of the first node matching ``selector``."""
    node = root.select_one(selector)
    if node is None:
        raise MissingFieldError(name, selector)
    return clean_text(node)


def select_attr(root: Tag, selector: str, attr: str, name: str) -> str:
    node = root.select_one(selector)
    if node is None or not node.get(attr):
        raise MissingFieldError(name, selector)
    return node[attr]


# -- Detail page -----------------------------------------------------------------


@dataclass(frozen=True)
class DetailSelectors:
    """Where a provider's detail page keeps its header, president, link and counts."""

    header: str
    president: str
    document: str
    affirmative: str
    negative: str
    abstention: str
    absent: str


COUNT_FIELDS = ("affirmative_count", "negative_count", "abstention_count", "absent_count")


def parse_detail_fields(html: str, selectors: DetailSelectors, base_url: str) -> dict[str, Any]:
    """Extract the aggregate fields of a voting detail page.

    A missing node is logged and leaves its field as None; the other fields
    are still extracted.
    """
    soup = make_soup(html)
    details: dict[str, Any] = dict.fromkeys(
        ("period", "meeting", "record", "president", "document_url", *COUNT_FIELDS)
    )

    try:
        header = select_text(soup, selectors.header, "header")
        details["period"], details["meeting"], details["record"] = split_header(header)
        logger.info(header)
    except MissingFieldError as e:
        logger.warning(str(e))

    try:
        details["president"] = select_text(soup, selectors.president, "president")
        logger.info("President\t\t%s", details["president"])
    except MissingFieldError as e:
        logger.warning(str(e))

    try:
        href = select_attr(soup, selectors.document, "href", "document_url")
        details["document_url"] = absolute_url(base_url, href)
        logger.info("Document URL\t\t%s", details["document_url"])
    except MissingFieldError:
        logger.info("Could not get the document URL")

    count_selectors = (
        selectors.affirmative,
        selectors.negative,
        selectors.abstention,
        selectors.absent,
    )
    for name, selector in zip(COUNT_FIELDS, count_selectors):
        try:
            details[name] = parse_int(select_text(soup, selector, name))
        except MissingFieldError as e:
            logger.warning(str(e))
        logger.info("%-20s%s", name, details[name])

    return details
