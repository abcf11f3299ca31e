"""Senate (upper chamber): senado.gov.ar/votaciones/actas.

The listing is a paginated DataTables widget. Detail pages carry the
per-senator votes in a second table, scraped in place rather than exported.
"""

import copy
import logging
from typing import Optional

from bs4 import Tag
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from ar_vote_scraper.config import (
    MAX_LISTING_PAGES,
    RESULTS_PER_PAGE,
    SENADORES_LISTING_URL,
    SENADORES_URL,
)
from ar_vote_scraper.errors import OptionNotFoundError, YearNotFoundError
from ar_vote_scraper.importer import VoteImporter
from ar_vote_scraper.models import VoteRow, VotingSummary
from ar_vote_scraper.output import load_vote_rows, vote_rows_file
from ar_vote_scraper.parsing import (
    absolute_url,
    clean_text,
    date_to_iso,
    id_from_url,
    make_soup,
    normalize_space,
    parse_int,
)
from ar_vote_scraper.scraper import VOTES_TABLE, VoteScraper, require_option

logger = logging.getLogger(__name__)

YEAR_SELECT = "select#busqueda_actas_anio"
SEARCH_BUTTON = 'input[title="Realizar Búsqueda"]'
PAGE_SIZE_SELECT = "select[name=actasTable_length]"
ROWS = "#actasTable > tbody > tr"
NEXT_BUTTON = "#actasTable_next"

VOTES_PAGE_SIZE_SELECT = "select[name=votosTable_length]"
VOTES_ROWS = "#votosTable > tbody > tr"
SHOW_ALL = "-1"


def _text(row: Tag, selector: str) -> Optional[str]:
    node = row.select_one(selector)
    return clean_text(node) if node is not None else None


def _href(row: Tag, selector: str) -> Optional[str]:
    node = row.select_one(selector)
    return node.get("href") if node is not None else None


def _title(cell: Optional[Tag]) -> str:
    """Title cell text without the toggle labels and the hidden file links.

    Leaves titles like "O.D. 1/2019, Art. 4, Art. 5".
    """
    if cell is None:
        return ""
    cell = copy.copy(cell)
    for panel in cell.find_all("div"):
        panel.decompose()
    text = cell.get_text()
    for label in ("Ocultar Expedientes", "Ver Expedientes"):
        text = text.replace(label, "")
    return ", ".join(normalize_space(part) for part in text.split(",") if part.strip())


def parse_listing_page(html: str) -> list[VotingSummary]:
    """Parse one page of the votings table.

    Columns: date, record number, title/file, type, result, record URL,
    details URL, video URL. The id comes from the details URL; rows without
    one (the "no data" placeholder row, for instance) are skipped.
    """
    soup = make_soup(html)
    votings: list[VotingSummary] = []
    for row in soup.select(ROWS):
        details_url = _href(row, "td:nth-child(7) > a[href]")
        voting_id = id_from_url(details_url)
        if voting_id is None:
            logger.debug("Row without details link skipped: %s", clean_text(row)[:80])
            continue
        votings.append(
            VotingSummary(
                id=voting_id,
                date=date_to_iso(_text(row, "td:nth-child(1) > span")),
                record=parse_int(_text(row, "td:nth-child(2)")),
                title=_title(row.select_one("td:nth-child(3)")),
                file_url=_href(row, "td:nth-child(3) div > a[href]"),
                type=_text(row, "td:nth-child(4)") or "",
                result=_text(row, "td:nth-child(5) > div") or "",
                record_url=_href(row, "td:nth-child(6) > a[href]"),
                details_url=details_url,
                video_url=_href(row, "td:nth-child(8) > a[href]"),
            )
        )
    return votings


def has_next_page(html: str) -> bool:
    """True while the "next" pagination control is not disabled."""
    button = make_soup(html).select_one(NEXT_BUTTON)
    if button is None:
        return False
    return "disabled" not in (button.get("class") or [])


def parse_vote_rows(
    html: str, voting: VotingSummary, base_url: str = SENADORES_URL
) -> list[VoteRow]:
    """Parse the per-senator votes table of a detail page.

    Columns: photo, senator (link to profile), party, province, vote, video.
    """
    soup = make_soup(html)
    rows: list[VoteRow] = []
    for row in soup.select(VOTES_ROWS):
        name = _text(row, "td:nth-child(2)")
        vote = _text(row, "td:nth-child(5)")
        if not name or not vote:
            continue
        photo = row.select_one("td:nth-child(1) img[src]")
        profile = _href(row, "td:nth-child(2) a[href]")
        legislator_id = id_from_url(profile)
        rows.append(
            VoteRow(
                legislator=name,
                party=_text(row, "td:nth-child(3)") or "",
                region=_text(row, "td:nth-child(4)") or "",
                vote=vote,
                photo_url=absolute_url(base_url, photo["src"]) if photo is not None else None,
                video_url=absolute_url(base_url, _href(row, "td:nth-child(6) a[href]")),
                legislator_id=str(legislator_id) if legislator_id is not None else None,
                profile_url=absolute_url(base_url, profile),
                date=voting.date,
                voting_id=voting.id,
            )
        )
    return rows


class SenadoresScraper(VoteScraper):
    name = "senadores"
    base_url = SENADORES_URL
    listing_url = SENADORES_LISTING_URL
    detail_path = "/votaciones/detalleActa/{id}"
    votes_source = VOTES_TABLE

    def goto_year(self, page: Page, year: int) -> None:
        try:
            require_option(page, YEAR_SELECT, year)
        except OptionNotFoundError as e:
            raise YearNotFoundError(year) from e
        page.select_option(YEAR_SELECT, str(year))
        with page.expect_navigation(wait_until="networkidle"):
            page.click(SEARCH_BUTTON)

    def prepare_listing(self, page: Page) -> None:
        logger.info("Results per page: %s", RESULTS_PER_PAGE)
        require_option(page, PAGE_SIZE_SELECT, RESULTS_PER_PAGE)
        page.select_option(PAGE_SIZE_SELECT, str(RESULTS_PER_PAGE))

    def collect_votings(self, page: Page) -> list[VotingSummary]:
        """Walk the table pages until "next" is disabled.

        A page that fails to parse is logged and the loop moves on.
        """
        votings: list[VotingSummary] = []
        seen: set[int] = set()
        for current_page in range(1, MAX_LISTING_PAGES + 1):
            try:
                html = page.content()
                page_votings = parse_listing_page(html)
                more = has_next_page(html)
            except (PlaywrightError, ValueError) as e:
                logger.error("Error on page %d: %s", current_page, e)
                page_votings = []
                more = self.next_page_enabled(page)

            for voting in page_votings:
                if voting.id in seen:
                    logger.warning("Voting #%s listed twice, keeping the first", voting.id)
                    continue
                seen.add(voting.id)
                votings.append(voting)

            if not more:
                break
            try:
                page.click(NEXT_BUTTON)
            except PlaywrightError as e:
                logger.error("Could not leave page %d: %s", current_page, e)
                break
        else:
            logger.warning("Stopped after %d listing pages", MAX_LISTING_PAGES)
        return votings

    def next_page_enabled(self, page: Page) -> bool:
        """Live check of the "next" control, used when the snapshot failed."""
        try:
            button = page.query_selector(NEXT_BUTTON)
            css_class = button.get_attribute("class") if button is not None else None
        except PlaywrightError as e:
            logger.error("Could not read the pagination state: %s", e)
            return False
        return css_class is not None and "disabled" not in css_class

    def show_all_vote_rows(self, page: Page) -> None:
        try:
            require_option(page, VOTES_PAGE_SIZE_SELECT, SHOW_ALL)
        except OptionNotFoundError:
            logger.warning("Votes table has no 'show all' option; reading the visible rows")
            return
        page.select_option(VOTES_PAGE_SIZE_SELECT, SHOW_ALL)

    def parse_vote_rows(self, html: str, voting: VotingSummary) -> list[VoteRow]:
        return parse_vote_rows(html, voting, self.base_url)


class SenadoresImporter(VoteImporter):
    name = "senadores"
    endpoint = "api/import/ar/senators"
    accepted_results = frozenset({"AFIRMATIVO", "NEGATIVO", "EMPATE", "LEV. VOT."})
    votes_collection = "votings"
    save_records = False
    save_votes = True

    def load_votes(self, voting: VotingSummary, year: int) -> list[dict]:
        path = vote_rows_file(self.data_dir, self.name, year, voting.id)
        if not path.exists():
            raise FileNotFoundError(f"No votes file {path}")
        return [row.to_dict() for row in load_vote_rows(path)]
