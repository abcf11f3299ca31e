"""Chamber of Deputies (lower chamber): votaciones.hcdn.gob.ar.

The listing shows every voting of the selected year in one table. Bill
records ("expedientes") stay collapsed until their row's link is clicked.
Individual votes come from the site's CSV export.
"""

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from ar_vote_scraper.config import DIPUTADOS_URL, REVEAL_TIMEOUT
from ar_vote_scraper.errors import OptionNotFoundError, YearNotFoundError
from ar_vote_scraper.importer import VoteImporter
from ar_vote_scraper.models import BillRecord, VotingSummary
from ar_vote_scraper.output import read_first_file, records_file, save_records, votes_download_dir
from ar_vote_scraper.parsing import (
    clean_text,
    epoch_to_iso,
    id_from_url,
    make_soup,
    normalize_space,
)
from ar_vote_scraper.scraper import VOTES_CSV, VoteScraper, require_option

logger = logging.getLogger(__name__)

YEAR_SELECT = "select#select-ano"
ROWS = ".table-responsive tbody#container-actas > tr.row-acta"
REVEAL_LINK = "td:nth-child(2) a[id]"
RECORD_PANEL = "td:nth-child(2) div[tituloexpediente]"

REVEAL_ALL_JS = """
links => links.forEach(link => {
    if (link.textContent.indexOf("Ver") > -1) { link.click(); }
})
"""


@dataclass
class ListingRow:
    """A parsed listing row plus what is needed to reveal its records."""

    voting: VotingSummary
    position: int  # 1-based nth-child index inside the table body
    reveal_text: Optional[str]  # text of the "Ver expedientes" link, None if absent

    @property
    def selector(self) -> str:
        return f"{ROWS}:nth-child({self.position})"


def _row_title(cell) -> str:
    cell = copy.copy(cell)
    for node in cell.select("a[id], div[tituloexpediente]"):
        node.decompose()
    text = clean_text(cell)
    for label in ("(Ver expedientes)", "(Ocultar expedientes)"):
        text = text.replace(label, "")
    return normalize_space(text)


def _cell_text(row, selector: str) -> str:
    cell = row.select_one(selector)
    return clean_text(cell) if cell is not None else ""


def parse_records(row, voting_id: int) -> list[BillRecord]:
    return [
        BillRecord(
            id=panel.get("identificador", ""),
            title=normalize_space(panel.get("tituloexpediente", "")),
            voting_id=voting_id,
        )
        for panel in row.select(RECORD_PANEL)
    ]


def parse_listing_rows(html: str) -> list[ListingRow]:
    """Parse every voting row of a listing page, in table order.

    A row without a detail button has no id and is skipped; any other
    missing cell only blanks that field.
    """
    soup = make_soup(html)
    rows: list[ListingRow] = []
    for row in soup.select(ROWS):
        button = row.select_one("td > center > button[urldetalle]")
        url = button.get("urldetalle") if button is not None else None
        voting_id = id_from_url(url)
        if voting_id is None:
            logger.warning("Listing row without detail URL skipped: %s", clean_text(row)[:80])
            continue

        title_cell = row.select_one("td:nth-child(2)")
        link = row.select_one(REVEAL_LINK)
        voting = VotingSummary(
            id=voting_id,
            date=epoch_to_iso(row.get("data-date")),
            title=_row_title(title_cell) if title_cell is not None else "",
            type=_cell_text(row, "td:nth-child(3)"),
            result=_cell_text(row, "td:nth-child(4)"),
            details_url=url,
        )
        voting.records = parse_records(row, voting_id)
        rows.append(
            ListingRow(
                voting=voting,
                position=len(row.find_previous_siblings()) + 1,
                reveal_text=clean_text(link) if link is not None else None,
            )
        )
    return rows


class DiputadosScraper(VoteScraper):
    name = "diputados"
    base_url = DIPUTADOS_URL
    listing_url = DIPUTADOS_URL
    detail_path = "/votacion/{id}"
    votes_source = VOTES_CSV

    def goto_year(self, page: Page, year: int) -> None:
        try:
            require_option(page, YEAR_SELECT, year)
        except OptionNotFoundError as e:
            raise YearNotFoundError(year) from e
        # Changing the select reloads the page with the year's votings
        with page.expect_navigation(wait_until="networkidle"):
            page.select_option(YEAR_SELECT, str(year))

    def collect_votings(self, page: Page) -> list[VotingSummary]:
        logger.info("Parsing records...")
        self.reveal_all_records(page)
        rows = parse_listing_rows(page.content())
        for row in rows:
            if not row.voting.records:
                row.voting.records = self.reveal_row_records(page, row)
            logger.info(
                "Records of voting #%s. Count: %d", row.voting.id, len(row.voting.records)
            )
        logger.info("Records parsing finished")
        return [row.voting for row in rows]

    def reveal_all_records(self, page: Page) -> None:
        """Best-effort click on every "Ver expedientes" link at once."""
        try:
            page.eval_on_selector_all(f"{ROWS} > {REVEAL_LINK}", REVEAL_ALL_JS)
            page.wait_for_load_state("networkidle")
        except PlaywrightError as e:
            logger.warning("Bulk record reveal failed: %s", e)

    def reveal_row_records(self, page: Page, row: ListingRow) -> list[BillRecord]:
        """Retry the reveal for a single row whose records did not show up."""
        if row.reveal_text is None:
            logger.info("Voting #%s: nothing to click", row.voting.id)
            return []
        link = f"{row.selector} > {REVEAL_LINK}"
        panel = f"{row.selector} > {RECORD_PANEL}"
        try:
            # An "Ocultar" link was already toggled by the bulk reveal; only wait
            if "Ver" in row.reveal_text:
                page.eval_on_selector(link, "el => el.click()")
            page.wait_for_selector(panel, state="attached", timeout=REVEAL_TIMEOUT)
        except PlaywrightError:
            logger.warning("Voting #%s has no records", row.voting.id)
            return []
        row_node = make_soup(page.content()).select_one(row.selector)
        if row_node is None:
            return []
        return parse_records(row_node, row.voting.id)

    def persist_listing(self, year: int, votings: list[VotingSummary]) -> Path:
        path = super().persist_listing(year, votings)
        records_path = save_records(records_file(self.data_dir, self.name, year), votings)
        logger.info("Records saved. File: %s", records_path)
        return path


class DiputadosImporter(VoteImporter):
    name = "diputados"
    endpoint = "api/import/ar/deputies"
    accepted_results = frozenset({"AFIRMATIVO", "NEGATIVO", "EMPATE"})
    save_records = True
    save_votes = True

    def load_votes(self, voting: VotingSummary, year: int) -> str:
        """Raw CSV exactly as the site delivered it."""
        return read_first_file(votes_download_dir(self.data_dir, self.name, voting.id))
