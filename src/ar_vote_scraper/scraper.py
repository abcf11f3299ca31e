"""Shared scraping flow for the chamber voting sites.

A provider subclass supplies the site-specific bits (year selection, row
parsing, vote table handling); the navigation, persistence and error
containment live here.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from playwright.sync_api import Page
from tqdm import tqdm

from ar_vote_scraper.config import DATA_DIR
from ar_vote_scraper.errors import (
    Action,
    AlreadyDownloadedError,
    OptionNotFoundError,
    Outcome,
)
from ar_vote_scraper.models import VoteRow, VotingSummary
from ar_vote_scraper.output import (
    list_files,
    load_votings,
    save_vote_rows,
    save_votings,
    vote_rows_file,
    votes_download_dir,
    year_file,
)
from ar_vote_scraper.parsing import DetailSelectors, absolute_url, parse_detail_fields
from ar_vote_scraper.session import BrowserSession

logger = logging.getLogger(__name__)

# Detail page layout shared by both chambers' voting sites
DETAIL_SELECTORS = DetailSelectors(
    header=".container-fluid > div:first-child > div.row:first-child h5",
    president=".white-box #custom-share h4 > b",
    document=".white-box div:nth-child(3) h5 a",
    affirmative=".white-box div:nth-child(3) > div.row > div:nth-child(1) > ul > h3",
    negative=".white-box div:nth-child(3) > div.row > div:nth-child(2) > ul > h3",
    abstention=".white-box div:nth-child(3) > div.row > div:nth-child(3) > ul > h3",
    absent=".white-box div:nth-child(3) > div.row > div:nth-child(4) > ul > h3",
)

VOTES_CSV = "csv"
VOTES_TABLE = "table"


def require_option(page: Page, select_selector: str, value) -> None:
    """Raise OptionNotFoundError unless the <select> offers ``value``."""
    option = page.query_selector(f'{select_selector} > option[value="{value}"]')
    if option is None:
        raise OptionNotFoundError(f"The option {value} does not exist in {select_selector}")


class VoteScraper(ABC):
    """Base class: listing extractor plus detail extractor for one chamber."""

    name = ""  # data sub-directory, e.g. "diputados"
    base_url = ""
    listing_url = ""
    detail_path = ""  # format string with {id}, used when a voting has no details_url
    detail_selectors = DETAIL_SELECTORS
    votes_source = VOTES_CSV
    csv_selector = 'a[title="Descargar datos en CSV"]'

    def __init__(self, session: BrowserSession, data_dir: Path = DATA_DIR):
        self.session = session
        self.data_dir = data_dir

    # -- Listing ---------------------------------------------------------------

    def parse_votings_from_year(self, year: int) -> list[VotingSummary]:
        """Scrape and persist every voting listed for ``year``.

        Raises YearNotFoundError (and lets navigation errors through); per-row
        problems are logged and never abort the listing.
        """
        page = self.session.create_page()
        try:
            logger.info("Entering site %s", self.listing_url)
            page.goto(self.listing_url, wait_until="networkidle")
            logger.info("Selecting year %s", year)
            self.goto_year(page, year)
            self.prepare_listing(page)
            logger.info("Parsing votings...")
            votings = self.collect_votings(page)
        finally:
            self.session.close_page(page)

        logger.info("Votings parsed. Count: %d", len(votings))
        path = self.persist_listing(year, votings)
        logger.info("Votings saved. File: %s", path)
        return votings

    @abstractmethod
    def goto_year(self, page: Page, year: int) -> None:
        """Select ``year`` on the listing page; YearNotFoundError when not offered."""

    def prepare_listing(self, page: Page) -> None:
        """Hook run after the year is selected and before rows are read."""

    @abstractmethod
    def collect_votings(self, page: Page) -> list[VotingSummary]:
        """Read every voting of the selected year, in page order."""

    def persist_listing(self, year: int, votings: list[VotingSummary]) -> Path:
        return save_votings(year_file(self.data_dir, self.name, year), votings)

    # -- Details ---------------------------------------------------------------

    def parse_year_details(self, year: int) -> list[VotingSummary]:
        """Enrich every voting in the year file and write the file back.

        The file is rewritten even when the loop is interrupted, so the votings
        processed so far are kept.
        """
        path = year_file(self.data_dir, self.name, year)
        votings = load_votings(path)
        page = self.session.create_page()
        try:
            for voting in tqdm(votings, desc=f"Details {year}", unit="voting"):
                self.parse_voting_details(page, voting, year)
        finally:
            self.session.close_page(page)
            save_votings(path, votings)
            logger.info("Votings updated. File: %s", path)
        return votings

    def details_url(self, voting: VotingSummary) -> str:
        if voting.details_url:
            return absolute_url(self.base_url, voting.details_url)
        return absolute_url(self.base_url, self.detail_path.format(id=voting.id))

    def parse_voting_details(self, page: Page, voting: VotingSummary, year: int) -> VotingSummary:
        """Fill the detail fields of ``voting`` and store its vote rows.

        Any failure is logged and the (possibly partial) voting is returned.
        """
        url = self.details_url(voting)
        logger.info("START VOTING #%s", voting.id)
        logger.info(url)
        try:
            page.goto(url, wait_until="networkidle")
            logger.info("Getting data...")
            voting.apply_details(self.parse_detail(page.content()))

            outcome = self.save_votes(page, voting, year)
            if outcome.action is Action.SKIP:
                logger.info("Votes of voting #%s skipped: %s", voting.id, outcome.reason)
            elif outcome.action is Action.ABORT:
                logger.error("Votes of voting #%s not saved: %s", voting.id, outcome.reason)
        except Exception:
            logger.exception("Voting #%s could not be processed", voting.id)
        finally:
            logger.info("END VOTING #%s", voting.id)
        return voting

    def parse_detail(self, html: str) -> dict:
        return parse_detail_fields(html, self.detail_selectors, self.base_url)

    def save_votes(self, page: Page, voting: VotingSummary, year: int) -> Outcome:
        if self.votes_source == VOTES_CSV:
            return self.download_votes_csv(page, voting)
        return self.scrape_votes_table(page, voting, year)

    # -- Votes: CSV export -----------------------------------------------------

    def check_not_downloaded(self, directory: Path) -> None:
        if list_files(directory):
            raise AlreadyDownloadedError(f"The votes file already exists in {directory}")

    def download_votes_csv(self, page: Page, voting: VotingSummary) -> Outcome:
        """Click the site's CSV export and save the file in the voting's folder."""
        target = votes_download_dir(self.data_dir, self.name, voting.id)
        try:
            self.check_not_downloaded(target)
        except AlreadyDownloadedError as e:
            return Outcome.skip(str(e))
        target.mkdir(parents=True, exist_ok=True)

        logger.info("Downloading votes file...")
        page.wait_for_selector(self.csv_selector, state="attached")
        with page.expect_download() as download_info:
            # The export link is often hidden behind a menu; click it from JS
            page.eval_on_selector(self.csv_selector, "el => el.click()")
        download = download_info.value
        destination = target / download.suggested_filename
        download.save_as(destination)
        logger.info("Votes file downloaded: %s", destination)
        return Outcome.ok()

    # -- Votes: in-page table --------------------------------------------------

    def show_all_vote_rows(self, page: Page) -> None:
        """Table-strategy providers override this and the row parser below."""
        raise NotImplementedError(f"{type(self).__name__} does not scrape a votes table")

    def parse_vote_rows(self, html: str, voting: VotingSummary) -> list[VoteRow]:
        raise NotImplementedError(f"{type(self).__name__} does not scrape a votes table")

    def scrape_votes_table(self, page: Page, voting: VotingSummary, year: int) -> Outcome:
        """Read every row of the votes table and save them as JSON."""
        self.show_all_vote_rows(page)
        rows = self.parse_vote_rows(page.content(), voting)
        if not rows:
            return Outcome.skip("no vote rows on the page")
        path = save_vote_rows(vote_rows_file(self.data_dir, self.name, year, voting.id), rows)
        logger.info("Saved %d votes: %s", len(rows), path)
        return Outcome.ok()
