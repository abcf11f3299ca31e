"""The three commands: listing, details and import.

Each scraping command owns one browser session and always releases it.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from ar_vote_scraper.api import ApiClient
from ar_vote_scraper.config import API_URI, DATA_DIR
from ar_vote_scraper.errors import ScraperError
from ar_vote_scraper.importer import ImportSummary
from ar_vote_scraper.models import VotingSummary
from ar_vote_scraper.output import year_file
from ar_vote_scraper.registry import ProviderBundle
from ar_vote_scraper.session import BrowserSession

logger = logging.getLogger(__name__)


def _banner(text: str) -> None:
    logger.info("=" * 60)
    logger.info("  %s", text)
    logger.info("=" * 60)


def _fmt_elapsed(seconds: float) -> str:
    """Format elapsed seconds as 'Xm Ys' or 'X.Xs'."""
    if seconds >= 60:
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"
    return f"{seconds:.1f}s"


def run_listing(
    bundle: ProviderBundle,
    year: int,
    data_dir: Path = DATA_DIR,
    session_factory: Callable[[], BrowserSession] = BrowserSession,
) -> list[VotingSummary]:
    """Scrape the year's voting list and write ``<provider>/<year>.json``."""
    start = datetime.now()
    _banner(f"{bundle.label}: listing of year {year}")
    session = session_factory()
    try:
        session.start()
        scraper = bundle.scraper_cls(session, data_dir=data_dir)
        votings = scraper.parse_votings_from_year(year)
    finally:
        session.finish()
        elapsed = (datetime.now() - start).total_seconds()
        logger.info("END OF LISTING OF YEAR %s (%s)", year, _fmt_elapsed(elapsed))
    return votings


def run_details(
    bundle: ProviderBundle,
    year: int,
    data_dir: Path = DATA_DIR,
    session_factory: Callable[[], BrowserSession] = BrowserSession,
) -> list[VotingSummary]:
    """Enrich every voting of the year file and store the votes of each."""
    path = year_file(data_dir, bundle.provider.value, year)
    if not path.exists():
        raise FileNotFoundError(f"{path} does not exist; run the listing command first")

    start = datetime.now()
    _banner(f"{bundle.label}: details of year {year}")
    session = session_factory()
    try:
        session.start()
        scraper = bundle.scraper_cls(session, data_dir=data_dir)
        votings = scraper.parse_year_details(year)
    finally:
        session.finish()
        elapsed = (datetime.now() - start).total_seconds()
        logger.info("END OF DETAILS OF YEAR %s (%s)", year, _fmt_elapsed(elapsed))
    return votings


def run_import(
    bundle: ProviderBundle,
    year: int,
    only: Optional[Iterable[int]] = None,
    data_dir: Path = DATA_DIR,
    client: Optional[ApiClient] = None,
    save_records: Optional[bool] = None,
    save_votes: Optional[bool] = None,
) -> ImportSummary:
    """Send the year's stored data to the import API."""
    path = year_file(data_dir, bundle.provider.value, year)
    if not path.exists():
        raise FileNotFoundError(f"{path} does not exist; run the listing command first")
    owns_client = client is None
    if client is None:
        if not API_URI:
            raise ScraperError("API_URI is not configured")
        client = ApiClient()

    _banner(f"{bundle.label}: import of year {year}")
    importer = bundle.importer_cls(
        client, data_dir=data_dir, save_records=save_records, save_votes=save_votes
    )
    try:
        return importer.send_year(year, only=only)
    finally:
        if owns_client:
            client.close()
