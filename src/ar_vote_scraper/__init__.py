"""Argentine Congress Vote Scraper - scrape roll call votes from hcdn.gob.ar and senado.gov.ar."""

__version__ = "0.1.0"

from ar_vote_scraper.models import BillRecord as BillRecord
from ar_vote_scraper.models import VoteRow as VoteRow
from ar_vote_scraper.models import VotingSummary as VotingSummary
from ar_vote_scraper.registry import Provider as Provider
from ar_vote_scraper.registry import resolve_provider as resolve_provider
from ar_vote_scraper.session import BrowserSession as BrowserSession
