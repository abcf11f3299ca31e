"""Forward persisted votings, bill records and votes to the remote import API."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

import requests
from tqdm import tqdm

from ar_vote_scraper.api import ApiClient
from ar_vote_scraper.config import DATA_DIR
from ar_vote_scraper.errors import Action, Outcome
from ar_vote_scraper.models import VotingSummary
from ar_vote_scraper.output import load_votings, year_file

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """Tally of one ``send_year`` run."""

    sent: int = 0
    unexpected: int = 0  # result token not recognised
    filtered: int = 0  # not in the id allow-list
    failed: int = 0  # voting creation failed
    partial: list[int] = field(default_factory=list)  # created, but a sub-resource failed


class VoteImporter:
    """Pushes one chamber's year of data to the API.

    Nothing is de-duplicated against the remote side: re-running creates the
    votings again, so reruns should pass an id filter.
    """

    name = ""
    endpoint = ""
    accepted_results: frozenset[str] = frozenset()
    votes_collection = "voting"  # path segment of the votes sub-resource
    save_records = True
    save_votes = True

    def __init__(
        self,
        client: ApiClient,
        data_dir: Path = DATA_DIR,
        save_records: Optional[bool] = None,
        save_votes: Optional[bool] = None,
    ):
        self.client = client
        self.data_dir = data_dir
        if save_records is not None:
            self.save_records = save_records
        if save_votes is not None:
            self.save_votes = save_votes

    def load_votes(self, voting: VotingSummary, year: int) -> Any:
        """Body of the votes sub-resource call for ``voting``."""
        raise NotImplementedError

    def send_year(self, year: int, only: Optional[Iterable[int]] = None) -> ImportSummary:
        """Send every voting of ``year``, or only the ids in ``only`` when given."""
        votings = load_votings(year_file(self.data_dir, self.name, year))
        only_ids = {int(i) for i in only or ()}
        summary = ImportSummary()

        for voting in tqdm(votings, desc=f"Import {year}", unit="voting"):
            if voting.result not in self.accepted_results:
                logger.error(
                    "Voting #%s does not have an expected result: %s", voting.id, voting.result
                )
                summary.unexpected += 1
                continue
            if only_ids and voting.id not in only_ids:
                summary.filtered += 1
                continue

            outcome = self.send_voting(voting, year)
            if outcome.action is Action.ABORT:
                summary.failed += 1
                continue
            summary.sent += 1
            if outcome.action is Action.SKIP:
                summary.partial.append(voting.id)

        logger.info(
            "Import %s finished: %d sent, %d failed, %d unexpected result, %d filtered out",
            year,
            summary.sent,
            summary.failed,
            summary.unexpected,
            summary.filtered,
        )
        if summary.partial:
            logger.warning("Votings with incomplete sub-resources: %s", summary.partial)
        return summary

    def send_voting(self, voting: VotingSummary, year: int) -> Outcome:
        """Create the voting, then its records and votes.

        ABORT when the voting itself was not created, SKIP when it was but a
        sub-resource failed, CONTINUE when everything went through.
        """
        voting_endpoint = f"{self.endpoint}/voting"
        response = self._post(voting_endpoint, voting.payload(), voting)
        if response is None or response.status_code >= 400:
            logger.error("Creating voting #%s failed", voting.id)
            return Outcome.abort(f"voting #{voting.id} not created")

        try:
            remote_id = response.json()["id"]
        except (ValueError, KeyError, TypeError):
            logger.error("Voting #%s created but the response has no id", voting.id)
            return Outcome.abort(f"voting #{voting.id} has no remote id")

        complete = True
        if self.save_records and voting.records:
            records_endpoint = f"{self.endpoint}/voting/{remote_id}/records"
            payload = [r.to_dict() for r in voting.records]
            if not self._post_ok(records_endpoint, payload, voting):
                logger.error("Creating the records of voting #%s failed", voting.id)
                complete = False

        if self.save_votes:
            votes_endpoint = f"{self.endpoint}/{self.votes_collection}/{remote_id}/votes"
            try:
                votes = self.load_votes(voting, year)
            except FileNotFoundError as e:
                logger.error("No votes stored for voting #%s: %s", voting.id, e)
                complete = False
            else:
                if not self._post_ok(votes_endpoint, votes, voting):
                    logger.error("Registering the votes of voting #%s failed", voting.id)
                    complete = False

        if not complete:
            return Outcome.skip(f"voting #{voting.id} sub-resources incomplete")
        return Outcome.ok()

    def _post(
        self, endpoint: str, payload: Any, voting: VotingSummary
    ) -> Optional[requests.Response]:
        try:
            response = self.client.post(endpoint, payload)
        except requests.RequestException as e:
            logger.error("POST %s for voting #%s failed: %s", endpoint, voting.id, e)
            return None
        logger.info("%s %s %s %s", response.status_code, response.reason, voting.id, endpoint)
        return response

    def _post_ok(self, endpoint: str, payload: Any, voting: VotingSummary) -> bool:
        response = self._post(endpoint, payload, voting)
        return response is not None and response.status_code < 400
