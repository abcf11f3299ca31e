"""
Tests for the listing/details/import commands in commands.py.

The end-to-end test drives the Senate provider through all three commands
against fixture pages and a recording API client.

Run: uv run pytest tests/test_commands.py -v
"""

import pytest
from fakes import FakeClient, FakePage, FakeSession
from html_fixtures import DETAIL_PAGE, SENADORES_VOTES, senadores_listing, senadores_row

from ar_vote_scraper.commands import _fmt_elapsed, run_details, run_import, run_listing
from ar_vote_scraper.config import SENADORES_LISTING_URL, SENADORES_URL
from ar_vote_scraper.errors import ScraperError, YearNotFoundError
from ar_vote_scraper.output import load_vote_rows, load_votings, vote_rows_file, year_file
from ar_vote_scraper.registry import resolve_provider

SENATORS = "api/import/ar/senators"

# ── Fixtures ─────────────────────────────────────────────────────────────────


def _senate_pages() -> dict[str, str]:
    detail = DETAIL_PAGE.format(votes=SENADORES_VOTES)
    return {
        SENADORES_LISTING_URL: senadores_listing(
            [senadores_row(1, "AFIRMATIVO"), senadores_row(2, "NEGATIVO")]
        ),
        f"{SENADORES_URL}/votaciones/detalleActa/1": detail,
        f"{SENADORES_URL}/votaciones/detalleActa/2": detail,
    }


@pytest.fixture
def sessions():
    """Session factory that remembers every FakeSession it hands out."""
    created = []

    def factory():
        session = FakeSession(lambda: FakePage(pages=_senate_pages()))
        created.append(session)
        return session

    factory.created = created
    return factory


# ── End to end ───────────────────────────────────────────────────────────────


class TestSenateEndToEnd:
    def test_listing_details_import(self, tmp_path, sessions):
        bundle = resolve_provider("senadores")

        run_listing(bundle, 2019, data_dir=tmp_path, session_factory=sessions)
        votings = load_votings(year_file(tmp_path, "senadores", 2019))
        assert [(v.id, v.result) for v in votings] == [(1, "AFIRMATIVO"), (2, "NEGATIVO")]

        run_details(bundle, 2019, data_dir=tmp_path, session_factory=sessions)
        for voting_id in (1, 2):
            rows = load_vote_rows(vote_rows_file(tmp_path, "senadores", 2019, voting_id))
            assert [r.vote for r in rows] == ["AFIRMATIVO", "NEGATIVO"]
            assert {r.voting_id for r in rows} == {voting_id}
        enriched = load_votings(year_file(tmp_path, "senadores", 2019))
        assert [v.affirmative_count for v in enriched] == [128, 128]

        client = FakeClient()
        summary = run_import(bundle, 2019, data_dir=tmp_path, client=client)
        endpoints = client.endpoints()
        assert endpoints.count(f"{SENATORS}/voting") == 2
        assert len([e for e in endpoints if e.endswith("/votes")]) == 2
        assert len(endpoints) == 4
        assert summary.sent == 2
        assert client.closed is False

    def test_every_session_released(self, tmp_path, sessions):
        bundle = resolve_provider("senadores")
        run_listing(bundle, 2019, data_dir=tmp_path, session_factory=sessions)
        run_details(bundle, 2019, data_dir=tmp_path, session_factory=sessions)
        assert [(s.started, s.finished) for s in sessions.created] == [(True, True)] * 2


# ── Failure paths ────────────────────────────────────────────────────────────


class TestFailures:
    def test_listing_error_still_finishes_session(self, tmp_path, sessions):
        with pytest.raises(YearNotFoundError):
            run_listing(
                resolve_provider("senadores"), 1990, data_dir=tmp_path, session_factory=sessions
            )
        assert sessions.created[0].finished is True

    def test_details_needs_listing(self, tmp_path, sessions):
        with pytest.raises(FileNotFoundError, match="run the listing command first"):
            run_details(
                resolve_provider("diputados"), 2019, data_dir=tmp_path, session_factory=sessions
            )
        assert sessions.created == []

    def test_import_needs_listing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_import(resolve_provider("diputados"), 2019, data_dir=tmp_path, client=FakeClient())

    def test_import_needs_api_uri(self, tmp_path, sessions, monkeypatch):
        bundle = resolve_provider("senadores")
        run_listing(bundle, 2019, data_dir=tmp_path, session_factory=sessions)
        monkeypatch.setattr("ar_vote_scraper.commands.API_URI", "")
        with pytest.raises(ScraperError, match="API_URI"):
            run_import(bundle, 2019, data_dir=tmp_path)

    def test_import_closes_own_client(self, tmp_path, sessions, monkeypatch):
        bundle = resolve_provider("senadores")
        run_listing(bundle, 2019, data_dir=tmp_path, session_factory=sessions)
        clients = []

        def make_client():
            client = FakeClient()
            clients.append(client)
            return client

        monkeypatch.setattr("ar_vote_scraper.commands.API_URI", "https://api.example.org")
        monkeypatch.setattr("ar_vote_scraper.commands.ApiClient", make_client)
        run_import(bundle, 2019, data_dir=tmp_path)
        assert clients[0].closed is True


class TestFmtElapsed:
    def test_seconds(self):
        assert _fmt_elapsed(12.34) == "12.3s"

    def test_minutes(self):
        assert _fmt_elapsed(125) == "2m 5s"
