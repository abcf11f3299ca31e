"""JSON/text persistence for scraped voting data.

Layout under the data directory, per provider::

    <provider>/<year>.json                      voting summaries
    <provider>/records/<year>-records.json      flattened bill records
    <provider>/votes/<year>/<voting_id>.json    vote rows (table scrape)
    <provider>/votes/<voting_id>/<file>.csv     vote rows (site CSV export)
"""

import json
from pathlib import Path
from typing import Any

from ar_vote_scraper.models import BillRecord, VoteRow, VotingSummary

IGNORED_FILES = {".DS_Store"}


# -- Paths ---------------------------------------------------------------------


def year_file(data_dir: Path, provider: str, year: int) -> Path:
    return data_dir / provider / f"{year}.json"


def records_file(data_dir: Path, provider: str, year: int) -> Path:
    return data_dir / provider / "records" / f"{year}-records.json"


def vote_rows_file(data_dir: Path, provider: str, year: int, voting_id: int) -> Path:
    return data_dir / provider / "votes" / str(year) / f"{voting_id}.json"


def votes_download_dir(data_dir: Path, provider: str, voting_id: int) -> Path:
    return data_dir / provider / "votes" / str(voting_id)


# -- Generic helpers -----------------------------------------------------------


def write_json(path: Path, data: Any) -> Path:
    """Write pretty-printed JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_text(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def list_files(directory: Path) -> list[str]:
    """File names in ``directory``, sorted; empty when it does not exist."""
    if not directory.is_dir():
        return []
    return sorted(
        p.name for p in directory.iterdir() if p.is_file() and p.name not in IGNORED_FILES
    )


def read_first_file(directory: Path) -> str:
    """Return the text of the first file in ``directory``."""
    files = list_files(directory)
    if not files:
        raise FileNotFoundError(f"No files in folder {directory}")
    return (directory / files[0]).read_text(encoding="utf-8")


# -- Domain files --------------------------------------------------------------


def save_votings(path: Path, votings: list[VotingSummary]) -> Path:
    return write_json(path, [v.to_dict() for v in votings])


def load_votings(path: Path) -> list[VotingSummary]:
    return [VotingSummary.from_dict(item) for item in read_json(path)]


def save_records(path: Path, votings: list[VotingSummary]) -> Path:
    """Write every voting's bill records as one flat list."""
    records: list[BillRecord] = [r for v in votings for r in v.records]
    return write_json(path, [r.to_dict() for r in records])


def save_vote_rows(path: Path, rows: list[VoteRow]) -> Path:
    return write_json(path, [r.to_dict() for r in rows])


def load_vote_rows(path: Path) -> list[VoteRow]:
    return [VoteRow.from_dict(item) for item in read_json(path)]
