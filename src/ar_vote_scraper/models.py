"""Data classes for voting records.

Attributes are snake_case in Python and camelCase in the persisted JSON
(``affirmative_count`` <-> ``affirmativeCount``).
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_dict(obj) -> dict[str, Any]:
    return {_camel(f.name): getattr(obj, f.name) for f in fields(obj)}


def _from_dict(cls, data: dict[str, Any], skip: tuple[str, ...] = ()) -> dict[str, Any]:
    """Collect constructor kwargs from a camelCase dict, ignoring unknown keys."""
    kwargs = {}
    for f in fields(cls):
        if f.name in skip:
            continue
        key = _camel(f.name)
        if key in data:
            kwargs[f.name] = data[key]
    return kwargs


@dataclass
class BillRecord:
    """A bill/file ("expediente") attached to a voting."""

    id: str
    title: str
    voting_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BillRecord":
        return cls(**_from_dict(cls, data))


@dataclass
class VoteRow:
    """One legislator's vote within one voting."""

    legislator: str
    party: str
    region: str
    vote: str  # AFIRMATIVO, NEGATIVO, ABSTENCION, AUSENTE (site token, kept verbatim)
    photo_url: Optional[str] = None
    video_url: Optional[str] = None
    legislator_id: Optional[str] = None
    profile_url: Optional[str] = None
    date: Optional[str] = None
    voting_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VoteRow":
        return cls(**_from_dict(cls, data))


@dataclass
class VotingSummary:
    """One recorded vote event, as listed and later enriched from its detail page."""

    id: int
    date: Optional[str]
    title: str
    type: str
    result: str
    details_url: Optional[str] = None
    record_url: Optional[str] = None
    video_url: Optional[str] = None
    file_url: Optional[str] = None
    records: list[BillRecord] = field(default_factory=list)
    # Filled in by the detail extractor
    period: Optional[int] = None
    meeting: Optional[int] = None
    record: Optional[int] = None
    president: Optional[str] = None
    affirmative_count: Optional[int] = None
    negative_count: Optional[int] = None
    abstention_count: Optional[int] = None
    absent_count: Optional[int] = None
    document_url: Optional[str] = None

    DETAIL_FIELDS = (
        "period",
        "meeting",
        "record",
        "president",
        "affirmative_count",
        "negative_count",
        "abstention_count",
        "absent_count",
        "document_url",
    )

    # Detail fields that the listing may already have filled in
    LISTING_FIELDS = ("record",)

    def to_dict(self) -> dict[str, Any]:
        data = _to_dict(self)
        data["records"] = [r.to_dict() for r in self.records]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VotingSummary":
        kwargs = _from_dict(cls, data, skip=("records",))
        # Files written before the rename stored the detail path as "url"
        if "details_url" not in kwargs and "url" in data:
            kwargs["details_url"] = data["url"]
        kwargs["id"] = int(kwargs["id"])
        kwargs.setdefault("date", None)
        kwargs.setdefault("title", "")
        kwargs.setdefault("type", "")
        kwargs.setdefault("result", "")
        records = [BillRecord.from_dict(r) for r in data.get("records") or []]
        return cls(records=records, **kwargs)

    def apply_details(self, details: dict[str, Any]) -> None:
        """Overwrite the detail fields with freshly scraped values.

        Every detail field is reset, so a value missing from ``details`` ends
        up as None rather than keeping what a previous run stored. Fields the
        listing also fills (the Senate acta number) keep their value when the
        detail page has none.
        """
        for name in self.DETAIL_FIELDS:
            value = details.get(name)
            if value is None and name in self.LISTING_FIELDS:
                continue
            setattr(self, name, value)

    def payload(self) -> dict[str, Any]:
        """Body for the remote "create voting" call; records travel separately."""
        data = self.to_dict()
        data.pop("records")
        return data
