"""Error taxonomy and per-item outcomes.

Fatal errors (browser launch, page creation, unknown provider, missing year
option) are raised and abort the whole command. Recoverable conditions at the
per-voting and per-summary level are reported as an :class:`Outcome`.
"""

from dataclasses import dataclass
from enum import Enum


class ScraperError(Exception):
    """Base class for every error raised by this package."""


class BrowserStartError(ScraperError):
    """The browser could not be launched."""


class PageCreationError(ScraperError):
    """A new browsing context or page could not be opened."""


class UnknownProviderError(ScraperError, ValueError):
    """The provider token does not name a registered chamber."""


class OptionNotFoundError(ScraperError):
    """A <select> control does not offer the requested option."""


class YearNotFoundError(OptionNotFoundError):
    """The year selector on the listing page does not offer the year."""

    def __init__(self, year: int):
        super().__init__(f"The year {year} is not an available option")
        self.year = year


class MissingFieldError(ScraperError):
    """An expected node is absent from the page snapshot."""

    def __init__(self, field: str, selector: str = ""):
        message = f"Missing field '{field}'"
        if selector:
            message += f" (selector: {selector})"
        super().__init__(message)
        self.field = field
        self.selector = selector


class AlreadyDownloadedError(ScraperError):
    """The votes download folder already holds a file."""


class Action(str, Enum):
    CONTINUE = "continue"
    SKIP = "skip"
    ABORT = "abort"


@dataclass(frozen=True)
class Outcome:
    """Result of one per-item step: carry on, skip this item, or give up on it."""

    action: Action
    reason: str = ""

    @classmethod
    def ok(cls) -> "Outcome":
        return cls(Action.CONTINUE)

    @classmethod
    def skip(cls, reason: str) -> "Outcome":
        return cls(Action.SKIP, reason)

    @classmethod
    def abort(cls, reason: str) -> "Outcome":
        return cls(Action.ABORT, reason)

    @property
    def is_ok(self) -> bool:
        return self.action is Action.CONTINUE
