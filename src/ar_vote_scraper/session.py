"""Browser lifecycle: one Chromium instance per command, one context per page."""

import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from ar_vote_scraper.config import DEVTOOLS, HEADLESS, SLOW_MO
from ar_vote_scraper.errors import BrowserStartError, PageCreationError
from ar_vote_scraper.log import page_console_logger

logger = logging.getLogger(__name__)


class BrowserSession:
    """Owns the Playwright driver and the browser for the duration of a command.

    Pages are created and closed serially; nothing here is thread-safe.
    """

    def __init__(
        self, headless: bool = HEADLESS, slow_mo: float = SLOW_MO, devtools: bool = DEVTOOLS
    ):
        self.headless = headless
        self.slow_mo = slow_mo
        self.devtools = devtools
        self._playwright = None
        self.browser = None

    def __enter__(self) -> "BrowserSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.finish()

    def start(self) -> None:
        """Launch the browser. Raises BrowserStartError on failure."""
        args = ["--auto-open-devtools-for-tabs"] if self.devtools else []
        try:
            self._playwright = sync_playwright().start()
            self.browser = self._playwright.chromium.launch(
                headless=self.headless,
                slow_mo=self.slow_mo,
                args=args,
            )
        except PlaywrightError as e:
            self._stop_driver()
            raise BrowserStartError(f"Could not launch the browser: {e}") from e

    def create_page(self) -> Page:
        """Open a page in a fresh browsing context with console forwarding."""
        if self.browser is None:
            raise PageCreationError("Browser not started")
        logger.info("Opening new page")
        try:
            context = self.browser.new_context(accept_downloads=True)
            page = context.new_page()
        except PlaywrightError as e:
            raise PageCreationError(f"Could not create a page: {e}") from e
        page.on("console", page_console_logger)
        return page

    @staticmethod
    def close_page(page: Page) -> None:
        """Close a page together with its browsing context."""
        try:
            page.context.close()
        except PlaywrightError as e:
            logger.warning("Could not close page: %s", e)

    def finish(self) -> None:
        """Release the browser. Safe to call when start() failed or never ran."""
        if self.browser is not None:
            try:
                self.browser.close()
            except PlaywrightError as e:
                logger.warning("Could not close the browser cleanly: %s", e)
            self.browser = None
        self._stop_driver()

    def _stop_driver(self) -> None:
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
