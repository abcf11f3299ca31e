"""Logging setup: console plus ``combined.log`` and ``error.log`` files."""

import logging
import sys
from pathlib import Path

from ar_vote_scraper.config import IS_PRODUCTION, LOG_DIR

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Noise the sites emit on every page load (missing images, trackers)
BENIGN_CONSOLE_TEXT = "Failed to load resource"

page_logger = logging.getLogger("ar_vote_scraper.page")


def setup_logging(log_dir: Path = LOG_DIR, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    logger = logging.getLogger("ar_vote_scraper")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    log_dir.mkdir(parents=True, exist_ok=True)
    combined = logging.FileHandler(log_dir / "combined.log", encoding="utf-8")
    combined.setLevel(logging.INFO)
    combined.setFormatter(formatter)
    logger.addHandler(combined)

    errors = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
    errors.setLevel(logging.ERROR)
    errors.setFormatter(formatter)
    logger.addHandler(errors)

    return logger


def page_console_logger(message, production: bool = IS_PRODUCTION) -> None:
    """Forward a browser console message (Playwright ``ConsoleMessage``) to the log."""
    text = message.text
    if not production and BENIGN_CONSOLE_TEXT in text:
        return
    kind = message.type
    if kind == "error":
        page_logger.error("PAGE LOG: %s", text)
    elif kind == "warning":
        page_logger.warning("PAGE LOG: %s", text)
    else:
        page_logger.info("PAGE LOG: %s", text)
