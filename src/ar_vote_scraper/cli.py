"""Command-line interface for the Argentine Congress vote scraper."""

import argparse
import logging
from datetime import date
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError

from ar_vote_scraper.commands import run_details, run_import, run_listing
from ar_vote_scraper.config import DATA_DIR, LOG_DIR
from ar_vote_scraper.errors import ScraperError, UnknownProviderError
from ar_vote_scraper.log import setup_logging
from ar_vote_scraper.registry import provider_tokens, resolve_provider

logger = logging.getLogger("ar_vote_scraper.cli")


def _years(args: argparse.Namespace) -> list[int]:
    until = getattr(args, "until", None)
    if until is None or until < args.year:
        return [args.year]
    return list(range(args.year, until + 1))


def build_parser() -> argparse.ArgumentParser:
    current_year = date.today().year
    parser = argparse.ArgumentParser(
        prog="ar-vote-scraper",
        description="Scrape roll call votes from the Argentine Congress websites.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR,
        help=f"Root directory for scraped files (default: {DATA_DIR})",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=LOG_DIR,
        help=f"Directory for combined.log and error.log (default: {LOG_DIR})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")

    commands = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "provider",
            help=f"Chamber to work on: {', '.join(provider_tokens())}",
        )
        sub.add_argument(
            "year",
            nargs="?",
            type=int,
            default=current_year,
            help=f"Year of the votings (default: {current_year})",
        )

    listing = commands.add_parser(
        "listing",
        aliases=["listado"],
        help="Download the list of votings of a year",
    )
    add_common(listing)
    listing.add_argument("--until", type=int, default=None, help="Last year of a year range")
    listing.set_defaults(command="listing")

    details = commands.add_parser(
        "details",
        aliases=["detalles"],
        help="Download the details and votes of every voting of a year",
    )
    add_common(details)
    details.add_argument("--until", type=int, default=None, help="Last year of a year range")
    details.set_defaults(command="details")

    importer = commands.add_parser(
        "import",
        aliases=["importar"],
        help="Send everything downloaded for a year to the API",
    )
    add_common(importer)
    importer.add_argument(
        "ids",
        nargs="*",
        type=int,
        help="Only send the votings with these ids",
    )
    importer.add_argument("--no-records", action="store_true", help="Do not send bill records")
    importer.add_argument("--no-votes", action="store_true", help="Do not send individual votes")
    importer.set_defaults(command="import")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_dir, logging.DEBUG if args.verbose else logging.INFO)

    try:
        bundle = resolve_provider(args.provider)
    except UnknownProviderError as e:
        parser.error(str(e))

    try:
        if args.command == "listing":
            for year in _years(args):
                run_listing(bundle, year, data_dir=args.data_dir)
        elif args.command == "details":
            for year in _years(args):
                run_details(bundle, year, data_dir=args.data_dir)
        else:
            run_import(
                bundle,
                args.year,
                only=args.ids,
                data_dir=args.data_dir,
                save_records=False if args.no_records else None,
                save_votes=False if args.no_votes else None,
            )
    except (ScraperError, PlaywrightError, FileNotFoundError) as e:
        logger.error("A general error occurred during the process: %s", e)
        raise SystemExit(1) from e
