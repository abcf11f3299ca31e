"""Configuration constants for the Argentine Congress vote scraper.

Values that change between deployments come from the environment (a local
``.env`` file is loaded first, if present). Everything else is a constant.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


ENVIRONMENT = os.getenv("SCRAPER_ENV", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

# -- Remote import API ---------------------------------------------------------

API_URI = os.getenv("API_URI", "")
API_TOKEN = os.getenv("API_TOKEN", "")
API_VERIFY_SSL = _env_flag("API_VERIFY_SSL", True)
API_TIMEOUT = 30  # seconds

# -- Browser -------------------------------------------------------------------

HEADLESS = _env_flag("SCRAPER_HEADLESS", IS_PRODUCTION)
SLOW_MO = 0 if IS_PRODUCTION else 100  # ms between browser operations
DEVTOOLS = not IS_PRODUCTION and not HEADLESS

REVEAL_TIMEOUT = 5_000  # ms to wait for a bill record panel to appear
MAX_LISTING_PAGES = 500  # upper bound for the paginated listing loop
RESULTS_PER_PAGE = 100

# -- Sites ---------------------------------------------------------------------

DIPUTADOS_URL = "https://votaciones.hcdn.gob.ar"
SENADORES_URL = "https://www.senado.gov.ar"
SENADORES_LISTING_URL = f"{SENADORES_URL}/votaciones/actas"

# -- Local files ---------------------------------------------------------------

DATA_DIR = Path(os.getenv("SCRAPER_DATA_DIR", "data"))
LOG_DIR = Path(os.getenv("SCRAPER_LOG_DIR", "logs"))

USER_AGENT = (
    "ArVoteScraper/0.1 "
    "(Open data project; collecting public roll call vote data)"
)
