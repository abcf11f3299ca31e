"""HTTP client for the remote import API."""

import logging
from typing import Any

import requests

from ar_vote_scraper.config import API_TIMEOUT, API_TOKEN, API_URI, API_VERIFY_SSL, USER_AGENT

logger = logging.getLogger(__name__)


class ApiClient:
    """JSON-over-HTTP with bearer auth. Status codes are left to the caller."""

    def __init__(
        self,
        base_url: str = API_URI,
        token: str = API_TOKEN,
        timeout: float = API_TIMEOUT,
        verify: bool = API_VERIFY_SSL,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = requests.Session()
        self.http.verify = verify
        self.http.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Authorization": f"Bearer {token}",
                "User-Agent": USER_AGENT,
            }
        )

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(self, method: str, endpoint: str, payload: Any = None) -> requests.Response:
        url = self.url(endpoint)
        logger.debug("%s %s", method, url)
        return self.http.request(method, url, json=payload, timeout=self.timeout)

    def post(self, endpoint: str, payload: Any) -> requests.Response:
        return self.request("POST", endpoint, payload)

    def close(self) -> None:
        self.http.close()
