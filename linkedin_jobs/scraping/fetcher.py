"""
Page fetcher: the only module that talks to LinkedIn over HTTP.

Returns raw HTML (or a parsed BeautifulSoup tree); all extraction happens
elsewhere on the already-fetched document.
"""

import time
import random
import logging
from typing import Any, Dict, Optional

import requests
from bs4 import BeautifulSoup

from linkedin_jobs.errors import FetchError, JobNotFoundError
from linkedin_jobs.scraping.user_agent import UserAgentProvider

logger = logging.getLogger(__name__)

_BASE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}


class PageFetcher:
    """
    Fetches LinkedIn guest pages with user-agent rotation and retries.

    Retry policy per attempt:
      - 200: return the body
      - 404: raise JobNotFoundError at once (retrying will not help)
      - 429: exponential backoff, 2^attempt seconds plus jitter
      - anything else / transport error: linear backoff, `attempt` seconds
    """

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        min_delay: float = 0.0,
        max_delay: float = 0.0,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.min_delay = min_delay
        self.max_delay = max(min_delay, max_delay)
        self.session = session if session is not None else requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Close the underlying HTTP session."""
        try:
            self.session.close()
        except Exception as e:
            logger.warning(f"Error closing session: {e}")

    def get_headers(self) -> Dict[str, str]:
        """Browser-like request headers with a freshly rotated user agent."""
        headers = dict(_BASE_HEADERS)
        headers["User-Agent"] = UserAgentProvider.get_random()
        return headers

    def _polite_delay(self):
        """Respectful crawling delay."""
        if self.max_delay > 0:
            time.sleep(random.uniform(self.min_delay, self.max_delay))

    def fetch_html(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Fetch a page and return its body text.

        Raises:
            JobNotFoundError: the server answered 404
            FetchError: all attempts failed
        """
        self._polite_delay()
        last_status = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.get(
                    url, params=params, headers=self.get_headers(), timeout=self.timeout
                )
                last_status = response.status_code
                if response.status_code == 200:
                    return response.text
                if response.status_code == 404:
                    raise JobNotFoundError(url, "Page not found", status_code=404)
                if response.status_code == 429:
                    # Exponential backoff: 2, 4, 8 seconds...
                    wait_time = (2 ** attempt) + random.uniform(0, 1)
                    logger.warning(
                        f"Rate limited (429) on attempt {attempt} for {url}. "
                        f"Backing off for {wait_time:.1f}s"
                    )
                else:
                    wait_time = attempt
                    logger.warning(
                        f"HTTP {response.status_code} on attempt {attempt} for {url}"
                    )
            except requests.RequestException as e:
                wait_time = attempt
                logger.warning(f"Request error on attempt {attempt} for {url}: {e}")

            if attempt < self.max_retries:
                time.sleep(wait_time)

        logger.error(f"Failed to fetch {url} after {self.max_retries} attempts")
        raise FetchError(
            url,
            f"Failed to fetch page after {self.max_retries} attempts",
            status_code=last_status,
        )

    def fetch_page(self, url: str, params: Optional[Dict[str, Any]] = None) -> BeautifulSoup:
        """Fetch a page and parse it."""
        return BeautifulSoup(self.fetch_html(url, params=params), "html.parser")
