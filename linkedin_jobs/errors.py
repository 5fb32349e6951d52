"""
Exception hierarchy for the scraper and its REST layer.

Extraction never raises for data-shape reasons (missing markup degrades to
None). These errors cover transport failures and caller input only.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors."""


class FetchError(ScraperError):
    """A page could not be fetched after all retries."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class JobNotFoundError(FetchError):
    """LinkedIn answered 404 for a job page."""


class InvalidJobIdError(ScraperError):
    """Caller supplied an empty or whitespace-only job ID."""
