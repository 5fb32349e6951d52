"""
LinkedIn Jobs Scraper

Orchestrates the fetch → parse → extract → enrich flow behind the REST API
and the batch pipeline.

Phases:
  1. Search: fetch one results page, extract the top-N listing cards
  2. Detail: fetch a job view page, extract the full record
  3. (Optional) Enrich: fetch company about pages, merge company profiles
  4. (Optional) Estimate: fill in a salary estimate when none is posted

Extraction is done by the pure functions in job_extractor and
company_extractor; this module owns HTTP, caching and concurrency.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from linkedin_jobs.config.settings import Settings, settings as default_settings
from linkedin_jobs.errors import InvalidJobIdError, ScraperError
from linkedin_jobs.preprocessing.salary_estimator import estimate_salary
from linkedin_jobs.scraping.company_extractor import (
    extract_company_profile,
    is_profile_useful,
)
from linkedin_jobs.scraping.fetcher import PageFetcher
from linkedin_jobs.scraping.job_extractor import (
    JOB_VIEW_URL,
    extract_detail,
    extract_summary,
    has_required_fields,
)
from linkedin_jobs.utils.cache import TTLCache
from linkedin_jobs.utils.job_id import is_ascii_digits, resolve_job_id

logger = logging.getLogger(__name__)

# Listing cards, tried in order
_CARD_SELECTORS = [".base-card.job-search-card", "li > .base-card"]
_TOTAL_RESULTS_SELECTOR = ".results-context-header__job-count"

# Search filter values → LinkedIn query parameters
DATE_POSTED_FILTERS = {
    "past_24h": "r86400",
    "past_week": "r604800",
    "past_month": "r2592000",
}
JOB_TYPE_FILTERS = {
    "full_time": "F",
    "part_time": "P",
    "contract": "C",
    "temporary": "T",
    "internship": "I",
    "volunteer": "V",
}
EXPERIENCE_LEVEL_FILTERS = {
    "internship": "1",
    "entry_level": "2",
    "associate": "3",
    "mid_senior": "4",
    "director": "5",
    "executive": "6",
}
REMOTE_FILTER = "2"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class LinkedInScraper:
    """
    Search, detail and enrichment operations over LinkedIn's guest pages,
    with a shared response cache.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        fetcher: Optional[PageFetcher] = None,
        cache: Optional[TTLCache] = None,
    ):
        """
        Initialize the scraper.

        Args:
            config: Settings instance (defaults to the module-level settings)
            fetcher: Page fetcher; one is built from config when omitted
            cache: Response cache; one is built from config when omitted
        """
        self.config = config or default_settings
        self.fetcher = fetcher or PageFetcher(
            timeout=self.config.REQUEST_TIMEOUT,
            max_retries=self.config.MAX_RETRIES,
            min_delay=self.config.MIN_DELAY,
            max_delay=self.config.MAX_DELAY,
        )
        self.cache = cache or TTLCache(ttl=self.config.CACHE_TTL)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit: cleanup resources."""
        self.close()
        return False

    def close(self):
        """Close the fetcher session."""
        self.fetcher.close()
        logger.info("Session closed successfully")

    # ── Phase 1: Search ──────────────────────────────────────

    def build_search_params(
        self,
        keywords: str,
        location: str = "",
        remote: bool = False,
        date_posted: Optional[str] = None,
        job_type: Optional[str] = None,
        experience_level: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Query parameters for the search page. Unknown filter values are ignored."""
        params: Dict[str, Any] = {
            "keywords": keywords,
            "location": location,
            "start": 0,
        }
        if remote:
            params["f_WT"] = REMOTE_FILTER
        if date_posted in DATE_POSTED_FILTERS:
            params["f_TPR"] = DATE_POSTED_FILTERS[date_posted]
        if job_type in JOB_TYPE_FILTERS:
            params["f_JT"] = JOB_TYPE_FILTERS[job_type]
        if experience_level in EXPERIENCE_LEVEL_FILTERS:
            params["f_E"] = EXPERIENCE_LEVEL_FILTERS[experience_level]
        return params

    def parse_search_results(self, soup: BeautifulSoup, limit: int) -> List[Dict[str, Any]]:
        """
        Extract job summaries from a search results page.

        Cards missing a title, company or id are dropped, as are repeats of
        an id already seen on the page.
        """
        cards = []
        for selector in _CARD_SELECTORS:
            cards = soup.select(selector)
            if cards:
                break

        if not cards:
            logger.info("No listing cards found.")
            return []

        jobs = []
        seen_ids = set()
        for card in cards:
            summary = extract_summary(card)
            if not has_required_fields(summary):
                logger.debug(f"  Skipping incomplete card: {summary.get('link')}")
                continue
            if summary["id"] in seen_ids:
                continue
            seen_ids.add(summary["id"])
            jobs.append(summary)
            if len(jobs) >= limit:
                break

        return jobs

    @staticmethod
    def parse_total_results(soup: BeautifulSoup) -> Optional[int]:
        element = soup.select_one(_TOTAL_RESULTS_SELECTOR)
        if element is None:
            return None
        digits = re.sub(r"[^0-9]", "", element.get_text())
        return int(digits) if digits else None

    def search_jobs(
        self,
        keywords: str,
        location: str = "",
        remote: bool = False,
        limit: int = 25,
        enrich_companies: bool = False,
        date_posted: Optional[str] = None,
        job_type: Optional[str] = None,
        experience_level: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Search LinkedIn jobs and return the top `limit` summaries.

        There is no pagination: one results page is fetched and at most
        MAX_RESULTS jobs are returned.

        Raises:
            FetchError: the results page could not be fetched
        """
        limit = max(1, min(limit, self.config.MAX_RESULTS))
        enrich = enrich_companies and self.config.ENABLE_COMPANY_ENRICHMENT
        params = self.build_search_params(
            keywords, location, remote, date_posted, job_type, experience_level
        )

        cache_key = (
            f"jobs:{self.config.JOBS_SEARCH_URL}:"
            f"{sorted(params.items())}:{limit}:{enrich}"
        )
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Cache hit for: {cache_key}")
            cached["cache_hit"] = True
            return cached

        logger.info(f"Searching LinkedIn: '{keywords}' in '{location}' (limit {limit})")
        soup = self.fetcher.fetch_page(self.config.JOBS_SEARCH_URL, params=params)

        jobs = self.parse_search_results(soup, limit)
        logger.info(f"Search complete: {len(jobs)} listings extracted.")

        result = {
            "success": True,
            "total_results": self.parse_total_results(soup),
            "count": len(jobs),
            "jobs": jobs,
            "search_params": {
                "keywords": keywords,
                "location": location,
                "remote": remote,
                "limit": limit,
                "enrich_companies": enrich,
                "date_posted": date_posted,
                "job_type": job_type,
                "experience_level": experience_level,
            },
            "timestamp": _now_iso(),
            "cache_hit": False,
        }

        if enrich:
            self.enrich_jobs(jobs)
            result["enriched_companies"] = sum(1 for job in jobs if job.get("company_details"))

        self.cache.set(cache_key, result)
        return result

    # ── Phase 2: Detail ──────────────────────────────────────

    @staticmethod
    def normalize_job_id(job_id: Optional[str]) -> str:
        """
        Validate a caller-supplied job ID.

        Digit strings are used unchanged so IDs from search results round-trip;
        URLs and URNs are resolved to their numeric ID.

        Raises:
            InvalidJobIdError: the ID is empty or whitespace
        """
        raw = (job_id or "").strip()
        if not raw:
            raise InvalidJobIdError("Job ID is required")
        if is_ascii_digits(raw):
            return raw
        return resolve_job_id(raw, raw)

    def get_job_details(
        self,
        job_id: str,
        enrich_company: bool = False,
        estimate_salary: bool = False,
    ) -> Dict[str, Any]:
        """
        Fetch and extract one job view page.

        Raises:
            InvalidJobIdError: blank job ID
            JobNotFoundError: LinkedIn answered 404
            FetchError: the page could not be fetched
        """
        job_id = self.normalize_job_id(job_id)
        enrich = enrich_company and self.config.ENABLE_COMPANY_ENRICHMENT

        cache_key = f"job:{job_id}:{enrich}:{estimate_salary}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Cache hit for: {cache_key}")
            cached["cache_hit"] = True
            return cached

        url = JOB_VIEW_URL.format(job_id=job_id)
        logger.info(f"Fetching job details: {url}")
        soup = self.fetcher.fetch_page(url)

        detail = extract_detail(soup, job_id)
        detail["timestamp"] = _now_iso()
        detail["cache_hit"] = False

        if estimate_salary and detail["salary"] is None:
            detail["salary"] = self._estimate(detail)

        if enrich and detail["company_link"]:
            company = self.fetch_company_profile(detail["company_link"])
            if company:
                detail["company_details"] = company

        if detail["title"]:
            self.cache.set(cache_key, detail)
        return detail

    @staticmethod
    def _estimate(detail: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return estimate_salary(
            detail.get("title"),
            location=detail.get("location"),
            seniority_label=detail.get("seniority_level"),
        )

    # ── Phase 3: Company Enrichment ──────────────────────────

    def _normalize_company_url(self, company_url: str) -> str:
        """Normalize company URL to LinkedIn about page format."""
        base = company_url.split("?")[0]
        if not base.startswith("http"):
            base = self.config.LINKEDIN_BASE_URL + base
        if "/about" not in base:
            base = base.rstrip("/") + "/about/"
        return base

    def fetch_company_profile(self, company_url: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Fetch and extract a company about page.

        Returns the profile (possibly all-None), or None when the URL is not a
        company page or the fetch failed. Only profiles with about text or an
        employee count are cached.
        """
        if not company_url or "/company/" not in company_url:
            return None

        cache_key = f"company:{company_url}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        target_url = self._normalize_company_url(company_url)
        logger.info(f"    Fetching company: {target_url}")
        try:
            soup = self.fetcher.fetch_page(target_url)
        except ScraperError as e:
            logger.warning(f"      Company fetch failed: {e}")
            return None

        profile = extract_company_profile(soup)
        if is_profile_useful(profile):
            self.cache.set(cache_key, profile)
        else:
            logger.warning(f"      No company data extracted from {target_url}")
        return profile

    def _enrich_one(self, job: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return self.fetch_company_profile(job.get("company_link"))
        except Exception as e:
            logger.warning(f"      Enrichment failed for job {job.get('id')}: {e}")
            return None

    def enrich_jobs(self, jobs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Add company_details to each job whose company page could be scraped.

        Company pages are fetched concurrently; one failure leaves only that
        job without company_details.
        """
        targets = [job for job in jobs if job.get("company_link")]
        if not targets:
            return jobs

        logger.info(f"Enriching {len(targets)} jobs with company profiles")
        workers = max(1, min(self.config.ENRICHMENT_WORKERS, len(targets)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            profiles = list(pool.map(self._enrich_one, targets))

        for job, profile in zip(targets, profiles):
            if profile:
                job["company_details"] = profile
        return jobs
