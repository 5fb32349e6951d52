"""
Company profile extractor: turns a parsed LinkedIn company about page into a
company profile record (about text, size, headquarters, website, etc.).

This module handles the HTML layer only — fetching and caching live in
linkedin_scraper. Each field has its own ordered selector chain; the first
selector that yields text wins, an exhausted chain leaves the field None.
"""

import re
import logging
from typing import Any, Callable, Dict, List, Optional

from bs4 import Tag

from linkedin_jobs.scraping.schema import create_company_profile_template
from linkedin_jobs.utils.text import clean_text

logger = logging.getLogger(__name__)

# Dedicated "about us" section, then alternate class-based layouts
_ABOUT_SECTION = 'section[data-test-id="about-us"]'
_ABOUT_SECTION_CONTENT = "p, div.core-section-container__content"
_ABOUT_SELECTORS = [
    ".about-us__description",
    ".org-about-module__description",
    ".company-about",
]

# dt/dd label for each field, plus the data-test-id fallback container
_DEFINITION_FIELDS = {
    "headquarters": (["Headquarters"], '[data-test-id="about-us__headquarters"] dd'),
    "industry": (["Industry", "Industries"], '[data-test-id="about-us__industry"] dd'),
    "founded": (["Founded"], '[data-test-id="about-us__foundedOn"] dd'),
    "specialties": (["Specialties"], '[data-test-id="about-us__specialties"] dd'),
}

_EMPLOYEE_COUNT_SELECTORS = [
    'dt:-soup-contains("Company size") + dd',
    'dt:-soup-contains("Employees") + dd',
    ".org-page-details__employees",
    '[data-test-id="about-us__size"] dd',
    '[data-test-id="about-us__size"]',
]

_WEBSITE_SELECTORS = [
    'dt:-soup-contains("Website") + dd a',
    '[data-test-id="about-us__website"] a',
]

_FOLLOWER_SELECTORS = [
    ".top-card-layout__first-subline",
    ".org-top-card-summary-info-list",
    ".top-card-layout__entity-info",
]

_CANONICAL_URL_SELECTORS = [
    ('link[rel="canonical"]', "href"),
    ('meta[property="og:url"]', "content"),
]

# First number in a size/follower string: "10,001+", "2.5K", "1.2M"
_COUNT_RE = re.compile(r"(\d[\d,]*(?:\.\d+)?)\s*([KkMm])?(?![A-Za-z])")
_FOLLOWERS_RE = re.compile(r"(\d[\d,]*(?:\.\d+)?\s*[KkMm]?)\s+followers", re.IGNORECASE)

_MULTIPLIERS = {"k": 1_000, "m": 1_000_000}


def clean_employee_count(text: Optional[str]) -> Optional[str]:
    """
    Reduce a size string to the digits of its first number.

    Examples:
        "10,001+ employees" -> "10001"
        "51-200 employees"  -> "51"
        "2.5K employees"    -> "2500"
        "Self-employed"     -> "Self-employed" (no number, kept as-is)
    """
    text = clean_text(text)
    if text is None:
        return None

    match = _COUNT_RE.search(text)
    if not match:
        return text

    number = match.group(1).replace(",", "")
    suffix = match.group(2)
    if suffix:
        value = float(number) * _MULTIPLIERS[suffix.lower()]
        return str(int(round(value)))
    return number.split(".")[0]


def _first_text(soup: Tag, selectors: List[str]) -> Optional[str]:
    for selector in selectors:
        for element in soup.select(selector):
            text = clean_text(element.get_text())
            if text:
                return text
    return None


def _first_attr(soup: Tag, selectors: List[tuple]) -> Optional[str]:
    for selector, attr in selectors:
        element = soup.select_one(selector)
        if element is not None:
            value = clean_text(element.get(attr))
            if value:
                return value
    return None


def extract_about(soup: Tag) -> Optional[str]:
    section = soup.select_one(_ABOUT_SECTION)
    if section is not None:
        parts = [clean_text(el.get_text()) for el in section.select(_ABOUT_SECTION_CONTENT)]
        text = clean_text(" ".join(p for p in parts if p))
        if text:
            return text
    return _first_text(soup, _ABOUT_SELECTORS)


def extract_employee_count(soup: Tag) -> Optional[str]:
    return clean_employee_count(_first_text(soup, _EMPLOYEE_COUNT_SELECTORS))


def extract_definition(soup: Tag, field: str) -> Optional[str]:
    """Text of the <dd> following a labelled <dt>, with a data-test-id fallback."""
    labels, fallback = _DEFINITION_FIELDS[field]
    selectors = [f'dt:-soup-contains("{label}") + dd' for label in labels]
    selectors.append(fallback)
    return _first_text(soup, selectors)


def extract_website(soup: Tag) -> Optional[str]:
    return _first_attr(soup, [(selector, "href") for selector in _WEBSITE_SELECTORS])


def extract_specialties(soup: Tag) -> Optional[List[str]]:
    """Comma-separated specialties as a list; None instead of []."""
    text = extract_definition(soup, "specialties")
    if not text:
        return None
    specialties = [s.strip() for s in text.split(",")]
    specialties = [s for s in specialties if s]
    return specialties or None


def extract_followers(soup: Tag) -> Optional[str]:
    for selector in _FOLLOWER_SELECTORS:
        for element in soup.select(selector):
            match = _FOLLOWERS_RE.search(element.get_text(" "))
            if match:
                return clean_employee_count(match.group(1))
    return None


def extract_linkedin_url(soup: Tag) -> Optional[str]:
    url = _first_attr(soup, _CANONICAL_URL_SELECTORS)
    if url:
        return url.split("?")[0]
    return None


# Field name -> extractor, evaluated in schema order
_FIELD_EXTRACTORS: Dict[str, Callable[[Tag], Any]] = {
    "about": extract_about,
    "employee_count": extract_employee_count,
    "headquarters": lambda soup: extract_definition(soup, "headquarters"),
    "website": extract_website,
    "industry": lambda soup: extract_definition(soup, "industry"),
    "founded": lambda soup: extract_definition(soup, "founded"),
    "specialties": extract_specialties,
    "followers": extract_followers,
    "linkedin_url": extract_linkedin_url,
}


def extract_company_profile(soup: Tag) -> Dict[str, Any]:
    """
    Build a company profile from a parsed company about page.

    Every field is independently nullable; a page with none of the expected
    markup yields an all-None profile, not an error.
    """
    if soup is None:
        raise ValueError("extract_company_profile() needs a parsed company page")

    profile = create_company_profile_template()
    for field, extractor in _FIELD_EXTRACTORS.items():
        profile[field] = extractor(soup)
    return profile


def is_profile_useful(profile: Optional[Dict[str, Any]]) -> bool:
    """A profile is worth caching only if it has about text or a size."""
    if not profile:
        return False
    return bool(profile.get("about") or profile.get("employee_count"))
