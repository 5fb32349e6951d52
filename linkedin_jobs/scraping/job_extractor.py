"""
Job record extractor: turns LinkedIn listing cards and job view pages into
job summary / job detail records.

This module works on already-parsed documents only: no HTTP, no caching.
Every field degrades to None when its markup is missing; nothing here raises
because of page shape. The selectors are a contract with LinkedIn's guest
page layout and are kept together at the top of the module.
"""

import re
import uuid
import logging
from typing import Any, Dict, List, Optional

from bs4 import Tag

from linkedin_jobs.scraping.schema import (
    REQUIRED_SUMMARY_FIELDS,
    create_job_summary_template,
    create_job_detail_template,
    create_salary_template,
)
from linkedin_jobs.utils.job_id import resolve_job_id
from linkedin_jobs.utils.text import clean_text, html_to_plain_text

logger = logging.getLogger(__name__)

LINKEDIN_BASE_URL = "https://www.linkedin.com"
JOB_VIEW_URL = LINKEDIN_BASE_URL + "/jobs/view/{job_id}"

# ── Listing card selectors ──────────────────────────────

_CARD_TITLE = ".base-search-card__title"
_CARD_COMPANY = ".base-search-card__subtitle"
_CARD_LOCATION = ".job-search-card__location"
_CARD_TIME = "time"
_CARD_LINK = ".base-card__full-link"
_CARD_COMPANY_LINK = ".base-search-card__subtitle a"
_CARD_LOGO = ".artdeco-entity-image"
_CARD_EASY_APPLY = ".simple-job-card__link"
_CARD_INSIGHTS = ".job-search-card__insight"

# Card attributes that may hold a job identifier, tried in order
_CARD_ID_ATTRS = ["data-entity-urn", "data-id"]

# ── Job view page selectors ─────────────────────────────

_DETAIL_TITLE = ".top-card-layout__title"
_DETAIL_COMPANY = ".topcard__org-name-link"
_DETAIL_LOCATION = ".topcard__flavor--bullet"
_DETAIL_POSTED = ".posted-time-ago__text"
_DETAIL_APPLICANTS = [".num-applicants__caption", ".topcard__flavor--metadata"]

# Description containers: first non-empty wins
_DESCRIPTION_SELECTORS = [".description__text", ".show-more-less-html__markup"]

_SKILL_PILLS = ".job-details-skill-match-status-list__pill"

# Salary containers, tried in order
_SALARY_SELECTORS = [
    ".compensation__salary",
    ".salary",
    ".top-card-layout__salary-info",
    ".salary-main-rail__data-body",
]

# Labels of the criteria list at the bottom of the job view page
_CRITERIA_LABELS = {
    "seniority_level": "Seniority level",
    "employment_type": "Employment type",
    "job_function": "Job function",
    "industries": "Industries",
}

# "$120,000.00 - $150,000.00" or "$45/hr"
_SALARY_RE = re.compile(
    r"\$([\d,]+)(?:\.\d{2})?(?:\s*-\s*\$([\d,]+)(?:\.\d{2})?)?"
)


# ── Small helpers ───────────────────────────────────────

def _select_text(root: Tag, selector: str) -> Optional[str]:
    element = root.select_one(selector)
    if element is None:
        return None
    return clean_text(element.get_text())


def _select_first_text(root: Tag, selectors: List[str]) -> Optional[str]:
    """Try selectors left to right; first one yielding text wins."""
    for selector in selectors:
        text = _select_text(root, selector)
        if text:
            return text
    return None


def _select_attr(root: Tag, selector: str, *attrs: str) -> Optional[str]:
    element = root.select_one(selector)
    if element is None:
        return None
    for attr in attrs:
        value = clean_text(element.get(attr))
        if value:
            return value
    return None


def absolute_url(href: Optional[str]) -> Optional[str]:
    """Qualify a relative LinkedIn href with the site origin."""
    if not href:
        return None
    if href.startswith("//"):
        return "https:" + href
    if href.startswith("/"):
        return LINKEDIN_BASE_URL + href
    return href


def strip_query(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return url.split("?")[0].split("#")[0] or None


# ── Listing cards ───────────────────────────────────────

def extract_summary(card: Tag) -> Dict[str, Any]:
    """
    Build a job summary from one search result card.

    The ID candidate is the card's data-entity-urn, else data-id, else a
    fresh UUID; it is resolved together with the raw permalink, so the
    returned id is always a digit string.

    Required-field filtering is left to the caller (see has_required_fields).
    """
    if card is None:
        raise ValueError("extract_summary() needs a listing card element")

    summary = create_job_summary_template()

    raw_link = _select_attr(card, _CARD_LINK, "href")
    candidate = None
    for attr in _CARD_ID_ATTRS:
        candidate = clean_text(card.get(attr))
        if candidate:
            break
    if not candidate:
        candidate = str(uuid.uuid4())

    time_tag = card.select_one(_CARD_TIME)
    date = None
    if time_tag is not None:
        date = clean_text(time_tag.get("datetime")) or clean_text(time_tag.get_text())

    summary["id"] = resolve_job_id(candidate, raw_link)
    summary["title"] = _select_text(card, _CARD_TITLE)
    summary["company"] = _select_text(card, _CARD_COMPANY)
    summary["location"] = _select_text(card, _CARD_LOCATION)
    summary["date"] = date
    summary["link"] = absolute_url(raw_link)
    summary["company_link"] = absolute_url(
        strip_query(_select_attr(card, _CARD_COMPANY_LINK, "href"))
    )
    summary["company_logo"] = _select_attr(card, _CARD_LOGO, "data-delayed-url", "src")
    summary["easy_apply"] = True if card.select_one(_CARD_EASY_APPLY) is not None else None
    summary["insights"] = _select_text(card, _CARD_INSIGHTS)
    return summary


def has_required_fields(summary: Dict[str, Any]) -> bool:
    """True when the summary has a title, a company and an id."""
    return all(summary.get(field) for field in REQUIRED_SUMMARY_FIELDS)


# ── Job view page ───────────────────────────────────────

def extract_labeled_detail(soup: Tag, label: str) -> Optional[str]:
    """
    Value next to a criteria label, e.g. "Seniority level" -> "Mid-Senior level".

    Takes the last <span> across every <li> whose text contains the label.
    Description bullets mentioning the label come earlier in the page than
    the criteria list, so they never win.
    """
    last_span = None
    for item in soup.find_all("li"):
        if label not in item.get_text():
            continue
        spans = item.find_all("span")
        if spans:
            last_span = spans[-1]
    if last_span is None:
        return None
    return clean_text(last_span.get_text())


def extract_skills(soup: Tag) -> List[str]:
    """Skill pill texts, in page order, empties dropped."""
    skills = []
    for pill in soup.select(_SKILL_PILLS):
        skill = clean_text(pill.get_text())
        if skill:
            skills.append(skill)
    return skills


def extract_salary(soup: Tag) -> Optional[Dict[str, Any]]:
    """
    Salary shown on the job page.

    Returns:
        None if the page has no salary element at all; otherwise a salary
        record. min/max are digit-only strings when the text contains a
        dollar amount or range, else None.
    """
    element = None
    for selector in _SALARY_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            break
    if element is None:
        return None

    salary = create_salary_template()
    text = clean_text(element.get_text())
    salary["text"] = text
    if not text:
        return salary

    match = _SALARY_RE.search(text)
    if match:
        salary["min"] = re.sub(r"\D", "", match.group(1)) or None
        if match.group(2):
            salary["max"] = re.sub(r"\D", "", match.group(2)) or None
        salary["currency"] = "USD"
    return salary


def extract_description_html(soup: Tag) -> Optional[str]:
    """Inner HTML of the first description container that has any text."""
    for selector in _DESCRIPTION_SELECTORS:
        element = soup.select_one(selector)
        if element is not None and element.get_text(strip=True):
            return element.decode_contents()
    return None


def extract_detail(soup: Tag, job_id: str) -> Dict[str, Any]:
    """
    Build a job detail record from a parsed job view page.

    Args:
        soup: Parsed job view page
        job_id: Decimal job ID, as produced by extract_summary()
    """
    if soup is None:
        raise ValueError("extract_detail() needs a parsed job page")

    detail = create_job_detail_template()
    detail["id"] = job_id
    detail["title"] = _select_text(soup, _DETAIL_TITLE)
    detail["company"] = _select_text(soup, _DETAIL_COMPANY)
    detail["location"] = _select_text(soup, _DETAIL_LOCATION)
    detail["posted_date"] = _select_text(soup, _DETAIL_POSTED)
    detail["applicants"] = _select_first_text(soup, _DETAIL_APPLICANTS)

    description = html_to_plain_text(extract_description_html(soup))
    detail["description"] = description
    detail["description_length"] = len(description) if description else None

    for field, label in _CRITERIA_LABELS.items():
        detail[field] = extract_labeled_detail(soup, label)

    detail["skills"] = extract_skills(soup) or None
    detail["salary"] = extract_salary(soup)

    detail["company_link"] = absolute_url(
        strip_query(_select_attr(soup, _DETAIL_COMPANY, "href"))
    )
    detail["job_link"] = JOB_VIEW_URL.format(job_id=job_id)

    if detail["title"] is None:
        logger.warning(
            f"No title found for job {job_id}. "
            f"LinkedIn HTML structure may have changed."
        )
    return detail
