"""
Record Schemas

Templates for every record the extractors produce:
  - Job summary (one listing card on a search results page)
  - Job detail (one job view page)
  - Salary info (on-page salary text, or an estimate)
  - Company profile (one company about page)

Every template lists all of its keys. Missing value = None, never "" or [].
Extractors fill a fresh template per call; after that the only change a
record sees is the additive "company_details" merge on enrichment.
"""

from typing import Any, Dict, List

SCHEMA_VERSION = "2.1.0"

LINKEDIN_SOURCE = "LinkedIn"
SALARY_SOURCE_POSTING = "LinkedIn Job Posting"

# A listing card is kept in search results only if all of these are set
REQUIRED_SUMMARY_FIELDS: List[str] = ["id", "title", "company"]


def create_job_summary_template() -> Dict[str, Any]:
    """Template for a job summary parsed from a search listing card."""
    return {
        "id": None,  # Decimal string, always via resolve_job_id()
        "title": None,
        "company": None,
        "location": None,
        "date": None,  # datetime attr, e.g. "2025-12-16", else "2 weeks ago"
        "link": None,  # Absolute job permalink
        "company_link": None,  # Absolute, query string removed
        "company_logo": None,
        "easy_apply": None,  # True or None, never False
        "insights": None,  # e.g. "Be an early applicant"
    }


def create_job_detail_template() -> Dict[str, Any]:
    """Template for a job detail record parsed from a job view page."""
    return {
        # ─── Identity ────────────────────────────────
        "id": None,
        "title": None,
        "company": None,
        "location": None,

        # ─── Top Card ────────────────────────────────
        "posted_date": None,
        "applicants": None,

        # ─── Description ─────────────────────────────
        "description": None,  # Plain text
        "description_length": None,

        # ─── Criteria Section ────────────────────────
        "seniority_level": None,
        "employment_type": None,
        "job_function": None,
        "industries": None,

        "skills": None,  # List of strings, None when empty
        "salary": None,  # Salary info record or None

        # ─── Links ───────────────────────────────────
        "company_link": None,
        "job_link": None,
        "source": LINKEDIN_SOURCE,
    }


def create_salary_template() -> Dict[str, Any]:
    """Template for a salary found on the job page."""
    return {
        "text": None,  # Raw salary text as displayed
        "min": None,  # Digits only, e.g. "120000"
        "max": None,
        "currency": None,
        "estimated": False,
        "source": SALARY_SOURCE_POSTING,
    }


def create_company_profile_template() -> Dict[str, Any]:
    """Template for a company profile parsed from a company about page."""
    return {
        "about": None,
        "employee_count": None,  # Digits only, e.g. "10001"
        "headquarters": None,
        "website": None,
        "industry": None,
        "founded": None,
        "specialties": None,  # List of strings, None when empty
        "followers": None,  # Digits only
        "linkedin_url": None,
    }


def get_job_summary_fields() -> List[str]:
    """Ordered list of job summary keys."""
    return list(create_job_summary_template().keys())


def get_job_detail_fields() -> List[str]:
    """Ordered list of job detail keys."""
    return list(create_job_detail_template().keys())
