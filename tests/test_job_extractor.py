"""
Unit tests for listing card and job page extraction.
"""
import pytest

from conftest import soup
from linkedin_jobs.scraping.job_extractor import (
    absolute_url,
    extract_detail,
    extract_labeled_detail,
    extract_salary,
    extract_skills,
    extract_summary,
    has_required_fields,
    strip_query,
)


def _cards(search_soup):
    return search_soup.select(".base-card.job-search-card")


def test_extract_summary_full_card(search_soup):
    summary = extract_summary(_cards(search_soup)[0])

    assert summary["id"] == "3796675744"
    assert summary["title"] == "Software Engineer"
    assert summary["company"] == "Acme"
    assert summary["location"] == "Austin, TX"
    assert summary["date"] == "2024-05-01"
    assert summary["link"].startswith("https://www.linkedin.com/jobs/view/software-engineer-at-acme-3796675744?")
    assert summary["company_link"] == "https://www.linkedin.com/company/acme"
    assert summary["company_logo"] == "https://media.licdn.com/acme.png"
    assert summary["easy_apply"] is None
    assert summary["insights"] == "Be an early applicant"
    assert has_required_fields(summary)


def test_extract_summary_relative_links_and_easy_apply(search_soup):
    summary = extract_summary(_cards(search_soup)[1])

    assert summary["id"] == "3801234567"
    assert summary["link"] == "https://www.linkedin.com/jobs/view/3801234567/"
    assert summary["company_link"] == "https://www.linkedin.com/company/globex"
    assert summary["date"] == "1 day ago"
    assert summary["easy_apply"] is True
    assert summary["company_logo"] is None


def test_card_without_company_is_rejected(search_soup):
    summary = extract_summary(_cards(search_soup)[2])

    assert summary["company"] is None
    assert summary["id"] == "3799999999"
    assert not has_required_fields(summary)


def test_card_without_any_id_still_gets_digit_id():
    card = soup(
        '<div class="base-card"><h3 class="base-search-card__title">Nurse</h3>'
        '<h4 class="base-search-card__subtitle">Mercy</h4></div>'
    ).div
    summary = extract_summary(card)
    assert summary["id"].isdigit()
    assert summary["link"] is None


def test_extract_summary_requires_card():
    with pytest.raises(ValueError):
        extract_summary(None)


def test_url_helpers():
    assert absolute_url("/jobs/view/1") == "https://www.linkedin.com/jobs/view/1"
    assert absolute_url("//media.licdn.com/x.png") == "https://media.licdn.com/x.png"
    assert absolute_url("https://example.com") == "https://example.com"
    assert absolute_url(None) is None
    assert strip_query("https://x.com/a?b=1#c") == "https://x.com/a"
    assert strip_query("") is None


def test_extract_detail(job_soup):
    detail = extract_detail(job_soup, "3796675744")

    assert detail["id"] == "3796675744"
    assert detail["title"] == "Senior Data Engineer"
    assert detail["company"] == "Acme"
    assert detail["location"] == "San Francisco, CA"
    assert detail["posted_date"] == "3 days ago"
    assert detail["applicants"] == "Over 200 applicants"
    assert detail["description"] == (
        "We are hiring a data engineer.\n\nBuild pipelines\n\nOwn the warehouse"
    )
    assert detail["description_length"] == len(detail["description"])
    assert detail["seniority_level"] == "Mid-Senior level"
    assert detail["employment_type"] == "Full-time"
    assert detail["job_function"] == "Engineering and Information Technology"
    assert detail["industries"] == "Software Development"
    assert detail["skills"] == ["Python", "SQL"]
    assert detail["salary"] is None
    assert detail["company_link"] == "https://www.linkedin.com/company/acme"
    assert detail["job_link"] == "https://www.linkedin.com/jobs/view/3796675744"
    assert detail["source"] == "LinkedIn"


def test_extract_detail_empty_page_degrades_to_none():
    detail = extract_detail(soup("<html><body><p>nothing</p></body></html>"), "12345")

    assert detail["id"] == "12345"
    for field in ["title", "company", "location", "description", "description_length",
                  "seniority_level", "skills", "salary", "company_link"]:
        assert detail[field] is None


def test_extract_detail_requires_document():
    with pytest.raises(ValueError):
        extract_detail(None, "12345")


def test_labeled_detail_uses_last_span():
    page = soup("<ul><li><span>Employment type</span><span> Contract </span></li></ul>")
    assert extract_labeled_detail(page, "Employment type") == "Contract"
    assert extract_labeled_detail(page, "Seniority level") is None


def test_labeled_detail_skips_description_bullets_mentioning_label():
    page = soup(
        "<div class='description__text'><ul>"
        "<li>Experience across regulated Industries</li>"
        "<li><span>Deep knowledge of Industries like</span> <span>insurance</span></li>"
        "</ul></div>"
        "<ul class='description__job-criteria-list'>"
        "<li><h3>Industries</h3><span>Banking</span></li>"
        "</ul>"
    )
    assert extract_labeled_detail(page, "Industries") == "Banking"


def test_skills_empty_list_when_absent():
    assert extract_skills(soup("<div></div>")) == []


def test_salary_absent_returns_none():
    assert extract_salary(soup("<div class='other'>$100,000</div>")) is None


def test_salary_unparseable_keeps_text():
    salary = extract_salary(soup("<div class='salary'>Not Disclosed</div>"))

    assert salary["text"] == "Not Disclosed"
    assert salary["min"] is None
    assert salary["max"] is None
    assert salary["currency"] is None
    assert salary["estimated"] is False
    assert salary["source"] == "LinkedIn Job Posting"


def test_salary_range_parsed_to_digits():
    salary = extract_salary(
        soup("<div class='compensation__salary'>$120,000.00/yr - $150,000.00/yr</div>")
    )
    assert salary["min"] == "120000"
    assert salary["currency"] == "USD"


def test_salary_plain_range():
    salary = extract_salary(soup("<p class='salary'>$90,000 - $110,000</p>"))
    assert (salary["min"], salary["max"]) == ("90000", "110000")


def test_salary_single_amount():
    salary = extract_salary(soup("<p class='salary'>$45.00/hr</p>"))
    assert salary["min"] == "45"
    assert salary["max"] is None
