"""Shared HTML fixtures and fakes."""

import pytest
from bs4 import BeautifulSoup


SEARCH_PAGE_HTML = """
<html><body>
<div class="results-context-header"><span class="results-context-header__job-count">1,234</span></div>
<ul>
  <li>
    <div class="base-card job-search-card" data-entity-urn="urn:li:jobPosting:3796675744">
      <a class="base-card__full-link"
         href="https://www.linkedin.com/jobs/view/software-engineer-at-acme-3796675744?refId=abc&amp;trackingId=xyz"></a>
      <img class="artdeco-entity-image" data-delayed-url="https://media.licdn.com/acme.png">
      <h3 class="base-search-card__title">  Software
          Engineer  </h3>
      <h4 class="base-search-card__subtitle">
        <a href="https://www.linkedin.com/company/acme?trk=public_jobs_topcard">Acme</a>
      </h4>
      <span class="job-search-card__location">Austin, TX</span>
      <span class="job-search-card__insight">Be an early applicant</span>
      <time datetime="2024-05-01">2 weeks ago</time>
    </div>
  </li>
  <li>
    <div class="base-card job-search-card" data-id="3801234567">
      <a class="base-card__full-link" href="/jobs/view/3801234567/"></a>
      <h3 class="base-search-card__title">Data Scientist</h3>
      <h4 class="base-search-card__subtitle"><a href="/company/globex">Globex</a></h4>
      <span class="job-search-card__location">Remote</span>
      <a class="simple-job-card__link">Easy Apply</a>
      <time>1 day ago</time>
    </div>
  </li>
  <li>
    <div class="base-card job-search-card" data-entity-urn="urn:li:jobPosting:3799999999">
      <a class="base-card__full-link" href="https://www.linkedin.com/jobs/view/recruiter-3799999999"></a>
      <h3 class="base-search-card__title">Recruiter</h3>
      <h4 class="base-search-card__subtitle">   </h4>
    </div>
  </li>
  <li>
    <div class="base-card job-search-card" data-entity-urn="urn:li:jobPosting:3796675744">
      <a class="base-card__full-link"
         href="https://www.linkedin.com/jobs/view/software-engineer-at-acme-3796675744"></a>
      <h3 class="base-search-card__title">Software Engineer</h3>
      <h4 class="base-search-card__subtitle"><a href="/company/acme">Acme</a></h4>
    </div>
  </li>
</ul>
</body></html>
"""

JOB_PAGE_HTML = """
<html><body>
<section class="top-card-layout">
  <h1 class="top-card-layout__title">Senior Data Engineer</h1>
  <a class="topcard__org-name-link" href="https://www.linkedin.com/company/acme?trk=public_jobs">
    Acme
  </a>
  <span class="topcard__flavor topcard__flavor--bullet">San Francisco, CA</span>
  <span class="posted-time-ago__text">3 days ago</span>
  <figcaption class="num-applicants__caption">Over 200 applicants</figcaption>
</section>
<div class="description__text">
  <div class="show-more-less-html__markup">
    <p>We are hiring a <strong>data engineer</strong>.</p>
    <ul><li>Build pipelines</li><li>Own the warehouse</li></ul>
    <p>Show more</p>
  </div>
</div>
<ul class="description__job-criteria-list">
  <li><h3>Seniority level</h3><span>Mid-Senior level</span></li>
  <li><h3>Employment type</h3><span>Full-time</span></li>
  <li><h3>Job function</h3><span>Engineering and Information Technology</span></li>
  <li><h3>Industries</h3><span>Software Development</span></li>
</ul>
<div class="job-details-skill-match-status-list__pill">Python</div>
<div class="job-details-skill-match-status-list__pill"> SQL </div>
<div class="job-details-skill-match-status-list__pill">  </div>
</body></html>
"""

COMPANY_PAGE_HTML = """
<html><head>
<link rel="canonical" href="https://www.linkedin.com/company/acme?trk=about">
</head><body>
<div class="top-card-layout__first-subline">Software Development · Austin, TX · 12,345 followers</div>
<section data-test-id="about-us">
  <p>Acme builds   rockets.</p>
  <dl>
    <div data-test-id="about-us__website"><dt>Website</dt><dd><a href="https://acme.example">acme.example</a></dd></div>
    <div data-test-id="about-us__industry"><dt>Industry</dt><dd>Software Development</dd></div>
    <div data-test-id="about-us__size"><dt>Company size</dt><dd>1,001-5,000 employees</dd></div>
    <div data-test-id="about-us__headquarters"><dt>Headquarters</dt><dd>Austin, TX</dd></div>
    <div data-test-id="about-us__foundedOn"><dt>Founded</dt><dd>1999</dd></div>
    <div data-test-id="about-us__specialties"><dt>Specialties</dt><dd>Rockets, Anvils ,  Dynamite</dd></div>
  </dl>
</section>
</body></html>
"""


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class FakeFetcher:
    """Serves canned pages by URL substring; records every request."""

    def __init__(self, pages=None, errors=None):
        self.pages = pages or {}
        self.errors = errors or {}
        self.requests = []
        self.closed = False

    def fetch_page(self, url, params=None):
        self.requests.append((url, params))
        for fragment, exc in self.errors.items():
            if fragment in url:
                raise exc
        for fragment, html in self.pages.items():
            if fragment in url:
                return soup(html)
        return soup("<html><body></body></html>")

    def close(self):
        self.closed = True


@pytest.fixture
def search_soup():
    return soup(SEARCH_PAGE_HTML)


@pytest.fixture
def job_soup():
    return soup(JOB_PAGE_HTML)


@pytest.fixture
def company_soup():
    return soup(COMPANY_PAGE_HTML)
