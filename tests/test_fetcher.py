"""
Unit tests for the page fetcher retry policy, using a stub session.
"""
import pytest
import requests

from linkedin_jobs.errors import FetchError, JobNotFoundError
from linkedin_jobs.scraping import fetcher as fetcher_module
from linkedin_jobs.scraping.fetcher import PageFetcher
from linkedin_jobs.scraping.user_agent import UserAgentProvider


class StubResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class StubSession:
    """Returns (or raises) the queued outcomes in order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(fetcher_module.time, "sleep", recorded.append)
    monkeypatch.setattr(fetcher_module.random, "uniform", lambda a, b: 0.5)
    monkeypatch.setattr(UserAgentProvider, "get_random", classmethod(lambda cls: "test-agent"))
    return recorded


def test_success_returns_body(sleeps):
    session = StubSession([StubResponse(200, "<html>ok</html>")])
    fetcher = PageFetcher(timeout=7, session=session)

    assert fetcher.fetch_html("https://www.linkedin.com/jobs/search", params={"keywords": "x"}) == "<html>ok</html>"
    call = session.calls[0]
    assert call["params"] == {"keywords": "x"}
    assert call["timeout"] == 7
    assert call["headers"]["User-Agent"] == "test-agent"
    assert call["headers"]["Accept-Language"].startswith("en-US")
    assert sleeps == []


def test_not_found_raises_immediately(sleeps):
    session = StubSession([StubResponse(404)])
    fetcher = PageFetcher(max_retries=3, session=session)

    with pytest.raises(JobNotFoundError) as excinfo:
        fetcher.fetch_html("https://www.linkedin.com/jobs/view/1")

    assert excinfo.value.status_code == 404
    assert len(session.calls) == 1
    assert sleeps == []


def test_rate_limit_backs_off_exponentially(sleeps):
    session = StubSession([StubResponse(429), StubResponse(429), StubResponse(200, "done")])
    fetcher = PageFetcher(max_retries=3, session=session)

    assert fetcher.fetch_html("https://x") == "done"
    assert sleeps == [2.5, 4.5]


def test_other_failures_back_off_linearly(sleeps):
    session = StubSession([
        StubResponse(500),
        requests.ConnectionError("reset"),
        StubResponse(200, "done"),
    ])
    fetcher = PageFetcher(max_retries=3, session=session)

    assert fetcher.fetch_html("https://x") == "done"
    assert sleeps == [1, 2]


def test_exhausted_retries_raise_fetch_error(sleeps):
    session = StubSession([StubResponse(503), StubResponse(503)])
    fetcher = PageFetcher(max_retries=2, session=session)

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch_html("https://x")

    assert not isinstance(excinfo.value, JobNotFoundError)
    assert excinfo.value.status_code == 503
    assert excinfo.value.url == "https://x"
    # No sleep after the final attempt
    assert sleeps == [1]


def test_polite_delay_only_when_configured(sleeps):
    session = StubSession([StubResponse(200, "a")])
    PageFetcher(min_delay=0.5, max_delay=1.0, session=session).fetch_html("https://x")
    assert sleeps == [0.5]


def test_fetch_page_parses_html(sleeps):
    session = StubSession([StubResponse(200, "<h1 class='t'>Title</h1>")])
    page = PageFetcher(session=session).fetch_page("https://x")
    assert page.select_one(".t").get_text() == "Title"


def test_context_manager_closes_session(sleeps):
    session = StubSession([])
    with PageFetcher(session=session):
        pass
    assert session.closed
