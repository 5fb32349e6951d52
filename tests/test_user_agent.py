"""
Unit tests for the desktop user-agent pool.
"""
import itertools

import pytest

from linkedin_jobs.scraping import user_agent as user_agent_module
from linkedin_jobs.scraping.user_agent import (
    FALLBACK_UA,
    POOL_SIZE,
    UserAgentProvider,
    build_desktop_pool,
    is_desktop_agent,
)

WINDOWS_CHROME = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
MAC_SAFARI = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15"
)
ANDROID_CHROME = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Mobile Safari/537.36"
)
IPHONE_SAFARI = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Mobile/15E148 Safari/604.1"
)


class StubUserAgent:
    """Cycles through a fixed list on every .random access."""

    agents = []

    def __init__(self, fallback=None):
        self._cycle = itertools.cycle(self.agents)

    @property
    def random(self):
        return next(self._cycle)


@pytest.fixture(autouse=True)
def fresh_pool():
    UserAgentProvider.reset()
    yield
    UserAgentProvider.reset()


def test_is_desktop_agent():
    assert is_desktop_agent(WINDOWS_CHROME)
    assert is_desktop_agent(MAC_SAFARI)
    assert not is_desktop_agent(ANDROID_CHROME)
    assert not is_desktop_agent(IPHONE_SAFARI)
    assert not is_desktop_agent("")
    assert not is_desktop_agent(None)


def test_pool_keeps_distinct_desktop_agents_only():
    draws = itertools.cycle([ANDROID_CHROME, WINDOWS_CHROME, IPHONE_SAFARI, MAC_SAFARI])
    pool = build_desktop_pool(lambda: next(draws))

    assert sorted(pool) == sorted([WINDOWS_CHROME, MAC_SAFARI])


def test_pool_is_capped_at_size():
    counter = itertools.count()
    pool = build_desktop_pool(lambda: f"{WINDOWS_CHROME} build/{next(counter)}")

    assert len(pool) == POOL_SIZE


def test_pool_of_mobile_only_source_falls_back():
    assert build_desktop_pool(lambda: IPHONE_SAFARI) == [FALLBACK_UA]


def test_provider_never_returns_mobile_agents(monkeypatch):
    StubUserAgent.agents = [ANDROID_CHROME, WINDOWS_CHROME, IPHONE_SAFARI, MAC_SAFARI]
    monkeypatch.setattr(user_agent_module, "UserAgent", StubUserAgent)

    picked = {UserAgentProvider.get_random() for _ in range(50)}

    assert picked <= {WINDOWS_CHROME, MAC_SAFARI}


def test_provider_uses_fallback_when_library_fails(monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("data file missing")

    monkeypatch.setattr(user_agent_module, "UserAgent", broken)

    assert UserAgentProvider.get_random() == FALLBACK_UA
