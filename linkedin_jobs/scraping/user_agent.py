"""
Desktop user-agent pool for outbound requests.

LinkedIn serves its guest job pages in a different layout to phones and
tablets, and the extractors only know the desktop markup. The pool is drawn
once from fake_useragent, keeping desktop browser strings only; every request
then picks one of them at random.
"""

import random
import logging
from typing import Callable, List, Optional

from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

POOL_SIZE = 10
# Draws allowed per pool slot; fake_useragent also serves mobile strings
DRAWS_PER_SLOT = 5

FALLBACK_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Substrings that mark a phone or tablet browser
_NON_DESKTOP_MARKERS = ["Mobile", "Android", "iPhone", "iPad", "iPod", "Tablet"]


def is_desktop_agent(agent: Optional[str]) -> bool:
    if not agent or not isinstance(agent, str):
        return False
    return not any(marker in agent for marker in _NON_DESKTOP_MARKERS)


def build_desktop_pool(draw: Callable[[], str], size: int = POOL_SIZE) -> List[str]:
    """
    Collect up to `size` distinct desktop user agents.

    Args:
        draw: Returns one random user-agent string per call
        size: Wanted pool size

    Returns:
        The desktop strings found within size * DRAWS_PER_SLOT draws; [FALLBACK_UA]
        when none were found.
    """
    pool: List[str] = []
    for _ in range(size * DRAWS_PER_SLOT):
        if len(pool) >= size:
            break
        agent = draw()
        if is_desktop_agent(agent) and agent not in pool:
            pool.append(agent)

    if not pool:
        logger.warning("No desktop user agents available, using fallback")
        return [FALLBACK_UA]
    return pool


class UserAgentProvider:
    """
    Process-wide desktop user-agent pool, filled on first use.
    """

    _pool: Optional[List[str]] = None

    @classmethod
    def initialize(cls):
        """
        Fill the pool if not already done. Falls back to FALLBACK_UA alone
        when fake_useragent cannot be loaded.
        """
        if cls._pool is not None:
            return
        try:
            source = UserAgent(fallback=FALLBACK_UA)
            cls._pool = build_desktop_pool(lambda: source.random)
        except Exception as e:
            logger.warning(f"Failed to initialize fake_useragent, using fallback: {e}")
            cls._pool = [FALLBACK_UA]
        logger.debug(f"User-agent pool ready with {len(cls._pool)} desktop agents")

    @classmethod
    def reset(cls):
        cls._pool = None

    @classmethod
    def get_random(cls) -> str:
        """Return a random desktop user-agent string from the pool."""
        cls.initialize()
        return random.choice(cls._pool)
