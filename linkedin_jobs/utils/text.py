"""
Text normalization for values scraped from LinkedIn pages.

Two entry points:
  - clean_text: collapse whitespace in a single extracted string
  - html_to_plain_text: turn a job-description HTML fragment into
    paragraph-delimited plain text with LinkedIn boilerplate removed

Both are pure and never raise for bad input; they return None instead.
"""

import re
import logging
from typing import Any, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

# Elements that never carry description content
_NOISE_TAGS = [
    "script", "style", "noscript", "iframe", "embed",
    "object", "header", "footer", "nav",
]

# Elements after which the rendered text starts a new line
_BLOCK_TAGS = [
    "p", "div", "li", "ul", "ol", "section", "article", "blockquote",
    "h1", "h2", "h3", "h4", "h5", "h6", "tr", "table", "pre",
]

# Line-level boilerplate, applied in order to every line. Each pattern
# consumes all repeats so a cleaned line is left unchanged by a second pass.
_BOILERPLATE_PATTERNS = [
    # "See who you know at Acme" call-to-action
    re.compile(r"\s*see who you know at\b.*$", re.IGNORECASE),
    # Truncation marker left by the collapsed description: "… see more"
    re.compile(r"(?:\s*(?:…|\.\.\.)?\s*\bsee more)+\s*$", re.IGNORECASE),
    # Leading bullet glyphs, possibly stacked: "- - Python"
    re.compile(r"^\s*(?:[•·▪◦●\-\*]\s+)+"),
]

# Lines dropped entirely, checked after boilerplate removal
_STANDALONE_NOISE_RE = re.compile(
    r"^(?:promoted|sponsored|show more|show less)$", re.IGNORECASE
)

_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")


def clean_text(raw: Any) -> Optional[str]:
    """
    Trim and collapse all whitespace runs to single spaces.

    Returns None for None, non-strings, and strings that are empty
    after trimming.
    """
    if not raw or not isinstance(raw, str):
        return None
    cleaned = _WHITESPACE_RE.sub(" ", raw).strip()
    return cleaned or None


def _clean_line(line: str) -> Optional[str]:
    text = clean_text(line)
    if text is None:
        return None
    for pattern in _BOILERPLATE_PATTERNS:
        text = pattern.sub("", text)
    text = text.strip()
    if not text or _STANDALONE_NOISE_RE.match(text):
        return None
    return text


def html_to_plain_text(html: Optional[str]) -> Optional[str]:
    """
    Convert a description HTML fragment to clean plain text.

    Every originally separate line (a <br>, or the end of a block element)
    becomes its own paragraph; paragraphs are separated by one blank line.

    Returns None for empty input or if the fragment cannot be processed.
    """
    if not html:
        return None

    try:
        soup = BeautifulSoup(html, "html.parser")

        for element in soup.find_all(_NOISE_TAGS):
            element.decompose()

        for br in soup.find_all("br"):
            br.replace_with("\n")
        for block in soup.find_all(_BLOCK_TAGS):
            block.append("\n")

        lines = [_clean_line(line) for line in soup.get_text().split("\n")]
        text = "\n\n".join(line for line in lines if line)
        text = _EXCESS_BLANK_LINES_RE.sub("\n\n", text).strip()
        return text or None
    except Exception as e:
        logger.warning(f"Could not convert description HTML to text: {e}")
        return None
