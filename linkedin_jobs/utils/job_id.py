"""
Stable numeric job IDs.

LinkedIn's only fully reliable job identifier is the number at the end of the
job permalink (".../jobs/view/<slug>-<digits>"). Card attributes such as
data-entity-urn or data-id have changed format between site revisions, so
they are treated as a secondary hint only.

resolve_job_id() walks an ordered list of (name, pattern) rules and returns
the first hit; when nothing matches it falls back to a deterministic hash so
the same input always yields the same ID, in any process.
"""

import re
from typing import List, Optional, Pattern, Tuple

# Canonical job-view URL shapes. Slug form must come first: the bare form
# would otherwise never see the digits after the last dash.
_PERMALINK_RULES: List[Tuple[str, Pattern]] = [
    ("view_slug", re.compile(r"/jobs/view/[^/?#]*-(\d+)/?(?:[?#]|$)", re.ASCII)),
    ("view_bare", re.compile(r"/jobs/view/(\d+)/?(?:[?#]|$)", re.ASCII)),
]

# Shapes searched for inside the raw candidate value
_CANDIDATE_RULES: List[Tuple[str, Pattern]] = _PERMALINK_RULES + [
    ("query_param", re.compile(r"[?&]jobId=(\d+)", re.ASCII)),
    ("trailing_segment", re.compile(r"/(\d+)/?(?:\?.*)?$", re.ASCII)),
]

MIN_ID_DIGITS = 5
FALLBACK_ID_DIGITS = 10

_DIGIT_RUN_RE = re.compile(r"\d+", re.ASCII)


def is_ascii_digits(value: str) -> bool:
    """True for a non-empty string of 0-9 only (no superscripts or other scripts' digits)."""
    return value.isascii() and value.isdigit()


def _match_rules(value: str, rules: List[Tuple[str, Pattern]]) -> Optional[str]:
    for _name, pattern in rules:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None


def fallback_job_id(value: str) -> str:
    """
    Deterministic ID for values with no usable number in them.

    32-bit signed polynomial rolling hash (h = h * 31 + code unit) over the
    UTF-16 code units of the value, absolute value, first 10 digits.
    """
    h = 0
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return str(abs(h))[:FALLBACK_ID_DIGITS]


def resolve_job_id(candidate: Optional[str], permalink: Optional[str] = None) -> str:
    """
    Derive a decimal job ID from a permalink and/or a raw candidate value.

    Precedence (first match wins):
      1-2. permalink: /jobs/view/<slug>-<digits>, then /jobs/view/<digits>
      3.   candidate: the same two shapes, jobId=<digits>, trailing /<digits>
      4.   candidate is all digits and at least 5 long
      5.   last digit run in candidate, if at least 5 long
      6.   fallback_job_id(candidate)

    Never raises; always returns a string of digits.

    Examples:
        resolve_job_id("x", "https://www.linkedin.com/jobs/view/data-eng-at-acme-3796675744")
            -> "3796675744"
        resolve_job_id("urn:li:jobPosting:3801234567") -> "3801234567"
    """
    candidate = candidate or ""

    if permalink:
        found = _match_rules(permalink, _PERMALINK_RULES)
        if found:
            return found

    found = _match_rules(candidate, _CANDIDATE_RULES)
    if found:
        return found

    if is_ascii_digits(candidate) and len(candidate) >= MIN_ID_DIGITS:
        return candidate

    # Last run, not first: "Engineer II 2024 10023456" must not yield "2"
    runs = _DIGIT_RUN_RE.findall(candidate)
    if runs and len(runs[-1]) >= MIN_ID_DIGITS:
        return runs[-1]

    return fallback_job_id(candidate)
