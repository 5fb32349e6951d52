"""
Salary estimator: fills in a compensation estimate for jobs that do not
show a salary on the page.

All estimation is deterministic (static tables in salary_tables). No network
calls, no randomness: the same title/seniority/location always gives the
same figures.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from linkedin_jobs.preprocessing.location_parser import parse_location
from linkedin_jobs.preprocessing.salary_tables import (
    ROLE_BASE_SALARIES,
    DEFAULT_ROLE,
    DEFAULT_BASE_SALARY,
    LINKEDIN_SENIORITY_LABELS,
    SENIORITY_TITLE_SIGNALS,
    SENIORITY_MULTIPLIERS,
    ADDITIONAL_COMP_RATIOS,
    CITY_FACTORS,
    STATE_FACTORS,
    COUNTRY_FACTORS,
    DEFAULT_LOCATION_FACTOR,
    ESTIMATE_SOURCE,
    ESTIMATE_CURRENCY,
    SeniorityLevel,
    Confidence,
)

logger = logging.getLogger(__name__)

# Estimates are rounded to this step
_ROUNDING = 1_000

_SENIORITY_RANK = {level: i for i, level in enumerate(SeniorityLevel)}


def match_role(title: Optional[str]) -> Tuple[str, Tuple[int, int], bool]:
    """
    Map a job title to a canonical role and its base range.

    Returns:
        (role, (base_min, base_max), matched); matched is False when the
        default range was used.
    """
    lower = (title or "").lower()
    for pattern, role, base_range in ROLE_BASE_SALARIES:
        if pattern in lower:
            return role, base_range, True
    return DEFAULT_ROLE, DEFAULT_BASE_SALARY, False


def infer_seniority(
    title: Optional[str], seniority_label: Optional[str] = None
) -> Tuple[SeniorityLevel, bool]:
    """
    Seniority from the page's criteria label, falling back to title keywords.

    Priority:
    1. LinkedIn "Seniority level" label
    2. Most senior keyword found in the title
    3. Default: Mid

    Returns:
        (level, explicit); explicit is False when the default was used.
    """
    if seniority_label:
        level = LINKEDIN_SENIORITY_LABELS.get(seniority_label.strip().lower())
        if level is not None:
            return level, True

    title_lower = f"{(title or '').lower()} "
    signals = [
        level for keyword, level in SENIORITY_TITLE_SIGNALS.items()
        if keyword in title_lower
    ]
    if signals:
        return max(signals, key=lambda lvl: _SENIORITY_RANK[lvl]), True

    return SeniorityLevel.MID, False


def location_factor(raw_location: Optional[str]) -> Tuple[float, bool]:
    """
    Cost-of-labour multiplier for a location string.

    City beats state, state beats country.

    Returns:
        (factor, matched)
    """
    parsed = parse_location(raw_location)
    city = (parsed["city"] or "").lower()
    region = (parsed["region"] or "").lower()
    country = (parsed["country"] or "").lower()

    if city in CITY_FACTORS:
        return CITY_FACTORS[city], True
    if region in STATE_FACTORS:
        return STATE_FACTORS[region], True
    if country in COUNTRY_FACTORS:
        return COUNTRY_FACTORS[country], True
    return DEFAULT_LOCATION_FACTOR, False


def _round(value: float) -> int:
    return int(round(value / _ROUNDING) * _ROUNDING)


def _format_usd(value: int) -> str:
    return f"${value:,}"


def estimate_salary(
    title: Optional[str],
    location: Optional[str] = None,
    seniority_label: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Estimate annual compensation for a job.

    Args:
        title: Job title as shown on the page
        location: Location line, e.g. "Austin, TX"
        seniority_label: LinkedIn criteria value, e.g. "Mid-Senior level"

    Returns:
        Salary record with estimated=True and a base/additional/total
        breakdown, or None when there is no title to go on.
    """
    if not title or not title.strip():
        return None

    role, (base_low, base_high), role_matched = match_role(title)
    seniority, seniority_explicit = infer_seniority(title, seniority_label)
    factor, location_matched = location_factor(location)

    multiplier = SENIORITY_MULTIPLIERS[seniority] * factor
    base_min = _round(base_low * multiplier)
    base_max = _round(base_high * multiplier)

    ratio_low, ratio_high = ADDITIONAL_COMP_RATIOS[seniority]
    additional_min = _round(base_min * ratio_low)
    additional_max = _round(base_max * ratio_high)

    total_min = base_min + additional_min
    total_max = base_max + additional_max

    matched_signals = sum([role_matched, seniority_explicit, location_matched])
    if matched_signals == 3:
        confidence = Confidence.HIGH
    elif role_matched:
        confidence = Confidence.MEDIUM
    else:
        confidence = Confidence.LOW

    logger.debug(
        f"Salary estimate for '{title}': role={role}, seniority={seniority.value}, "
        f"factor={factor}, total={total_min}-{total_max}"
    )

    return {
        "text": f"{_format_usd(total_min)} - {_format_usd(total_max)} (estimated)",
        "min": str(total_min),
        "max": str(total_max),
        "currency": ESTIMATE_CURRENCY,
        "estimated": True,
        "source": ESTIMATE_SOURCE,
        "role": role,
        "seniority": seniority.value,
        "location_factor": factor,
        "confidence": confidence.value,
        "base": {"min": base_min, "max": base_max},
        "additional": {"min": additional_min, "max": additional_max},
        "total": {"min": total_min, "max": total_max},
    }
