"""
Static lookup tables for salary estimation.

This module is the single source of truth for all estimation figures.
salary_estimator imports from here — never hardcode numbers elsewhere.

All amounts are annual USD base pay for a mid-level role in a national
average US market. Seniority and location are applied as multipliers.
"""

from enum import Enum
from typing import Dict, List, Tuple

# ─────────────────────────────────────────────
# ENUMS
# ─────────────────────────────────────────────

class SeniorityLevel(str, Enum):
    INTERN = "Intern"
    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    STAFF_LEAD = "Staff/Lead"
    DIRECTOR = "Director"
    EXECUTIVE = "Executive"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ─────────────────────────────────────────────
# ROLE BASE RANGES
# ─────────────────────────────────────────────

# Map title fragments -> (canonical role, (base min, base max)).
# Order matters: first match wins. Patterns are checked via substring (lowered).
ROLE_BASE_SALARIES: List[Tuple[str, str, Tuple[int, int]]] = [
    # Must come before generic "engineer" / "scientist"
    ("machine learning engineer", "Machine Learning Engineer", (140_000, 185_000)),
    ("ml engineer", "Machine Learning Engineer", (140_000, 185_000)),
    ("data scientist", "Data Scientist", (125_000, 165_000)),
    ("data engineer", "Data Engineer", (120_000, 160_000)),
    ("data analyst", "Data Analyst", (75_000, 105_000)),
    ("devops", "DevOps Engineer", (115_000, 155_000)),
    ("site reliability", "Site Reliability Engineer", (130_000, 175_000)),
    ("security engineer", "Security Engineer", (125_000, 170_000)),
    ("frontend", "Frontend Engineer", (110_000, 150_000)),
    ("front-end", "Frontend Engineer", (110_000, 150_000)),
    ("backend", "Backend Engineer", (120_000, 160_000)),
    ("back-end", "Backend Engineer", (120_000, 160_000)),
    ("full stack", "Full Stack Engineer", (115_000, 155_000)),
    ("fullstack", "Full Stack Engineer", (115_000, 155_000)),
    ("mobile", "Mobile Engineer", (115_000, 155_000)),
    ("qa engineer", "QA Engineer", (85_000, 115_000)),
    ("software engineer", "Software Engineer", (120_000, 160_000)),
    ("software developer", "Software Engineer", (110_000, 150_000)),
    ("developer", "Software Engineer", (105_000, 145_000)),
    ("engineering manager", "Engineering Manager", (165_000, 215_000)),
    ("product manager", "Product Manager", (130_000, 170_000)),
    ("project manager", "Project Manager", (90_000, 125_000)),
    ("product designer", "Product Designer", (105_000, 145_000)),
    ("ux", "UX Designer", (95_000, 130_000)),
    ("designer", "Designer", (75_000, 105_000)),
    ("marketing", "Marketing", (75_000, 110_000)),
    ("account executive", "Account Executive", (70_000, 100_000)),
    ("sales", "Sales", (60_000, 90_000)),
    ("recruiter", "Recruiter", (65_000, 90_000)),
    ("accountant", "Accountant", (65_000, 90_000)),
    ("financial analyst", "Financial Analyst", (75_000, 100_000)),
    ("nurse", "Registered Nurse", (80_000, 110_000)),
    ("customer support", "Customer Support", (45_000, 62_000)),
    ("customer service", "Customer Support", (40_000, 55_000)),
    ("engineer", "Engineer", (100_000, 140_000)),
    ("analyst", "Analyst", (70_000, 95_000)),
    ("manager", "Manager", (95_000, 135_000)),
]

# Used when no role pattern matches
DEFAULT_ROLE = "General"
DEFAULT_BASE_SALARY: Tuple[int, int] = (60_000, 90_000)


# ─────────────────────────────────────────────
# SENIORITY
# ─────────────────────────────────────────────

# LinkedIn's "Seniority level" criteria values
LINKEDIN_SENIORITY_LABELS: Dict[str, SeniorityLevel] = {
    "internship": SeniorityLevel.INTERN,
    "entry level": SeniorityLevel.JUNIOR,
    "associate": SeniorityLevel.JUNIOR,
    "mid-senior level": SeniorityLevel.SENIOR,
    "director": SeniorityLevel.DIRECTOR,
    "executive": SeniorityLevel.EXECUTIVE,
    "not applicable": SeniorityLevel.MID,
}

# Title keywords that imply seniority; checked when the page has no label
SENIORITY_TITLE_SIGNALS: Dict[str, SeniorityLevel] = {
    "intern ": SeniorityLevel.INTERN,
    "internship": SeniorityLevel.INTERN,
    "junior": SeniorityLevel.JUNIOR,
    "jr.": SeniorityLevel.JUNIOR,
    "entry level": SeniorityLevel.JUNIOR,
    "entry-level": SeniorityLevel.JUNIOR,
    "associate": SeniorityLevel.JUNIOR,
    "senior": SeniorityLevel.SENIOR,
    "sr.": SeniorityLevel.SENIOR,
    "sr ": SeniorityLevel.SENIOR,
    "staff": SeniorityLevel.STAFF_LEAD,
    "lead": SeniorityLevel.STAFF_LEAD,
    "principal": SeniorityLevel.STAFF_LEAD,
    "head of": SeniorityLevel.DIRECTOR,
    "director": SeniorityLevel.DIRECTOR,
    "vp": SeniorityLevel.EXECUTIVE,
    "vice president": SeniorityLevel.EXECUTIVE,
    "chief": SeniorityLevel.EXECUTIVE,
}

SENIORITY_MULTIPLIERS: Dict[SeniorityLevel, float] = {
    SeniorityLevel.INTERN: 0.45,
    SeniorityLevel.JUNIOR: 0.75,
    SeniorityLevel.MID: 1.0,
    SeniorityLevel.SENIOR: 1.25,
    SeniorityLevel.STAFF_LEAD: 1.5,
    SeniorityLevel.DIRECTOR: 1.75,
    SeniorityLevel.EXECUTIVE: 2.2,
}

# Bonus + equity as a share of base pay
ADDITIONAL_COMP_RATIOS: Dict[SeniorityLevel, Tuple[float, float]] = {
    SeniorityLevel.INTERN: (0.0, 0.0),
    SeniorityLevel.JUNIOR: (0.03, 0.08),
    SeniorityLevel.MID: (0.05, 0.12),
    SeniorityLevel.SENIOR: (0.10, 0.20),
    SeniorityLevel.STAFF_LEAD: (0.15, 0.30),
    SeniorityLevel.DIRECTOR: (0.20, 0.40),
    SeniorityLevel.EXECUTIVE: (0.30, 0.60),
}


# ─────────────────────────────────────────────
# LOCATION
# ─────────────────────────────────────────────

# Metro areas, matched against the parsed city (lowered)
CITY_FACTORS: Dict[str, float] = {
    "san francisco": 1.35,
    "san jose": 1.35,
    "palo alto": 1.35,
    "mountain view": 1.35,
    "new york": 1.3,
    "seattle": 1.25,
    "boston": 1.2,
    "los angeles": 1.15,
    "washington": 1.15,
    "san diego": 1.1,
    "austin": 1.05,
    "denver": 1.05,
    "chicago": 1.05,
    "atlanta": 1.0,
    "dallas": 1.0,
    "miami": 1.0,
}

# US states, matched against the parsed region (full name, lowered)
STATE_FACTORS: Dict[str, float] = {
    "california": 1.2,
    "new york": 1.15,
    "washington": 1.15,
    "massachusetts": 1.15,
    "new jersey": 1.1,
    "district of columbia": 1.15,
    "colorado": 1.05,
    "texas": 1.0,
    "florida": 0.95,
    "ohio": 0.9,
    "mississippi": 0.8,
}

# Countries, matched against the parsed country (lowered)
COUNTRY_FACTORS: Dict[str, float] = {
    "united states": 1.0,
    "united states of america": 1.0,
    "usa": 1.0,
    "remote": 1.0,
    "switzerland": 1.05,
    "canada": 0.8,
    "united kingdom": 0.75,
    "uk": 0.75,
    "australia": 0.8,
    "germany": 0.75,
    "netherlands": 0.75,
    "ireland": 0.75,
    "france": 0.65,
    "spain": 0.5,
    "poland": 0.4,
    "india": 0.25,
    "philippines": 0.2,
}

DEFAULT_LOCATION_FACTOR = 1.0

ESTIMATE_SOURCE = "Estimated from market data"
ESTIMATE_CURRENCY = "USD"
