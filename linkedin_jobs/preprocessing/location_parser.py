"""
Location parser: splits LinkedIn location strings into city, region, country.

Handles patterns like:
  - "Austin, TX"
  - "Bengaluru, Karnataka, India"
  - "United States"
  - "Remote" / "New York, NY (Remote)"
  - "San Francisco Bay Area" / "Greater Seattle Area"
"""

import re
from typing import Dict, Optional

# US state abbreviations → full names
US_STATES = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
}

US_STATE_NAMES = {name.lower() for name in US_STATES.values()}

# Known countries (common in LinkedIn)
KNOWN_COUNTRIES = {
    "united states", "united states of america", "usa", "us",
    "canada", "united kingdom", "uk", "ireland",
    "india", "australia", "germany", "france", "spain", "italy",
    "netherlands", "sweden", "norway", "denmark", "finland",
    "brazil", "mexico", "singapore", "japan", "china", "south korea",
    "israel", "uae", "united arab emirates", "switzerland",
    "belgium", "austria", "poland", "portugal", "czech republic",
    "new zealand", "south africa", "argentina", "colombia", "chile",
    "philippines", "indonesia", "thailand", "vietnam", "malaysia",
}

# LinkedIn metro labels → city
_METRO_AREAS = {
    "san francisco bay area": "San Francisco",
    "new york city metropolitan area": "New York",
    "greater seattle area": "Seattle",
    "greater boston": "Boston",
    "los angeles metropolitan area": "Los Angeles",
    "washington dc-baltimore area": "Washington",
    "greater chicago area": "Chicago",
    "dallas-fort worth metroplex": "Dallas",
    "denver metropolitan area": "Denver",
    "austin, texas metropolitan area": "Austin",
}

# "(Remote)", "(Hybrid)", "(On-site)" suffixes on the location line
_WORK_MODE_SUFFIX_RE = re.compile(r"\s*\((?:remote|hybrid|on-site|onsite)\)\s*$", re.IGNORECASE)

_UNITED_STATES = "United States"


def us_state_name(token: str) -> Optional[str]:
    """Full state name for "TX" / "Texas" / "texas", else None."""
    token = token.strip()
    if token.upper() in US_STATES:
        return US_STATES[token.upper()]
    if token.lower() in US_STATE_NAMES:
        return token
    return None


def is_country(token: str) -> bool:
    return token.strip().lower() in KNOWN_COUNTRIES


def parse_location(raw_location: Optional[str]) -> Dict[str, Optional[str]]:
    """
    Split a LinkedIn location line into city, region and country.

    Returns:
        dict with keys: city, region, country (None when not determinable)
    """
    city = region = country = None

    raw = _WORK_MODE_SUFFIX_RE.sub("", (raw_location or "").strip())
    parts = [p.strip() for p in raw.split(",") if p.strip()]

    if not raw_location or not raw_location.strip():
        pass
    elif not parts or re.match(r"^remote\b", raw, re.IGNORECASE):
        country = "Remote"
    elif raw.lower() in _METRO_AREAS:
        city, country = _METRO_AREAS[raw.lower()], _UNITED_STATES
    elif len(parts) == 1:
        token = parts[0]
        if is_country(token):
            country = token
        elif us_state_name(token):
            region, country = us_state_name(token), _UNITED_STATES
        else:
            city = token
    elif len(parts) == 2:
        city, tail = parts
        if us_state_name(tail):
            region, country = us_state_name(tail), _UNITED_STATES
        elif is_country(tail):
            country = tail
        else:
            region = tail
    else:
        # "Bengaluru, Karnataka, India" / "New York, NY, United States"
        city, region, country = parts[0], us_state_name(parts[1]) or parts[1], parts[-1]

    return {"city": city, "region": region, "country": country}
