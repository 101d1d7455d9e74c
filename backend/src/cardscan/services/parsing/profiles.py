"""
Locale profiles - the swappable keyword and pattern tables.

A profile tunes the extraction engine to one region's conventions:
phone number shape, postal code shape, address vocabulary, and the
keywords that mark job titles and company names.

Design Decisions:
- Profiles are frozen dataclasses so one instance can be shared by any
  number of concurrent extractions
- Patterns may be given as strings and are compiled once on creation
- A small registry maps profile names (e.g. "in") to instances; new
  regions are added with register_profile() instead of editing globals
"""

import logging
import re
from dataclasses import dataclass, fields, replace

from cardscan.errors import UnknownProfileError

logger = logging.getLogger(__name__)


# =============================================================================
# Patterns shared by most regions
# =============================================================================

EMAIL_PATTERN = r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,7}\b'

WEBSITE_PATTERN = (
    r'https?://(?:www\.|(?!www))[a-zA-Z0-9][a-zA-Z0-9-]+[a-zA-Z0-9]\.[^\s]{2,}'  # https://acme.com/about
    r'|www\.[a-zA-Z0-9][a-zA-Z0-9-]+[a-zA-Z0-9]\.[^\s]{2,}'  # www.acme.com
    r'|https?://[a-zA-Z0-9]+\.[^\s]{2,}'  # http://a1.io
    r'|[a-zA-Z0-9]+\.[^\s]{2,}'  # acme.co.in
)


# =============================================================================
# India
# =============================================================================

# Optional +91 / 091 / 0091 prefix, then a 10-digit mobile number or a
# 3-digit STD code followed by a 6-digit landline number
INDIA_PHONE_PATTERN = (
    r'(?:(?:\+|0{0,2})91[\s-]?)?'
    r'(?:[6-9]\d{9}|[2-8]\d{2}[\s-]?\d{6})'
)

INDIA_PINCODE_PATTERN = r'\b[1-9][0-9]{5}\b'

INDIA_JOB_TITLE_KEYWORDS = (
    "CEO", "CTO", "CFO", "COO",
    "Director", "Manager", "Engineer", "Developer", "Architect",
    "Lead", "Specialist", "Consultant", "Analyst", "Head of",
    "Founder", "President", "VP", "Executive", "Admin", "Assistant",
)

INDIA_COMPANY_KEYWORDS = (
    "Pvt Ltd", "Pvt. Ltd.", "Private Limited", "Ltd.", "Corp.", "Inc.",
    "LLC", "Sons", "Co.", "Group", "Industries", "Solutions", "Services",
    "Technologies", "Tech", "Systems", "Ventures", "Labs", "Consulting",
)

INDIA_ADDRESS_KEYWORDS = (
    "Road", "Street", "Lane", "Marg", "Nagar", "Colony", "Apartment",
    "Bldg", "Building", "Flat", "House", "Village", "City", "Dist",
    "District", "Pin", "Pincode", "Post Office", "PO Box", "Block",
    "Phase", "Sector", "Area", "Cross", "Circle",
)

INDIA_STATE_CODES = (
    "AP", "AR", "AS", "BR", "CG", "GA", "GJ", "HR", "HP", "JH", "KA",
    "KL", "MP", "MH", "MN", "ML", "MZ", "NL", "OD", "PB", "RJ", "SK",
    "TN", "TS", "TR", "UP", "UK", "WB",
)

INDIA_STATES_AND_TERRITORIES = (
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar",
    "Chhattisgarh", "Goa", "Gujarat", "Haryana", "Himachal Pradesh",
    "Jharkhand", "Karnataka", "Kerala", "Madhya Pradesh", "Maharashtra",
    "Manipur", "Meghalaya", "Mizoram", "Nagaland", "Odisha", "Punjab",
    "Rajasthan", "Sikkim", "Tamil Nadu", "Telangana", "Tripura",
    "Uttar Pradesh", "Uttarakhand", "West Bengal",
    # Union territories
    "Delhi", "Chandigarh", "Puducherry", "Lakshadweep",
    "Andaman and Nicobar Islands", "Dadra and Nagar Haveli",
    "Daman and Diu", "Jammu and Kashmir", "Ladakh",
)


@dataclass(frozen=True)
class LocaleProfile:
    """
    Keyword tables, patterns and thresholds for one region.

    Keyword checks are case-insensitive substring checks. Patterns are
    compiled on creation; pass either a string or a compiled pattern.

    Example:
        profile = get_profile("in")
        uk = profile.with_overrides(name="uk", phone_pattern=r'\\+44\\d{10}')
    """
    name: str
    job_title_keywords: tuple[str, ...]
    company_keywords: tuple[str, ...]
    address_keywords: tuple[str, ...]
    region_keywords: tuple[str, ...]
    phone_pattern: re.Pattern | str
    postal_code_pattern: re.Pattern | str
    email_pattern: re.Pattern | str = EMAIL_PATTERN
    website_pattern: re.Pattern | str = WEBSITE_PATTERN
    job_title_max_length: int = 50
    name_max_length: int = 40
    name_max_tokens: int = 4

    def __post_init__(self) -> None:
        """Compile patterns, freeze keyword lists and validate thresholds."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_pattern") and isinstance(value, str):
                object.__setattr__(self, f.name, re.compile(value))
            elif f.name.endswith("_keywords") and not isinstance(value, tuple):
                object.__setattr__(self, f.name, tuple(value))

        for threshold in ("job_title_max_length", "name_max_length", "name_max_tokens"):
            if getattr(self, threshold) < 1:
                raise ValueError(f"{threshold} must be positive, got {getattr(self, threshold)}")

    def with_overrides(self, **changes) -> "LocaleProfile":
        """Derive a new profile with some tables or thresholds replaced."""
        return replace(self, **changes)

    def describe(self) -> dict:
        """Plain-data view of the profile for debugging endpoints."""
        return {
            "name": self.name,
            "job_title_keywords": list(self.job_title_keywords),
            "company_keywords": list(self.company_keywords),
            "address_keywords": list(self.address_keywords),
            "region_keywords": list(self.region_keywords),
            "phone_pattern": self.phone_pattern.pattern,
            "postal_code_pattern": self.postal_code_pattern.pattern,
            "email_pattern": self.email_pattern.pattern,
            "website_pattern": self.website_pattern.pattern,
            "job_title_max_length": self.job_title_max_length,
            "name_max_length": self.name_max_length,
            "name_max_tokens": self.name_max_tokens,
        }


INDIA_PROFILE = LocaleProfile(
    name="in",
    job_title_keywords=INDIA_JOB_TITLE_KEYWORDS,
    company_keywords=INDIA_COMPANY_KEYWORDS,
    address_keywords=INDIA_ADDRESS_KEYWORDS,
    region_keywords=INDIA_STATE_CODES + INDIA_STATES_AND_TERRITORIES,
    phone_pattern=INDIA_PHONE_PATTERN,
    postal_code_pattern=INDIA_PINCODE_PATTERN,
)

DEFAULT_PROFILE_NAME = INDIA_PROFILE.name

_PROFILES: dict[str, LocaleProfile] = {INDIA_PROFILE.name: INDIA_PROFILE}


def register_profile(profile: LocaleProfile, replace_existing: bool = False) -> None:
    """
    Make a profile available by name.

    Raises:
        ValueError: If the name is taken and replace_existing is False
    """
    key = profile.name.lower()
    if key in _PROFILES and not replace_existing:
        raise ValueError(f"Locale profile already registered: {profile.name}")

    _PROFILES[key] = profile
    logger.info(f"Registered locale profile '{key}'")


def get_profile(name: str | None = None) -> LocaleProfile:
    """
    Look up a registered profile; the default profile if name is None.

    Raises:
        UnknownProfileError: If no profile has that name
    """
    key = (name or DEFAULT_PROFILE_NAME).lower()
    try:
        return _PROFILES[key]
    except KeyError:
        raise UnknownProfileError(key, available_profiles()) from None


def available_profiles() -> list[str]:
    """Names of all registered profiles, sorted."""
    return sorted(_PROFILES)
