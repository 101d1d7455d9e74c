"""
Heuristic pass - keyword and shape rules for free-text card lines.

Lines that carried no email, phone or website are classified into at
most one of job title, company, address or name. Rules are tried in
that priority order and the first one that fits claims the line.

Design Decisions:
- classify_heuristic_line() only reports a category; applying it to the
  contact (and the first-match-wins rule) is the caller's job
- Categories whose field is already resolved are skipped, except the
  address, which keeps accumulating lines
- A job-title keyword on an over-long line does not claim the line; the
  remaining checks still run on it
"""

import logging
from collections.abc import Iterable

from cardscan.domain.models import HeuristicCategory

from .profiles import LocaleProfile

logger = logging.getLogger(__name__)


def contains_keyword(line: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring check against a keyword table."""
    lowered = line.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def is_job_title(line: str, profile: LocaleProfile) -> bool:
    """Job-title keyword present and the line is short enough."""
    return (
        contains_keyword(line, profile.job_title_keywords)
        and len(line) < profile.job_title_max_length
    )


def is_company(line: str, profile: LocaleProfile) -> bool:
    """Company-suffix keyword present (Pvt Ltd, Inc., Solutions...)."""
    return contains_keyword(line, profile.company_keywords)


def is_address(line: str, profile: LocaleProfile) -> bool:
    """Street/locality keyword, postal code, or state/territory present."""
    return (
        contains_keyword(line, profile.address_keywords)
        or profile.postal_code_pattern.search(line) is not None
        or contains_keyword(line, profile.region_keywords)
    )


def is_name(line: str, profile: LocaleProfile) -> bool:
    """
    Short, capitalized, digit-free line with only a few words.

    The first character has to be an uppercase letter, so lines made of
    symbols ("-----") never qualify.
    """
    return (
        len(line) < profile.name_max_length
        and len(line.split()) <= profile.name_max_tokens
        and line[:1].isupper()
        and not any(ch.isdigit() for ch in line)
    )


def classify_heuristic_line(
    line: str,
    profile: LocaleProfile,
    resolved: frozenset[HeuristicCategory] | set[HeuristicCategory] = frozenset(),
) -> HeuristicCategory:
    """
    Classify one residual line.

    Args:
        line: A trimmed OCR line that had no pattern hits
        profile: Locale profile supplying keywords and thresholds
        resolved: Categories whose field already has a value. ADDRESS in
            this set is ignored because the address accumulates.

    Returns:
        The first category whose rule fits, or NONE
    """
    if HeuristicCategory.JOB_TITLE not in resolved and is_job_title(line, profile):
        return HeuristicCategory.JOB_TITLE

    if HeuristicCategory.COMPANY not in resolved and is_company(line, profile):
        return HeuristicCategory.COMPANY

    if is_address(line, profile):
        return HeuristicCategory.ADDRESS

    if HeuristicCategory.NAME not in resolved and is_name(line, profile):
        return HeuristicCategory.NAME

    return HeuristicCategory.NONE
