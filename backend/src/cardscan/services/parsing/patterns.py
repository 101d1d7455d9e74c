"""
Pattern pass - regex extraction of self-describing fields.

Emails, phone numbers and websites have shapes regular enough to be
picked out of any line regardless of position or surrounding labels.
Each line is checked for all three (a line may hold several hits), and
any line with at least one hit is kept out of the heuristic pass.
"""

import logging
import re

from cardscan.domain.models import PatternCategory, PatternLineResult, PatternMatch

from .profiles import LocaleProfile

logger = logging.getLogger(__name__)

# Separators stripped from a phone match: whitespace, parentheses, hyphens
PHONE_SEPARATORS = re.compile(r'[\s()-]')

LINE_BREAKS = re.compile(r'\r\n|\r|\n')


def split_lines(text: str | None) -> list[str]:
    """
    Split OCR text into trimmed, non-empty lines in reading order.

    Example:
        split_lines("  Jane Doe \\n\\n CEO ")  # ['Jane Doe', 'CEO']
    """
    if not text:
        return []
    stripped = (line.strip() for line in LINE_BREAKS.split(text))
    return [line for line in stripped if line]


def normalize_phone(raw: str) -> str:
    """Remove whitespace, parentheses and hyphens from a phone match."""
    return PHONE_SEPARATORS.sub("", raw)


def find_emails(line: str, profile: LocaleProfile) -> list[PatternMatch]:
    """All email-shaped substrings on a line, left to right."""
    return [
        PatternMatch(PatternCategory.EMAIL, m.group(0), m.start(), m.end())
        for m in profile.email_pattern.finditer(line)
    ]


def find_phone_numbers(line: str, profile: LocaleProfile) -> list[PatternMatch]:
    """All phone-shaped substrings on a line, normalized."""
    matches = []
    for m in profile.phone_pattern.finditer(line):
        number = normalize_phone(m.group(0))
        if number:
            matches.append(PatternMatch(PatternCategory.PHONE, number, m.start(), m.end()))
    return matches


def find_websites(
    line: str,
    profile: LocaleProfile,
    emails: list[PatternMatch] | None = None,
) -> list[PatternMatch]:
    """
    All website-shaped substrings on a line, left to right.

    The domain part of an email address also looks like a bare domain,
    so spans already claimed by emails are blanked out before searching.
    """
    searchable = line
    for email in emails or []:
        searchable = (
            searchable[:email.start]
            + " " * (email.end - email.start)
            + searchable[email.end:]
        )

    return [
        PatternMatch(PatternCategory.WEBSITE, m.group(0), m.start(), m.end())
        for m in profile.website_pattern.finditer(searchable)
    ]


def classify_pattern_line(line: str, profile: LocaleProfile) -> PatternLineResult:
    """
    Run the email, phone and website checks on one line.

    Hits are returned in check order (emails, then phones, then
    websites); within each check they keep their left-to-right order.
    Deciding which website hit survives is left to the caller.

    Args:
        line: A single trimmed OCR line
        profile: Locale profile supplying the patterns

    Returns:
        PatternLineResult, UNMATCHED if no check produced a hit
    """
    emails = find_emails(line, profile)
    phones = find_phone_numbers(line, profile)
    websites = find_websites(line, profile, emails)

    result = PatternLineResult(line=line, matches=tuple(emails + phones + websites))
    if result.matched:
        logger.debug(
            f"Pattern hits: {len(emails)} email, {len(phones)} phone, "
            f"{len(websites)} website"
        )
    return result
