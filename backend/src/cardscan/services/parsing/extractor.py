"""
Contact extraction engine for business card OCR text.

This module turns the text recognized off a business card into a
Contact using two passes over the card's lines:
1. Pattern pass: emails, phone numbers and the website, found by regex
2. Heuristic pass: job title, company, address and name, found by
   keyword and shape rules over the lines the pattern pass left over

Extraction is a pure function of the input text. The engine keeps no
state between calls, so one instance can serve concurrent requests.
"""

import logging
from dataclasses import dataclass, field

from cardscan.domain.models import (
    Contact,
    HeuristicCategory,
    PatternCategory,
    PatternLineResult,
)

from .heuristics import classify_heuristic_line
from .normalize import dedupe_emails, dedupe_phone_numbers
from .patterns import classify_pattern_line, split_lines
from .profiles import LocaleProfile, get_profile

logger = logging.getLogger(__name__)


# Contact field filled by each single-value heuristic category
HEURISTIC_FIELDS = {
    HeuristicCategory.JOB_TITLE: "job_title",
    HeuristicCategory.COMPANY: "company",
    HeuristicCategory.NAME: "name",
}


@dataclass
class LineTrace:
    """How one card line was classified, for debugging."""
    line: str
    pattern: PatternCategory
    heuristic: HeuristicCategory = HeuristicCategory.NONE
    values: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "pattern": self.pattern.value,
            "heuristic": self.heuristic.value,
            "values": self.values,
        }


@dataclass
class ExtractionResult:
    """A contact plus the per-line trace that produced it."""
    contact: Contact
    trace: list[LineTrace] = field(default_factory=list)

    @property
    def residual_lines(self) -> list[str]:
        """Lines that went through the heuristic pass."""
        return [t.line for t in self.trace if t.pattern is PatternCategory.UNMATCHED]


class ContactExtractor:
    """
    Extracts a structured contact from business card OCR text.

    Example:
        extractor = ContactExtractor()
        contact = extractor.extract("Jane Doe\\nCEO\\njane@acme.com")
        # contact.name == "Jane Doe", contact.job_title == "CEO"
    """

    def __init__(self, profile: LocaleProfile | None = None) -> None:
        """
        Initialize extractor.

        Args:
            profile: Locale profile with keyword tables and patterns.
                Uses the default profile if None.
        """
        self.profile = profile or get_profile()

    def extract(self, text: str | None) -> Contact:
        """
        Extract a contact from OCR text.

        Never raises for text input: empty or unrecognizable text yields
        an empty Contact.
        """
        return self.extract_with_trace(text).contact

    def extract_with_trace(self, text: str | None) -> ExtractionResult:
        """Extract a contact and record how every line was classified."""
        contact = Contact()
        lines = split_lines(text)

        trace = self._pattern_pass(lines, contact)
        residual = [t for t in trace if t.pattern is PatternCategory.UNMATCHED]
        self._heuristic_pass(residual, contact)

        contact.emails = dedupe_emails(contact.emails)
        contact.phone_numbers = dedupe_phone_numbers(contact.phone_numbers)

        logger.info(
            f"Extracted contact from {len(lines)} lines "
            f"({len(residual)} free-text): "
            f"name={'yes' if contact.name else 'no'}, "
            f"{len(contact.phone_numbers)} phone, {len(contact.emails)} email, "
            f"address lines={len(contact.address_lines)}"
        )
        return ExtractionResult(contact=contact, trace=trace)

    def _pattern_pass(self, lines: list[str], contact: Contact) -> list[LineTrace]:
        """Collect emails, phones and the first website; trace every line."""
        trace: list[LineTrace] = []

        for line in lines:
            result = classify_pattern_line(line, self.profile)
            if result.matched:
                self._apply_pattern_result(result, contact)

            trace.append(LineTrace(
                line=line,
                pattern=result.category,
                values=[m.value for m in result.matches],
            ))

        return trace

    def _apply_pattern_result(self, result: PatternLineResult, contact: Contact) -> None:
        contact.emails.extend(result.values(PatternCategory.EMAIL))
        contact.phone_numbers.extend(result.values(PatternCategory.PHONE))

        websites = result.values(PatternCategory.WEBSITE)
        if websites and contact.set_if_unset("website", websites[0]):
            logger.debug(f"Website set: '{websites[0]}'")

    def _heuristic_pass(self, residual: list[LineTrace], contact: Contact) -> None:
        """
        Classify left-over lines into job title, company, address or name.

        Candidates are collected first and assigned to the contact at the
        end, so an empty candidate never overwrites an unset field.
        """
        candidates: dict[HeuristicCategory, str] = {}
        address_lines: list[str] = []

        for entry in residual:
            category = classify_heuristic_line(
                entry.line,
                self.profile,
                resolved=frozenset(candidates),
            )
            entry.heuristic = category

            if category is HeuristicCategory.ADDRESS:
                address_lines.append(entry.line)
            elif category is not HeuristicCategory.NONE:
                candidates[category] = entry.line

        for category, field_name in HEURISTIC_FIELDS.items():
            contact.set_if_unset(field_name, candidates.get(category))

        for line in address_lines:
            contact.append_address(line)


def extract_contact(text: str | None, profile: LocaleProfile | None = None) -> Contact:
    """Shortcut for ContactExtractor(profile).extract(text)."""
    return ContactExtractor(profile).extract(text)
