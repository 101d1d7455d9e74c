"""
Domain models for business card contact extraction.

These models represent the contact record built from OCR text and the
tagged per-line classifications produced while building it.

Design Decisions:
- Contact is a mutable dataclass because it is filled in incrementally
  during a single extraction call, then handed off
- Scalar fields follow a "set only if currently unset" rule so the first
  qualifying candidate always wins
- Line classifications are tagged enums plus payload, so the priority
  rules can be tested independently of the engine loop
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# Scalar contact fields that accept exactly one value
SCALAR_FIELDS = ("name", "job_title", "company", "website")

ADDRESS_LINE_SEPARATOR = "\n"


class PatternCategory(Enum):
    """Outcome of the pattern pass for a single hit on a line."""
    UNMATCHED = "unmatched"
    EMAIL = "email"
    PHONE = "phone"
    WEBSITE = "website"


class HeuristicCategory(Enum):
    """Outcome of the heuristic pass for a single residual line."""
    NONE = "none"
    JOB_TITLE = "job_title"
    COMPANY = "company"
    ADDRESS = "address"
    NAME = "name"


@dataclass(frozen=True)
class PatternMatch:
    """A regex hit found on a line during the pattern pass."""
    category: PatternCategory
    value: str
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class PatternLineResult:
    """
    All pattern hits for one line.

    A line with no hits is UNMATCHED and moves on to the heuristic pass.
    """
    line: str
    matches: tuple[PatternMatch, ...] = ()

    @property
    def matched(self) -> bool:
        """True if any email, phone or website hit was found."""
        return len(self.matches) > 0

    @property
    def category(self) -> PatternCategory:
        """Category of the first hit, or UNMATCHED."""
        if not self.matches:
            return PatternCategory.UNMATCHED
        return self.matches[0].category

    def values(self, category: PatternCategory) -> list[str]:
        """Hit values of one category, in line order."""
        return [m.value for m in self.matches if m.category is category]


@dataclass
class Contact:
    """
    Structured contact extracted from a business card.

    phone_numbers and emails are ordered and free of duplicates once
    extraction finishes. address may span several card lines joined
    by a line break; every other scalar holds a single line.
    """
    name: str | None = None
    job_title: str | None = None
    company: str | None = None
    phone_numbers: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    website: str | None = None
    address: str | None = None

    def set_if_unset(self, field_name: str, value: str | None) -> bool:
        """
        Assign a scalar field only if it has no value yet.

        Empty candidates never overwrite the unset state.

        Returns:
            True if the value was assigned
        """
        if field_name not in SCALAR_FIELDS:
            raise ValueError(f"Not a single-value contact field: {field_name}")
        if not value or getattr(self, field_name):
            return False
        setattr(self, field_name, value)
        return True

    def append_address(self, line: str) -> None:
        """Add a line to the accumulating address."""
        if not line:
            return
        if self.address:
            self.address = f"{self.address}{ADDRESS_LINE_SEPARATOR}{line}"
        else:
            self.address = line

    @property
    def address_lines(self) -> list[str]:
        """Address split back into its card lines."""
        if not self.address:
            return []
        return self.address.split(ADDRESS_LINE_SEPARATOR)

    @property
    def is_empty(self) -> bool:
        """True if nothing at all was extracted."""
        return not any(self.to_dict().values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for serialization."""
        return {
            "name": self.name,
            "job_title": self.job_title,
            "company": self.company,
            "phone_numbers": list(self.phone_numbers),
            "emails": list(self.emails),
            "website": self.website,
            "address": self.address,
        }

    def to_text(self) -> str:
        """
        Reconstruct card-like text from the extracted fields.

        Scalars come first, one per line, followed by the address lines,
        phone numbers, emails and website. Extracting from this text gives
        back the same name/job title/company when those were extracted in
        the first place; it is an approximate round trip, since keyword
        and pattern recognition is lossy.
        """
        lines = [v for v in (self.name, self.job_title, self.company) if v]
        lines.extend(self.address_lines)
        lines.extend(self.phone_numbers)
        lines.extend(self.emails)
        if self.website:
            lines.append(self.website)
        return "\n".join(lines)
