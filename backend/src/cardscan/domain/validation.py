"""
Save-time validation rules for reviewed contacts.

Extraction never rejects a card; these rules apply later, when a
reviewed contact is about to be persisted.

Design Decisions:
- Pure functions enable easy unit testing and composition
- Each rule returns ValidationCheck with pass/fail and details
- Blank entries left behind by manual editing are ignored, not errors
"""

from dataclasses import dataclass, field, replace
from typing import Any

from .models import Contact


@dataclass
class ValidationCheck:
    """
    Result of a single validation rule.
    
    Mutable because checks are built incrementally during validation.
    """
    rule_name: str
    passed: bool
    message: str
    details: dict[str, Any] = field(default_factory=dict)


def _non_blank(values: list[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


def validate_reachable(contact: Contact) -> ValidationCheck:
    """
    Validate that the contact can actually be reached.
    
    Rule: at least one phone number or one email address.
    """
    phones = _non_blank(contact.phone_numbers)
    emails = _non_blank(contact.emails)
    passed = bool(phones or emails)
    
    return ValidationCheck(
        rule_name="reachable",
        passed=passed,
        message=(
            "Contact has a phone number or email" if passed
            else "Please enter at least one phone number or email address."
        ),
        details={
            "phone_count": len(phones),
            "email_count": len(emails),
        },
    )


def validate_contact_for_save(contact: Contact) -> list[ValidationCheck]:
    """Run every save-time rule against a reviewed contact."""
    return [validate_reachable(contact)]


def prepare_contact_for_save(contact: Contact) -> Contact:
    """
    Clean up a reviewed contact before it is persisted.
    
    Drops blank phone/email entries and trims the rest.
    
    Raises:
        ValueError: If any save-time rule fails
    """
    failed = [c for c in validate_contact_for_save(contact) if not c.passed]
    if failed:
        raise ValueError("; ".join(c.message for c in failed))
    
    return replace(
        contact,
        phone_numbers=_non_blank(contact.phone_numbers),
        emails=_non_blank(contact.emails),
    )
