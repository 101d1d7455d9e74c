"""
Finalization of the multi-value contact fields.

Emails are compared case-insensitively and stored lower-cased; phone
numbers are compared as exact strings after separator removal. Both keep
the order in which values were first seen.
"""

from collections.abc import Iterable


def dedupe_emails(emails: Iterable[str]) -> list[str]:
    """
    Lower-case every email and drop repeats, keeping first-seen order.
    
    Example:
        dedupe_emails(["A@x.com", "a@x.com", "b@x.com"])
        # ['a@x.com', 'b@x.com']
    """
    return list(dict.fromkeys(email.lower() for email in emails))


def dedupe_phone_numbers(numbers: Iterable[str]) -> list[str]:
    """Drop exact repeats, keeping first-seen order."""
    return list(dict.fromkeys(numbers))
