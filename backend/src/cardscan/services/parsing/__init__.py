"""
Parsing subpackage - OCR text to structured contact.
"""

from .extractor import ContactExtractor, ExtractionResult, extract_contact
from .profiles import INDIA_PROFILE, LocaleProfile, get_profile, register_profile

__all__ = [
    "ContactExtractor",
    "ExtractionResult",
    "extract_contact",
    "LocaleProfile",
    "INDIA_PROFILE",
    "get_profile",
    "register_profile",
]
