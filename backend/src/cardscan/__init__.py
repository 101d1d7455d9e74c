"""
CardScan - business card contact extraction.

Turns OCR text recognized off a photographed business card into a
structured contact record.
"""

__version__ = "0.1.0"
