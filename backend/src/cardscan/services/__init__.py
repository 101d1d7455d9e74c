"""
Services package - Extraction engine and its collaborators.

Includes the contact parser, the OCR adapter, and the card scanner that
ties capture, OCR and parsing together.
"""

from .ocr import OCREngine
from .parsing import ContactExtractor
from .scanner import CardScanner

__all__ = ["CardScanner", "ContactExtractor", "OCREngine"]
