"""
Card scanner orchestrator service.

Coordinates the full scan pipeline:
1. Capture storage of the card photo
2. OCR of the stored image into text lines
3. Contact extraction from the recognized text

This is the primary interface for turning a card photo into a contact.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cardscan.domain.models import Contact
from cardscan.domain.validation import ValidationCheck, validate_contact_for_save
from cardscan.infrastructure.storage import CaptureStore, StoredCapture

from .ocr import OCREngine, OCRResult
from .parsing import ContactExtractor

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """
    Complete result of scanning one card.

    The contact is ready for review; checks tell the reviewer whether it
    could be saved as-is.
    """
    contact: Contact
    ocr_text: str
    ocr: OCRResult | None = None
    capture: StoredCapture | None = None
    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def saveable(self) -> bool:
        """True if the contact passes every save-time rule unedited."""
        return all(check.passed for check in self.checks)

    @property
    def review_lines(self) -> list[str]:
        """OCR lines recognized with low confidence."""
        if self.ocr is None:
            return []
        return [line.text for line in self.ocr.low_confidence_lines]


class CardScanner:
    """
    Orchestrates capture, OCR and extraction for a business card.

    Example:
        scanner = CardScanner()
        result = scanner.scan_file(Path("captures/card.jpg"))
        print(result.contact.name)
    """

    def __init__(
        self,
        extractor: ContactExtractor | None = None,
        ocr: OCREngine | None = None,
        store: CaptureStore | None = None,
    ) -> None:
        """
        Initialize scanner.

        Args:
            extractor: Contact extractor (default profile if None)
            ocr: OCR engine instance (created if None)
            store: Capture store for uploads (created on first upload if None)
        """
        self.extractor = extractor or ContactExtractor()
        self.ocr = ocr or OCREngine()
        self._store = store

    @property
    def store(self) -> CaptureStore:
        if self._store is None:
            self._store = CaptureStore()
        return self._store

    def parse_text(self, text: str | None) -> ScanResult:
        """Extract a contact from text that was already recognized."""
        contact = self.extractor.extract(text)
        return ScanResult(
            contact=contact,
            ocr_text=text or "",
            checks=validate_contact_for_save(contact),
        )

    def scan_file(self, path: Path | str) -> ScanResult:
        """
        Recognize and parse a card photo already on disk.

        Raises:
            OCRError: If recognition fails (retry from capture)
        """
        ocr_result = self.ocr.recognize_file(path)
        return self._finish(ocr_result, capture=None)

    def scan_bytes(self, content: bytes, filename: str = "card") -> ScanResult:
        """
        Store an uploaded card photo, then recognize and parse it.

        Raises:
            CaptureError: If the upload is not a usable image
            OCRError: If recognition fails (retry from capture)
        """
        capture = self.store.store(content, filename)
        logger.info(f"Scanning capture {capture.image_hash[:20]}...")

        ocr_result = self.ocr.recognize_file(capture.path)
        return self._finish(ocr_result, capture=capture)

    def _finish(self, ocr_result: OCRResult, capture: StoredCapture | None) -> ScanResult:
        text = ocr_result.full_text
        contact = self.extractor.extract(text)
        checks = validate_contact_for_save(contact)

        if not all(c.passed for c in checks):
            logger.warning("Scanned contact has no phone number or email")

        return ScanResult(
            contact=contact,
            ocr_text=text,
            ocr=ocr_result,
            capture=capture,
            checks=checks,
        )
