"""
Contact extraction endpoints.

Handles card image upload, text parsing, and save-time validation of
reviewed contacts.
"""

import logging
from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from cardscan.api.schemas import (
    ContactSchema,
    ErrorResponse,
    ParseResponse,
    ParseTextRequest,
    SaveValidationResponse,
    ScanResponse,
    ValidationCheckResponse,
)
from cardscan.config import get_settings
from cardscan.domain.validation import prepare_contact_for_save, validate_contact_for_save
from cardscan.errors import CaptureError
from cardscan.services.ocr import OCREngine
from cardscan.services.parsing import ContactExtractor, get_profile
from cardscan.services.scanner import CardScanner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])

ALLOWED_IMAGE_TYPES = {"image/png", "image/jpeg", "image/jpg", "image/webp", "image/bmp", "image/tiff"}


# Service instance (replaced in tests via set_scanner)
_scanner: CardScanner | None = None


def get_scanner() -> CardScanner:
    """Get or create the card scanner instance."""
    global _scanner
    if _scanner is None:
        settings = get_settings()
        _scanner = CardScanner(
            extractor=ContactExtractor(get_profile(settings.locale_profile)),
            ocr=OCREngine(confidence_threshold=settings.ocr_confidence_threshold),
        )
    return _scanner


def set_scanner(scanner: CardScanner | None) -> None:
    """Swap the scanner instance (None resets to lazy creation)."""
    global _scanner
    _scanner = scanner


def _check_responses(checks) -> list[ValidationCheckResponse]:
    return [ValidationCheckResponse(**asdict(c)) for c in checks]


@router.post("/parse", response_model=ParseResponse)
async def parse_text(request: ParseTextRequest) -> ParseResponse:
    """
    Extract a contact from recognized card text.

    Useful when OCR ran on the device and only the text is uploaded.
    """
    scanner = get_scanner()
    extractor = scanner.extractor
    if request.profile:
        extractor = ContactExtractor(get_profile(request.profile))

    contact = extractor.extract(request.text)

    return ParseResponse(
        contact=ContactSchema.from_contact(contact),
        profile=extractor.profile.name,
        checks=_check_responses(validate_contact_for_save(contact)),
    )


@router.post(
    "/scan",
    response_model=ScanResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or unreadable image"},
        503: {"model": ErrorResponse, "description": "OCR unavailable or failed; retry the capture"},
    },
)
async def scan_card(
    image: Annotated[UploadFile, File(description="Business card photo (PNG/JPG)")],
) -> ScanResponse:
    """
    Upload a card photo and extract a contact from it.

    **Process:**
    1. Store the photo (content-addressed)
    2. Recognize text lines via OCR (docTR)
    3. Extract the contact from the recognized text
    """
    if image.content_type and image.content_type not in ALLOWED_IMAGE_TYPES:
        raise CaptureError(
            f"Invalid file type: {image.content_type}. Allowed: PNG, JPG, WEBP, BMP, TIFF"
        )

    content = await image.read()
    if not content:
        raise CaptureError("File is empty")

    scanner = get_scanner()
    # OCR is blocking; keep it off the event loop
    result = await run_in_threadpool(scanner.scan_bytes, content, image.filename or "card")

    return ScanResponse(
        contact=ContactSchema.from_contact(result.contact),
        profile=scanner.extractor.profile.name,
        ocr_text=result.ocr_text,
        image_hash=result.capture.image_hash if result.capture else None,
        avg_confidence=round(result.ocr.avg_confidence, 3) if result.ocr else None,
        review_lines=result.review_lines,
        checks=_check_responses(result.checks),
    )


@router.post("/validate", response_model=SaveValidationResponse)
async def validate_contact(contact: ContactSchema) -> SaveValidationResponse:
    """
    Check a reviewed contact before it is saved.

    Returns the cleaned-up contact when every rule passes.
    """
    domain_contact = contact.to_contact()
    checks = validate_contact_for_save(domain_contact)
    valid = all(c.passed for c in checks)

    return SaveValidationResponse(
        valid=valid,
        checks=_check_responses(checks),
        contact=ContactSchema.from_contact(prepare_contact_for_save(domain_contact)) if valid else None,
    )
