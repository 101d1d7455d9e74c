"""
Pydantic schemas for API request/response validation.

These schemas define the contract between the review UI and the backend.
"""

from typing import Any

from pydantic import BaseModel, Field

from cardscan.domain.models import Contact


# =============================================================================
# Request Schemas
# =============================================================================

class ParseTextRequest(BaseModel):
    """Request to extract a contact from already-recognized text."""
    text: str = Field(
        ...,
        description="OCR text, one card line per line break",
        max_length=20_000,
    )
    profile: str | None = Field(
        default=None,
        description="Locale profile name (server default if omitted)",
    )


# =============================================================================
# Response Schemas
# =============================================================================

class ContactSchema(BaseModel):
    """Structured contact, as extracted or as edited by the reviewer."""
    name: str | None = None
    job_title: str | None = None
    company: str | None = None
    phone_numbers: list[str] = []
    emails: list[str] = []
    website: str | None = None
    address: str | None = None

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactSchema":
        return cls(**contact.to_dict())

    def to_contact(self) -> Contact:
        return Contact(**self.model_dump())


class ValidationCheckResponse(BaseModel):
    """Single validation check result."""
    rule_name: str
    passed: bool
    message: str
    details: dict[str, Any] = {}


class ParseResponse(BaseModel):
    """Response from text parsing."""
    contact: ContactSchema
    profile: str
    checks: list[ValidationCheckResponse] = []


class ScanResponse(BaseModel):
    """Response from scanning a card image."""
    contact: ContactSchema
    profile: str
    ocr_text: str
    image_hash: str | None = None
    avg_confidence: float | None = None
    review_lines: list[str] = []
    checks: list[ValidationCheckResponse] = []


class SaveValidationResponse(BaseModel):
    """Whether a reviewed contact may be saved."""
    valid: bool
    checks: list[ValidationCheckResponse]
    contact: ContactSchema | None = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    locale_profile: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: str | None = None
    retryable: bool = False
