"""
Debug endpoints for development and testing.

These endpoints are only available when DEBUG=true.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from cardscan.api.schemas import ParseTextRequest
from cardscan.config import get_settings
from cardscan.services.parsing import ContactExtractor, get_profile
from cardscan.services.parsing.profiles import available_profiles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/debug", tags=["debug"])


def _require_debug() -> None:
    if not get_settings().debug:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Debug endpoints are disabled in production",
        )


@router.get("/profile")
async def get_profile_config(name: str | None = None):
    """Get the keyword tables and patterns of a locale profile."""
    _require_debug()
    settings = get_settings()
    
    profile = get_profile(name or settings.locale_profile)
    return {
        "available": available_profiles(),
        "profile": profile.describe(),
    }


@router.post("/trace")
async def trace_parse(request: ParseTextRequest):
    """
    Parse text and return how every line was classified.
    
    Shows which lines the pattern pass consumed and which heuristic
    category each remaining line fell into.
    """
    _require_debug()
    settings = get_settings()
    
    extractor = ContactExtractor(get_profile(request.profile or settings.locale_profile))
    result = extractor.extract_with_trace(request.text)
    
    return {
        "profile": extractor.profile.name,
        "contact": result.contact.to_dict(),
        "lines": [t.to_dict() for t in result.trace],
    }
