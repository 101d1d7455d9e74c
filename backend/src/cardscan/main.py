"""
FastAPI application entry point.

This is the main application that ties together all components:
- API routes for card scanning, text parsing and contact validation
- Capture storage setup
- CORS configuration for the review UI
- Error handling and logging
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cardscan import __version__
from cardscan.api.routes import contacts, debug, health
from cardscan.config import get_settings
from cardscan.errors import CaptureError, CardScanError, OCRError, UnknownProfileError
from cardscan.services.parsing import get_profile

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup tasks:
    - Check the configured locale profile exists
    - Create the capture storage directory
    """
    settings = get_settings()

    logger.info(f"Starting CardScan v{__version__}")
    logger.info(f"Locale profile: {settings.locale_profile}")
    logger.info(f"Debug mode: {settings.debug}")

    # Fail fast on a misconfigured profile
    get_profile(settings.locale_profile)

    settings.storage_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Storage path: {settings.storage_path}")

    yield  # Application runs here

    logger.info("Shutting down CardScan")


def _error_response(status_code: int, error: str, exc: CardScanError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "detail": str(exc),
            "retryable": exc.retryable,
        },
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    app = FastAPI(
        title="CardScan API",
        description=(
            "Business card contact extraction.\n\n"
            "Turns a photographed business card into a structured contact "
            "ready for review."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(contacts.router, prefix="/api/v1")

    # Debug router (only in debug mode)
    if settings.debug:
        app.include_router(debug.router, prefix="/api/v1")

    @app.exception_handler(CaptureError)
    async def capture_error_handler(request: Request, exc: CaptureError):
        logger.warning(f"Capture rejected: {exc}")
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid Capture", exc)

    @app.exception_handler(OCRError)
    async def ocr_error_handler(request: Request, exc: OCRError):
        logger.error(f"OCR failed: {exc}")
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "OCR Failed", exc)

    @app.exception_handler(UnknownProfileError)
    async def profile_error_handler(request: Request, exc: UnknownProfileError):
        return _error_response(422, "Unknown Profile", exc)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if settings.debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": detail,
                "retryable": False,
            },
        )

    return app


# Create the application instance
app = create_app()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cardscan.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
