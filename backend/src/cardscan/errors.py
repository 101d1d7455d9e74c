"""
Error types raised around the extraction engine.

The extraction engine itself never fails on text input. These errors come
from the collaborators around it (capture storage, OCR, configuration)
and are mapped to HTTP responses in the API layer.
"""


class CardScanError(Exception):
    """Base class for all CardScan errors."""

    retryable: bool = False


class CaptureError(CardScanError):
    """A captured image is missing, empty, or not a readable image."""


class OCRError(CardScanError):
    """
    Text recognition failed or no OCR backend is available.

    Recoverable: the caller may retry from the capture step.
    """

    retryable = True


class UnknownProfileError(CardScanError):
    """No locale profile is registered under the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown locale profile: {name!r}. Available: {', '.join(available)}"
        )
