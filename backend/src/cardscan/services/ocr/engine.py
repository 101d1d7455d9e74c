"""
docTR OCR engine wrapper for business card text recognition.

docTR groups recognized words into lines in reading order, which is
exactly the input the contact extractor works on: one card line per
text line, top to bottom.

Design Decisions:
- Lazy model loading to avoid startup overhead
- The predictor and document loader can be injected, so the rest of the
  pipeline runs without docTR installed
- Confidence scores preserved per line for downstream review flagging
- Every failure surfaces as OCRError, which callers treat as retryable

Note: docTR requires PyTorch or TensorFlow backend. We use PyTorch.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cardscan.errors import OCRError

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = ("png", "jpg", "jpeg", "webp", "bmp", "tif", "tiff")


@dataclass
class OCRLine:
    """
    One recognized text line.

    Confidence is the mean of the word confidences on the line.
    """
    text: str
    confidence: float
    page: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/debugging."""
        return {
            "text": self.text,
            "confidence": round(self.confidence, 3),
            "page": self.page,
        }


@dataclass
class OCRResult:
    """Recognized lines of a card image, in reading order."""
    lines: list[OCRLine] = field(default_factory=list)
    processing_time_ms: float = 0
    confidence_threshold: float = 0.5

    @property
    def full_text(self) -> str:
        """All lines joined by line breaks, as the extractor expects."""
        return "\n".join(line.text for line in self.lines)

    @property
    def avg_confidence(self) -> float:
        """Average confidence across all lines."""
        if not self.lines:
            return 0.0
        return sum(line.confidence for line in self.lines) / len(self.lines)

    @property
    def low_confidence_lines(self) -> list[OCRLine]:
        """Lines with confidence below the threshold."""
        return [l for l in self.lines if l.confidence < self.confidence_threshold]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/debugging."""
        return {
            "line_count": len(self.lines),
            "avg_confidence": round(self.avg_confidence, 3),
            "processing_time_ms": round(self.processing_time_ms, 1),
            "low_confidence_count": len(self.low_confidence_lines),
            "lines": [l.to_dict() for l in self.lines],
        }


class OCREngine:
    """
    Card OCR engine using docTR.

    Example:
        engine = OCREngine()
        result = engine.recognize_file("captures/card.jpg")
        print(result.full_text)
    """

    def __init__(
        self,
        predictor: Callable[[Any], Any] | None = None,
        loader: Callable[[bytes], Any] | None = None,
        confidence_threshold: float = 0.5,
    ) -> None:
        """
        Initialize OCR engine.

        Args:
            predictor: docTR-compatible predictor. Loaded lazily if None.
            loader: Turns image bytes into the predictor's document input.
                Uses docTR's DocumentFile.from_images if None.
            confidence_threshold: Lines below this are flagged low confidence
        """
        self._model = predictor
        self._loader = loader
        self.confidence_threshold = confidence_threshold

    def _get_model(self):
        """
        Lazy load the docTR model.

        Models are loaded on first use to avoid startup overhead.
        The pretrained models are cached by docTR after first download.
        """
        if self._model is None:
            try:
                from doctr.models import ocr_predictor
            except ImportError as e:
                logger.error(f"docTR not installed: {e}")
                raise OCRError(
                    "docTR is required for OCR. Install with: pip install 'cardscan[ocr]'"
                ) from e

            logger.info("Loading docTR OCR model...")
            self._model = ocr_predictor(
                det_arch="db_resnet50",
                reco_arch="crnn_vgg16_bn",
                pretrained=True,
            )
            logger.info("docTR model loaded successfully")

        return self._model

    def _load_document(self, content: bytes):
        if self._loader is not None:
            return self._loader(content)

        try:
            from doctr.io import DocumentFile
        except ImportError as e:
            raise OCRError(
                "docTR is required for OCR. Install with: pip install 'cardscan[ocr]'"
            ) from e

        return DocumentFile.from_images(content)

    def recognize_bytes(self, content: bytes) -> OCRResult:
        """
        Recognize text lines in an image.

        Args:
            content: Raw bytes of the card image

        Returns:
            OCRResult with lines in reading order

        Raises:
            OCRError: If the backend is missing or recognition fails
        """
        if not content:
            raise OCRError("Cannot run OCR on empty image content")

        start_time = time.time()
        logger.info(f"Running OCR on image: {len(content)} bytes")

        model = self._get_model()
        try:
            doc = self._load_document(content)
            raw = model(doc)
            result = self._convert_result(raw)
        except OCRError:
            raise
        except Exception as e:
            logger.exception("OCR inference failed")
            raise OCRError(f"Text recognition failed: {e}") from e

        result.processing_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"OCR complete: {len(result.lines)} lines, "
            f"avg confidence: {result.avg_confidence:.1%}, "
            f"time: {result.processing_time_ms:.0f}ms"
        )

        low_conf = result.low_confidence_lines
        if low_conf:
            logger.warning(
                f"{len(low_conf)} lines have low confidence "
                f"(<{self.confidence_threshold:.0%}), may need review"
            )

        return result

    def recognize_file(self, file_path: Path | str) -> OCRResult:
        """
        Recognize text lines in an image file on disk.

        Raises:
            OCRError: If the file is missing, unsupported or unreadable
        """
        file_path = Path(file_path)
        suffix = file_path.suffix.lower().lstrip(".")

        if suffix not in SUPPORTED_IMAGE_TYPES:
            raise OCRError(f"Unsupported image type: {suffix or 'none'}")

        logger.info(f"Processing file: {file_path}")

        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise OCRError(f"Cannot read image {file_path}: {e}") from e

        return self.recognize_bytes(content)

    def _convert_result(self, doctr_result) -> OCRResult:
        """
        Convert docTR result to our OCRResult format.

        Each docTR line becomes one OCRLine; words are joined by spaces.
        """
        lines: list[OCRLine] = []

        for page_idx, page in enumerate(doctr_result.pages):
            for block in page.blocks:
                for line in block.lines:
                    words = [w for w in line.words if w.value.strip()]
                    if not words:
                        continue

                    text = " ".join(w.value for w in words)
                    confidence = sum(w.confidence for w in words) / len(words)
                    lines.append(OCRLine(text=text, confidence=confidence, page=page_idx))

                    logger.debug(f"Line: conf={confidence:.2f}, words={len(words)}")

        return OCRResult(lines=lines, confidence_threshold=self.confidence_threshold)
