"""
OCR subpackage - card image to recognized text lines.
"""

from .engine import OCREngine, OCRLine, OCRResult

__all__ = ["OCREngine", "OCRLine", "OCRResult"]
