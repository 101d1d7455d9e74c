"""
Storage for captured business card images.

The capture step hands the rest of the pipeline a filesystem path to
the card photo. Uploaded photos are written here first, and OCR reads
them back from the returned path.

Design Decisions:
- Content-addressable storage using the image hash, so re-uploading the
  same photo reuses the stored file
- Uploads are opened with Pillow before being stored; anything that is
  not a readable image is rejected as a CaptureError
- Atomic writes (uniquely named temp file then replace)
"""

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from cardscan.config import get_settings
from cardscan.domain.hashing import HASH_PREFIX, compute_image_hash, verify_hash
from cardscan.errors import CaptureError

logger = logging.getLogger(__name__)

# Pillow format name -> stored file extension
IMAGE_EXTENSIONS = {
    "JPEG": ".jpg",
    "PNG": ".png",
    "WEBP": ".webp",
    "BMP": ".bmp",
    "TIFF": ".tiff",
}


@dataclass
class StoredCapture:
    """Metadata for a stored card image."""
    path: Path
    image_hash: str
    size_bytes: int
    image_format: str
    width: int
    height: int


class CaptureStore:
    """
    Local filesystem store for card photos.

    Stores images in a content-addressable structure:
    storage_path/
        ab/
            cd/
                abcd1234....jpg
    """

    def __init__(self, base_path: Path | None = None, max_bytes: int | None = None) -> None:
        """
        Initialize capture store.

        Args:
            base_path: Base directory for storage. Uses config if None.
            max_bytes: Largest accepted upload. Uses config if None.
        """
        settings = get_settings()
        self.base_path = Path(base_path or settings.storage_path)
        self.max_bytes = max_bytes or settings.max_upload_bytes
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Capture storage initialized at {self.base_path}")

    def store(self, content: bytes, filename: str = "card") -> StoredCapture:
        """
        Validate and store a card photo.

        Raises:
            CaptureError: If content is empty, too large or not an image
        """
        if not content:
            raise CaptureError("Captured image is empty")

        if len(content) > self.max_bytes:
            raise CaptureError(
                f"Captured image too large: {len(content)} bytes (max {self.max_bytes})"
            )

        image_format, width, height = self._inspect(content, filename)
        ext = IMAGE_EXTENSIONS.get(image_format)
        if ext is None:
            raise CaptureError(f"Unsupported image format: {image_format}")

        image_hash = compute_image_hash(content)
        hash_value = image_hash.removeprefix(HASH_PREFIX)
        subdir = self.base_path / hash_value[:2] / hash_value[2:4]
        subdir.mkdir(parents=True, exist_ok=True)
        file_path = subdir / f"{hash_value}{ext}"

        if file_path.exists():
            logger.info(f"Capture already stored: {file_path.name}")
        else:
            # Unique temp name per writer; concurrent uploads of one photo
            # each replace the target with identical bytes
            fd, temp_name = tempfile.mkstemp(dir=subdir, suffix=".tmp")
            temp_path = Path(temp_name)
            try:
                with os.fdopen(fd, "wb") as temp:
                    temp.write(content)
                temp_path.replace(file_path)
            except Exception:
                temp_path.unlink(missing_ok=True)
                raise
            logger.info(f"Stored capture {filename}: {len(content)} bytes as {file_path.name}")

        return StoredCapture(
            path=file_path,
            image_hash=image_hash,
            size_bytes=len(content),
            image_format=image_format,
            width=width,
            height=height,
        )

    def retrieve(self, capture: StoredCapture) -> bytes:
        """
        Read a stored capture back and verify its integrity.

        Raises:
            CaptureError: If the file is gone or no longer matches its hash
        """
        file_path = Path(capture.path)
        if not file_path.resolve().is_relative_to(self.base_path.resolve()):
            raise CaptureError("Path traversal not allowed")

        if not file_path.exists():
            raise CaptureError(f"Capture not found: {file_path}")

        content = file_path.read_bytes()
        if not verify_hash(content, capture.image_hash):
            logger.error(f"Hash mismatch for {file_path}")
            raise CaptureError("Capture integrity check failed")

        return content

    def delete(self, capture: StoredCapture) -> bool:
        """Delete a stored capture. Returns True if deleted."""
        file_path = Path(capture.path)
        if not file_path.resolve().is_relative_to(self.base_path.resolve()):
            raise CaptureError("Path traversal not allowed")

        try:
            file_path.unlink()
        except FileNotFoundError:
            return False

        # Clean up empty parent directories
        parent = file_path.parent
        while parent != self.base_path and not any(parent.iterdir()):
            parent.rmdir()
            parent = parent.parent

        return True

    @staticmethod
    def _inspect(content: bytes, filename: str) -> tuple[str, int, int]:
        """Open the bytes with Pillow; return (format, width, height)."""
        try:
            with Image.open(io.BytesIO(content)) as image:
                image.verify()
                return image.format or "", image.width, image.height
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise CaptureError(f"Not a readable image: {filename}") from e
