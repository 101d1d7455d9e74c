"""
Hashing utilities for captured card images.

Captured photos are stored under their content hash, so the same card
photographed twice maps to the same stored capture.

Design Decisions:
- SHA-256 chosen for wide support and collision resistance
- Hash computed on raw bytes to avoid encoding issues
"""

import hashlib

HASH_PREFIX = "sha256:"


def compute_image_hash(content: bytes) -> str:
    """
    Compute SHA-256 hash of image content.
    
    Args:
        content: Raw bytes of the captured image
        
    Returns:
        Hex-encoded SHA-256 hash prefixed with 'sha256:'
        
    Example:
        >>> compute_image_hash(b"card photo")
        'sha256:...'
    """
    if not content:
        raise ValueError("Cannot hash empty content")
    
    digest = hashlib.sha256(content).hexdigest()
    return f"{HASH_PREFIX}{digest}"


def verify_hash(content: bytes, expected_hash: str) -> bool:
    """
    Verify that content matches an expected hash.
    
    Used for integrity checks when reading captures back from storage.
    """
    if not expected_hash.startswith(HASH_PREFIX):
        raise ValueError(f"Invalid hash format, expected '{HASH_PREFIX}' prefix: {expected_hash}")
    
    return compute_image_hash(content) == expected_hash
