
from __future__ import annotations

class BlobUploadError(Exception):
    """Base class for blob upload adapter errors."""

class InvalidConfiguration(BlobUploadError):
    """Store cannot be built from the given bucket or settings."""

class InvalidArgument(BlobUploadError):
    """Call rejected locally; the backend was never contacted."""
