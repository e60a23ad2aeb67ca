"""
Upload validation utilities for ZipPrompt

Provides:
- Content type validation for archive uploads
- Upload size validation
"""
from typing import Iterable, Optional, Tuple
from fastapi import UploadFile

from zipprompt.core.config import settings

# =============================================================================
# File Validation
# =============================================================================

class FileValidationError(Exception):
    """Raised when file validation fails"""
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


def validate_mime_type(
    content_type: Optional[str],
    allowed_types: Optional[Iterable[str]] = None,
) -> str:
    """
    Validate the declared content type of an upload.

    Parameters such as "; charset=binary" are ignored. allowed_types defaults to
    settings.ALLOWED_ARCHIVE_MIME_TYPES.

    Returns:
        The bare, lowercased MIME type

    Raises:
        FileValidationError: If the type is missing or not allowed
    """
    if allowed_types is None:
        allowed_types = settings.ALLOWED_ARCHIVE_MIME_TYPES

    mime_type = (content_type or "").split(";")[0].strip().lower()
    allowed = {t.lower() for t in allowed_types}

    if mime_type not in allowed:
        raise FileValidationError(
            "Only ZIP files are allowed",
            {"allowed": sorted(allowed), "received": mime_type or None}
        )

    return mime_type


def validate_file_size(
    file_size: int,
    max_size: int,
    category: str = "file"
) -> None:
    """
    Validate file size against maximum.

    Args:
        file_size: Size in bytes
        max_size: Maximum size in bytes
        category: Category name for error messages

    Raises:
        FileValidationError: If file too large
    """
    if file_size > max_size:
        raise FileValidationError(
            f"File too large for {category}. Maximum size is {max_size / (1024*1024):.1f} MB",
            {"max_bytes": max_size, "received_bytes": file_size}
        )


async def validate_archive_upload(
    file: UploadFile,
    max_size: Optional[int] = None,
    allowed_types: Optional[Iterable[str]] = None,
) -> Tuple[bytes, str]:
    """
    Fully validate an uploaded archive.

    The content type is checked before the body is read. Limits left as
    None come from settings.

    Returns:
        Tuple of (content_bytes, mime_type)

    Raises:
        FileValidationError: If validation fails
    """
    if max_size is None:
        max_size = settings.max_upload_bytes

    mime_type = validate_mime_type(file.content_type, allowed_types)

    content = await file.read()
    validate_file_size(len(content), max_size, "archive")

    return content, mime_type
