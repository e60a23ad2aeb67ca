"""
ZipPrompt Database Models

Module Structure:
- base.py: Base class and stored filename generator
- upload.py: Upload, ProcessedFile

Usage:
    from zipprompt.models import Upload, ProcessedFile
"""

from .base import Base, generate_stored_filename
from .upload import Upload, ProcessedFile

__all__ = [
    "Base",
    "generate_stored_filename",
    "Upload",
    "ProcessedFile",
]
