"""
Base model utilities for ZipPrompt

This module contains:
- SQLAlchemy Base class
- Stored filename generation utility
"""
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_stored_filename() -> str:
    """Generate a random name for an upload, independent of the client's filename"""
    return uuid.uuid4().hex
