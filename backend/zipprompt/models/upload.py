"""
Upload models

Contains:
- Upload: Metadata about an uploaded archive
- ProcessedFile: The tree, formatted document and stats produced from it
"""
from sqlalchemy import (
    Column, String, Integer, DateTime, Text,
    ForeignKey, JSON, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base, generate_stored_filename


class Upload(Base):
    """
    An archive received by the upload endpoint.

    The archive bytes themselves are not kept; only what the client sent
    about them.
    """
    __tablename__ = "uploads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(64), nullable=False, default=generate_stored_filename)
    original_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(100), nullable=False)
    uploaded_at = Column(DateTime, default=func.now(), nullable=False)

    processed_files = relationship("ProcessedFile", back_populates="upload", cascade="all, delete-orphan")


class ProcessedFile(Base):
    """Output of one processing run, linked to its upload"""
    __tablename__ = "processed_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    upload_id = Column(Integer, ForeignKey("uploads.id", ondelete="CASCADE"), nullable=False)

    file_tree = Column(JSON, nullable=False)  # [{name, path, type, children?, size?, extension?}]
    formatted_content = Column(Text, nullable=False)
    stats = Column(JSON, nullable=False)  # {totalFiles, totalFolders, linesOfCode, fileSize, processingTime}

    processed_at = Column(DateTime, default=func.now(), nullable=False)

    upload = relationship("Upload", back_populates="processed_files")

    __table_args__ = (
        Index("idx_processed_file_upload", "upload_id"),
    )
