"""
Archive upload and processed-output API routes
"""
from fastapi import APIRouter, Depends, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from typing import Optional
import time

from zipprompt.db.database import get_db
from zipprompt.api.helpers import ResourceNotFoundError
from zipprompt.api.schemas import UploadResponse, ProcessedOutputResponse
from zipprompt.core.config import settings
from zipprompt.core.logging import get_logger, log_archive_event
from zipprompt.services import storage
from zipprompt.services.archive import ArchiveError
from zipprompt.services.processor import ArchiveProcessor
from zipprompt.services.validators import FileValidationError, validate_archive_upload


router = APIRouter(tags=["Uploads"])
logger = get_logger(__name__)


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_archive(
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
):
    """
    Upload a zip archive and turn it into an LLM-ready document.
    Returns the file tree, the formatted document, and processing stats.
    """
    started_at = time.perf_counter()

    if file is None:
        raise FileValidationError("No file uploaded")

    zip_data, mime_type = await validate_archive_upload(
        file,
        max_size=settings.max_upload_bytes,
        allowed_types=settings.ALLOWED_ARCHIVE_MIME_TYPES,
    )

    original_name = file.filename or "archive.zip"
    upload = await storage.create_upload(
        db,
        original_name=original_name,
        file_size=len(zip_data),
        mime_type=mime_type,
    )
    upload_id = upload.id
    upload_logger = logger.bind(upload_id=upload_id, filename=original_name)

    # CPU-bound; keep it off the event loop
    processor = ArchiveProcessor()
    try:
        output = await run_in_threadpool(processor.process, zip_data, started_at=started_at)
    except ArchiveError as e:
        await db.rollback()
        log_archive_event(upload_logger, "rejected", success=False,
                          error_type=type(e).__name__, error=str(e))
        raise

    await storage.create_processed_file(db, upload_id, output)
    await db.commit()

    log_archive_event(upload_logger, "processed", **output.stats.to_dict())

    return {"uploadId": upload_id, **output.to_dict()}


@router.get("/processed/{upload_id}", response_model=ProcessedOutputResponse, response_model_exclude_none=True)
async def get_processed(
    upload_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get the stored processing result for an upload"""
    processed = await storage.get_processed_file(db, upload_id)
    if not processed:
        raise ResourceNotFoundError("Processed file", upload_id)

    return {
        "fileTree": processed.file_tree,
        "formattedContent": processed.formatted_content,
        "stats": processed.stats,
    }
