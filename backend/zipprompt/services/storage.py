"""
Persistence for upload and processing records.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from zipprompt.models import ProcessedFile, Upload
from zipprompt.services.processor import ProcessedOutput


async def create_upload(
    db: AsyncSession,
    original_name: str,
    file_size: int,
    mime_type: str,
) -> Upload:
    """Store upload metadata; the ID is assigned by the database"""
    upload = Upload(
        original_name=original_name,
        file_size=file_size,
        mime_type=mime_type,
    )
    db.add(upload)
    await db.flush()
    await db.refresh(upload)
    return upload


async def get_upload(db: AsyncSession, upload_id: int) -> Optional[Upload]:
    return await db.get(Upload, upload_id)


async def create_processed_file(
    db: AsyncSession,
    upload_id: int,
    output: ProcessedOutput,
) -> ProcessedFile:
    data = output.to_dict()
    processed = ProcessedFile(
        upload_id=upload_id,
        file_tree=data["fileTree"],
        formatted_content=data["formattedContent"],
        stats=data["stats"],
    )
    db.add(processed)
    await db.flush()
    await db.refresh(processed)
    return processed


async def get_processed_file(db: AsyncSession, upload_id: int) -> Optional[ProcessedFile]:
    """Most recent processing result for an upload"""
    result = await db.execute(
        select(ProcessedFile)
        .where(ProcessedFile.upload_id == upload_id)
        .order_by(ProcessedFile.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()
