"""
Pydantic schemas for API responses

Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============ Processing Schemas ============

class FileTreeNode(CamelModel):
    name: str
    path: str
    type: Literal["file", "folder"]
    children: Optional[List["FileTreeNode"]] = None
    size: Optional[int] = None
    extension: Optional[str] = None


# Forward reference resolution
FileTreeNode.model_rebuild()


class ProcessingStats(CamelModel):
    total_files: int
    total_folders: int
    lines_of_code: int
    file_size: str
    processing_time: str


class ProcessedOutputResponse(CamelModel):
    file_tree: List[FileTreeNode]
    formatted_content: str
    stats: ProcessingStats


class UploadResponse(ProcessedOutputResponse):
    upload_id: int
