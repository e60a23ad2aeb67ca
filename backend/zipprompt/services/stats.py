"""
Processing statistics shown alongside the formatted document.
"""

from dataclasses import dataclass
from typing import Dict, Union

from zipprompt.services.content_formatter import FormattedDocument

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class ProcessingStats:
    total_files: int
    total_folders: int
    lines_of_code: int
    file_size: str  # e.g. "1.4MB"
    processing_time: str  # e.g. "0.3s"

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return {
            "totalFiles": self.total_files,
            "totalFolders": self.total_folders,
            "linesOfCode": self.lines_of_code,
            "fileSize": self.file_size,
            "processingTime": self.processing_time,
        }


def format_file_size(num_bytes: int) -> str:
    return f"{num_bytes / BYTES_PER_MB:.1f}MB"


def format_duration(seconds: float) -> str:
    return f"{seconds:.1f}s"


def build_stats(document: FormattedDocument, archive_size: int, elapsed_seconds: float) -> ProcessingStats:
    """Combine the counters gathered while formatting with caller-measured size and time"""
    return ProcessingStats(
        total_files=document.total_files,
        total_folders=document.total_folders,
        lines_of_code=document.lines_of_code,
        file_size=format_file_size(archive_size),
        processing_time=format_duration(elapsed_seconds),
    )
