"""
Archive processing pipeline.
Opens an uploaded zip, builds its file tree, and produces the formatted document with statistics.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from zipprompt.core.config import settings
from zipprompt.core.logging import get_logger, log_duration
from zipprompt.services.archive import open_archive
from zipprompt.services.content_formatter import FileOutcome, format_document
from zipprompt.services.paths import detect_common_prefix
from zipprompt.services.stats import ProcessingStats, build_stats
from zipprompt.services.tree_builder import TreeNode, build_file_tree, tree_to_dicts

logger = get_logger(__name__)


@dataclass
class ProcessedOutput:
    """Everything one processing run hands back to its caller"""
    file_tree: List[TreeNode]
    formatted_content: str
    stats: ProcessingStats
    common_prefix: str = ""
    outcomes: List[FileOutcome] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileTree": tree_to_dicts(self.file_tree),
            "formattedContent": self.formatted_content,
            "stats": self.stats.to_dict(),
        }


class ArchiveProcessor:
    """Turn zip bytes into a file tree, a formatted document and stats"""

    def __init__(
        self,
        max_files: Optional[int] = None,
        max_total_size: Optional[int] = None,
        max_depth: Optional[int] = None,
    ):
        self.max_files = settings.MAX_FILES_IN_ARCHIVE if max_files is None else max_files
        self.max_total_size = (
            settings.max_total_uncompressed_bytes if max_total_size is None else max_total_size
        )
        self.max_depth = settings.MAX_PATH_DEPTH if max_depth is None else max_depth

    def process(self, zip_data: bytes, *, started_at: Optional[float] = None) -> ProcessedOutput:
        """
        Process a zip archive held in memory.

        Args:
            zip_data: Raw archive bytes
            started_at: time.perf_counter() value captured by the caller;
                defaults to when this call starts

        Returns:
            ProcessedOutput

        Raises:
            ArchiveError: If the archive cannot be opened
            ArchiveSecurityError: If the archive fails validation
        """
        if started_at is None:
            started_at = time.perf_counter()

        with log_duration("process_archive", logger, archive_bytes=len(zip_data)):
            with open_archive(zip_data, self.max_files, self.max_total_size, self.max_depth) as archive:
                common_prefix = detect_common_prefix(archive.paths)
                file_tree = build_file_tree(archive.entries, common_prefix)
                document = format_document(file_tree, archive.entries, common_prefix)

        stats = build_stats(document, len(zip_data), time.perf_counter() - started_at)

        failed = document.failed
        logger.info(
            "Archive processed",
            common_prefix=common_prefix,
            total_files=stats.total_files,
            total_folders=stats.total_folders,
            lines_of_code=stats.lines_of_code,
            embedded=len(document.embedded),
            failed=len(failed),
        )
        for outcome in failed:
            logger.debug("File not embedded", path=outcome.path, reason=outcome.reason)

        return ProcessedOutput(
            file_tree=file_tree,
            formatted_content=document.content,
            stats=stats,
            common_prefix=common_prefix,
            outcomes=document.outcomes,
        )
